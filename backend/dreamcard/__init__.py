"""Dream Card 夢タイプ診断 backend"""
__version__ = "1.0.0"
