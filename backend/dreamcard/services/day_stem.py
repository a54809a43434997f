"""
日干 계산 (SexagenaryStemCalculator)
- 기준일 1900-01-01 (甲戌日) → 천간 인덱스 0 = 甲
- 경과 일수 mod 10 (음수도 [0,10) 로 정규화)
"""
from dataclasses import dataclass
from datetime import date
from typing import Tuple

from dreamcard.models.schemas import HeavenlyStem

EPOCH = date(1900, 1, 1)


@dataclass(frozen=True)
class HeavenlyStemRecord:
    stem: str
    element: str
    polarity: str
    keywords: Tuple[str, ...]
    description: str

    def to_schema(self) -> HeavenlyStem:
        return HeavenlyStem(
            stem=self.stem,
            element=self.element,
            polarity=self.polarity,
            keywords=list(self.keywords),
            description=self.description,
        )


# 인덱스 순서 고정 (甲乙丙丁戊己庚辛壬癸)
STEM_RECORDS: Tuple[HeavenlyStemRecord, ...] = (
    HeavenlyStemRecord(
        "甲", "wood", "yang", ("大樹", "向上心", "リーダーシップ", "一本気"),
        "大樹のように真っ直ぐ空へ伸びる向上心を持っています。曲がったことが嫌いで、責任感が強く、周囲を引っ張っていくリーダー気質です。",
    ),
    HeavenlyStemRecord(
        "乙", "wood", "yin", ("草花", "柔軟性", "協調性", "忍耐力"),
        "草花のように環境に合わせて柔軟に対応できる適応力があります。一見控えめですが、踏まれても立ち上がる芯の強さを持っています。",
    ),
    HeavenlyStemRecord(
        "丙", "fire", "yang", ("太陽", "情熱", "カリスマ", "楽観的"),
        "太陽のように周囲を明るく照らす存在です。情熱的で裏表がなく、自然と人が集まってくるカリスマ性を持っています。",
    ),
    HeavenlyStemRecord(
        "丁", "fire", "yin", ("灯火", "洞察力", "二面性", "情熱"),
        "静かに燃える灯火のように、内側に熱い情熱を秘めています。鋭い洞察力を持ち、物事の本質を見抜く力があります。",
    ),
    HeavenlyStemRecord(
        "戊", "earth", "yang", ("山", "包容力", "安定感", "マイペース"),
        "雄大な山のように、どっしりとした安定感と包容力があります。些細なことには動じず、多くの人から頼りにされる存在です。",
    ),
    HeavenlyStemRecord(
        "己", "earth", "yin", ("大地", "育成", "庶民的", "多才"),
        "作物を育てる大地のように、人を育てたり教えたりすることが得意です。親しみやすく、多才で器用な一面を持っています。",
    ),
    HeavenlyStemRecord(
        "庚", "metal", "yang", ("鉄", "決断力", "行動力", "正義感"),
        "鍛えられた鉄のように、強固な意志と決断力を持っています。正義感が強く、一度決めたことは最後までやり遂げる行動力があります。",
    ),
    HeavenlyStemRecord(
        "辛", "metal", "yin", ("宝石", "美意識", "繊細", "特別感"),
        "磨かれることで輝く宝石のように、繊細で高い美意識を持っています。独自の感性を大切にし、特別な存在でありたいと願っています。",
    ),
    HeavenlyStemRecord(
        "壬", "water", "yang", ("海", "流動性", "知恵", "スケール"),
        "広大な海のように、スケールの大きな思考と自由な心を持っています。知恵が深く、状況に合わせて形を変える柔軟性があります。",
    ),
    HeavenlyStemRecord(
        "癸", "water", "yin", ("雨", "慈愛", "癒し", "忍耐"),
        "大地を潤す恵みの雨のように、優しく慈愛に満ちた心を持っています。静かに周囲を癒やし、時間をかけて物事を成し遂げる忍耐力があります。",
    ),
)


def days_since_epoch(year: int, month: int, day: int) -> int:
    """달력 일수 차이 (시간대/시각 무관)"""
    return (date(year, month, day) - EPOCH).days


def day_stem_index(year: int, month: int, day: int) -> int:
    # Python % 는 음수도 [0,10) 반환
    return days_since_epoch(year, month, day) % 10


def calc_day_stem(year: int, month: int, day: int) -> HeavenlyStemRecord:
    """생년월일 → 日干"""
    return STEM_RECORDS[day_stem_index(year, month, day)]
