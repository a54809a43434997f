"""
夢タイプ(Archetype) 카탈로그
- 9종 고정 (phoenix ~ wolf)
- 우선순위(PRIORITY): 동점 판정 공통 기준
- 프로세스 기동 시 1회 로드, 이후 불변
"""
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Tuple


class Archetype(str, Enum):
    PHOENIX = "phoenix"
    KITSUNE = "kitsune"
    PEGASUS = "pegasus"
    ELEPHANT = "elephant"
    DEER = "deer"
    DRAGON = "dragon"
    TURTLE = "turtle"
    SHARK = "shark"
    WOLF = "wolf"


# 동점 판정용 고정 우선순위 (앞쪽이 우선)
PRIORITY: Tuple[Archetype, ...] = (
    Archetype.PHOENIX,
    Archetype.KITSUNE,
    Archetype.PEGASUS,
    Archetype.ELEPHANT,
    Archetype.DEER,
    Archetype.DRAGON,
    Archetype.TURTLE,
    Archetype.SHARK,
    Archetype.WOLF,
)

_PRIORITY_RANK: Dict[Archetype, int] = {a: i for i, a in enumerate(PRIORITY)}


def priority_rank(archetype: Archetype) -> int:
    return _PRIORITY_RANK[Archetype(archetype)]


def order_by_priority(archetypes: Iterable[Archetype]) -> List[Archetype]:
    """우선순위 순으로 정렬 (입력 순서와 무관)"""
    return sorted((Archetype(a) for a in archetypes), key=priority_rank)


def zero_scores() -> Dict[Archetype, float]:
    """9종 전부 0으로 초기화된 ScoreVector"""
    return {a: 0 for a in PRIORITY}


def scores_to_json(scores: Mapping[Archetype, float]) -> Dict[str, float]:
    """ScoreVector → JSON 키(str) 딕셔너리, 우선순위 순서 유지"""
    return {a.value: scores.get(a, 0) for a in PRIORITY}


@dataclass(frozen=True)
class DreamType:
    """夢タイプ 카드 정보"""
    id: Archetype
    name: str
    name_en: str
    display_name: str
    icon: str
    color: str
    frame_color: str
    card_image: str
    element: str
    personality: str
    keywords: Tuple[str, ...]
    strengths: Tuple[str, ...]
    description: str
    advice: str
    # 占術 측 요약 문구
    fortune_name: str
    fortune_character: str
    fortune_description: str

    def to_dict(self) -> dict:
        return {
            "id": self.id.value,
            "name": self.name,
            "name_en": self.name_en,
            "display_name": self.display_name,
            "icon": self.icon,
            "color": self.color,
            "frame_color": self.frame_color,
            "card_image": self.card_image,
            "element": self.element,
            "personality": self.personality,
            "keywords": list(self.keywords),
            "strengths": list(self.strengths),
            "description": self.description,
            "advice": self.advice,
        }


_DREAM_TYPES: Dict[Archetype, DreamType] = {
    Archetype.PHOENIX: DreamType(
        id=Archetype.PHOENIX,
        name="鳳凰タイプ",
        name_en="Phoenix",
        display_name="不死鳥",
        icon="🔥",
        color="#f97316",
        frame_color="#d97706",
        card_image="/cards/kinman-phoenix.png",
        element="火",
        personality="何度でも蘇る不屈の精神",
        keywords=("再生", "情熱", "復活", "不死身"),
        strengths=(
            "逆境に強い不屈の精神",
            "情熱的で周りを巻き込む力",
            "何度でも立ち上がれる回復力",
            "変化を恐れないチャレンジ精神",
        ),
        description="あなたは鳳凰のように、どんな困難からも蘇る力を持っています。炎のような情熱で道を切り開き、灰の中からでも新しい自分として生まれ変われる強さがあります。",
        advice="引き寄せノートには、過去に乗り越えた困難と、そこから得た強さを書き出してみましょう。あなたの不死鳥の力が、さらに大きな夢を引き寄せます。",
        fortune_name="鳳凰（Phoenix）",
        fortune_character="情熱・再生・挑戦",
        fortune_description="情熱的で何度も立ち上がる力を持つ。新しい挑戦を恐れず、困難から学ぶ",
    ),
    Archetype.KITSUNE: DreamType(
        id=Archetype.KITSUNE,
        name="九尾狐タイプ",
        name_en="Nine-Tailed Fox",
        display_name="妖狐",
        icon="🦊",
        color="#94a3b8",
        frame_color="#64748b",
        card_image="/cards/kinman-kitsune.png",
        element="月",
        personality="深い知恵と神秘的な直感",
        keywords=("神秘", "知恵", "直感", "変化"),
        strengths=(
            "鋭い直感と洞察力",
            "状況を読む知恵",
            "柔軟な変化対応力",
            "神秘的な魅力",
        ),
        description="あなたは九尾の狐のように、深い知恵と神秘的な直感を持っています。月明かりのように静かに、しかし確実に道を照らし、見えないものを感じ取る力があります。",
        advice="引き寄せノートには、直感で感じたことを素直に書き留めましょう。月夜に静かにノートと向き合う時間が、あなたの引き寄せ力を高めます。",
        fortune_name="狐（Kitsune）",
        fortune_character="直感・知恵・変化",
        fortune_description="直感が鋭く、知恵と柔軟性を活かして状況を読む。変化を味方にする",
    ),
    Archetype.PEGASUS: DreamType(
        id=Archetype.PEGASUS,
        name="ペガサスタイプ",
        name_en="Pegasus",
        display_name="天馬",
        icon="🦄",
        color="#fbbf24",
        frame_color="#d4a574",
        card_image="/cards/kinman-pegasus.png",
        element="天",
        personality="天高く舞う理想主義者",
        keywords=("自由", "理想", "飛翔", "純粋"),
        strengths=(
            "高い理想と目標設定力",
            "自由な発想と創造性",
            "純粋で汚れのない心",
            "人々に希望を与える力",
        ),
        description="あなたはペガサスのように、雲の上を自由に駆ける理想主義者です。純粋な心で高い目標を掲げ、誰もが無理だと思う夢でも軽々と叶えてしまう力があります。",
        advice="引き寄せノートには、誰にも遠慮せず、一番高い理想を書いてください。「無理かも」という思いは脇に置いて、空を自由に飛ぶペガサスのように。",
        fortune_name="ペガサス（Pegasus）",
        fortune_character="自由・理想・飛躍",
        fortune_description="自由を求め、理想を高く掲げ、大きく飛躍する。制限を超える力",
    ),
    Archetype.ELEPHANT: DreamType(
        id=Archetype.ELEPHANT,
        name="聖象タイプ",
        name_en="Sacred Elephant",
        display_name="聖象",
        icon="🐘",
        color="#9f1239",
        frame_color="#881337",
        card_image="/cards/kinman-elephant.png",
        element="地",
        personality="確かな足取りで幸運を運ぶ",
        keywords=("繁栄", "幸運", "安定", "守護"),
        strengths=(
            "安定感と信頼性",
            "着実に目標を達成する力",
            "周りに繁栄をもたらす",
            "記憶力と学習能力の高さ",
        ),
        description="あなたは聖象のように、どっしりとした安定感と幸運を運ぶ力を持っています。一歩一歩確実に進み、周りの人にも豊かさと繁栄をもたらす存在です。",
        advice="引き寄せノートには、叶えたい夢の具体的なステップを書き出しましょう。聖象のように一歩ずつ確実に、でも大きな夢を着実に引き寄せていきます。",
        fortune_name="象（Elephant）",
        fortune_character="安定・繁栄・信頼",
        fortune_description="安定した基盤を築き、着実に繁栄させる。信頼と安心感を与える",
    ),
    Archetype.DEER: DreamType(
        id=Archetype.DEER,
        name="神鹿タイプ",
        name_en="Sacred Deer",
        display_name="神鹿",
        icon="🦌",
        color="#84cc16",
        frame_color="#65a30d",
        card_image="/cards/kinman-deer.png",
        element="森",
        personality="森と共に生きる穏やかな魂",
        keywords=("優美", "調和", "成長", "純真"),
        strengths=(
            "自然体で人を癒す力",
            "調和を大切にする心",
            "静かな中に秘めた強さ",
            "成長を促す穏やかさ",
        ),
        description="あなたは神鹿のように、自然と調和し優美に生きる力を持っています。穏やかでありながら芯が強く、周りの人を癒しながら共に成長していける存在です。",
        advice="引き寄せノートには、感謝の気持ちと穏やかな未来像を書きましょう。森の中で静かに過ごす鹿のように、心を落ち着けてノートと向き合う時間を大切に。",
        fortune_name="鹿（Deer）",
        fortune_character="優美・調和・成長",
        fortune_description="優雅さと調和を大切にしながら、着実に成長する。柔軟な強さ",
    ),
    Archetype.DRAGON: DreamType(
        id=Archetype.DRAGON,
        name="青龍タイプ",
        name_en="Azure Dragon",
        display_name="龍神",
        icon="🐉",
        color="#0d9488",
        frame_color="#0f766e",
        card_image="/cards/kinman-dragon.png",
        element="水",
        personality="天へと昇る叡智の守護者",
        keywords=("叡智", "成功", "上昇", "威厳"),
        strengths=(
            "深い叡智と判断力",
            "上昇志向と成功への道筋",
            "威厳と信頼される存在感",
            "柔軟性と決断力の両立",
        ),
        description="あなたは青龍のように、深い叡智と上昇する力を持っています。水のように柔軟でありながら、一度決めたら天まで昇る勢いで目標を達成する力があります。",
        advice="引き寄せノートには、自分が成功した姿を具体的にイメージして書きましょう。龍のように天高く昇る自分の姿を、克明に描いてください。",
        fortune_name="龍（Dragon）",
        fortune_character="権威・成功・リーダーシップ",
        fortune_description="強い意志と統率力で目標を達成。周囲を導き、成功をもたらす",
    ),
    Archetype.TURTLE: DreamType(
        id=Archetype.TURTLE,
        name="玄武タイプ",
        name_en="Divine Turtle",
        display_name="霊亀",
        icon="🐢",
        color="#22c55e",
        frame_color="#16a34a",
        card_image="/cards/kinman-turtle.png",
        element="大地",
        personality="悠久の時を見守る賢者",
        keywords=("長寿", "守護", "堅実", "智慧"),
        strengths=(
            "長期的な視点と計画性",
            "忍耐強さと持続力",
            "守る力と安心感",
            "経験に基づく深い智慧",
        ),
        description="あなたは玄武のように、長い時間をかけて確実に夢を叶える力を持っています。焦らず急がず、でも着実に。深い智慧で人生の道を見極めます。",
        advice="引き寄せノートには、5年後、10年後の長期的な夢も書いてみましょう。玄武のようにゆっくりでも確実に、大きな夢を引き寄せていきます。",
        fortune_name="亀（Turtle）",
        fortune_character="忍耐・長寿・着実",
        fortune_description="長期的視点で着実に進む。忍耐強く、安定した成長を実現",
    ),
    Archetype.SHARK: DreamType(
        id=Archetype.SHARK,
        name="宇宙鮫タイプ",
        name_en="Celestial Shark",
        display_name="鯱王",
        icon="🦈",
        color="#3b82f6",
        frame_color="#2563eb",
        card_image="/cards/kinman-shark.png",
        element="宇宙",
        personality="宇宙を泳ぐ直感のハンター",
        keywords=("突破", "集中", "本能", "無限"),
        strengths=(
            "圧倒的な集中力",
            "チャンスを逃さない嗅覚",
            "目標への一直線の突破力",
            "無限の可能性を感じる力",
        ),
        description="あなたは宇宙鮫のように、無限の可能性の中を自由に泳ぎ、チャンスを逃さない鋭い本能を持っています。集中力と突破力で、目標を確実に捉えます。",
        advice="引き寄せノートには、今一番欲しいものに集中して書きましょう。宇宙鮫のように、一点突破で夢を掴み取る意識を持ってください。",
        fortune_name="鯱（Shark）",
        fortune_character="集中・突破・目標達成",
        fortune_description="目標に集中し、一気に突破する。強い決断力と実行力",
    ),
    Archetype.WOLF: DreamType(
        id=Archetype.WOLF,
        name="銀狼タイプ",
        name_en="Silver Wolf",
        display_name="月狼",
        icon="🐺",
        color="#a855f7",
        frame_color="#9333ea",
        card_image="/cards/kinman-wolf.png",
        element="風",
        personality="群れを率いる孤高のリーダー",
        keywords=("仲間", "直感", "自立", "忠誠"),
        strengths=(
            "自立心と独立精神",
            "仲間への深い忠誠心",
            "鋭い直感と警戒心",
            "リーダーシップ能力",
        ),
        description="あなたは銀狼のように、自立心を持ちながらも仲間を大切にする力を持っています。一人でも強く、仲間と共にいればさらに強くなれる存在です。",
        advice="引き寄せノートには、あなたの夢を一緒に叶えたい仲間のことも書いてみましょう。銀狼のように、孤高でありながら絆を大切にする引き寄せを。",
        fortune_name="狼（Wolf）",
        fortune_character="仲間・絆・直感",
        fortune_description="仲間との絆を大切にし、集団の力を活かす。直感と信頼",
    ),
}

DREAM_TYPES: Mapping[Archetype, DreamType] = MappingProxyType(_DREAM_TYPES)


def get_dream_type(archetype: Archetype) -> DreamType:
    return DREAM_TYPES[Archetype(archetype)]
