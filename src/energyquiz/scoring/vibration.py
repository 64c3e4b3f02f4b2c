"""名前のバイブレーションナンバー（ピタゴラス式数秘術）の算出。"""

import re

from energyquiz.models.results import NameVibrationResult

# マスターナンバーは1桁への還元を行わない
MASTER_NUMBERS = frozenset({11, 22})

EMPTY_NAME_DESCRIPTION = "Please enter your name to calculate your vibration"
UNKNOWN_DESCRIPTION = "Unknown vibration"

VIBRATION_DESCRIPTIONS: dict[int, str] = {
    0: EMPTY_NAME_DESCRIPTION,
    1: "The Leader: Independent, original, self-sufficient, and ambitious",
    2: "The Diplomat: Cooperative, adaptable, considerate of others, and sensitive",
    3: "The Expressive: Creative, optimistic, inspiring, and joyful",
    4: "The Builder: Practical, trustworthy, disciplined, and hardworking",
    5: "The Freedom Seeker: Versatile, adventurous, progressive, and sensual",
    6: "The Nurturer: Responsible, loving, protective, and healing",
    7: "The Seeker: Analytical, introspective, perfectionist, and wisdom-oriented",
    8: "The Achiever: Ambitious, goal-oriented, status-conscious, and powerful",
    9: "The Humanitarian: Compassionate, generous, selfless, and idealistic",
    11: "The Intuitive: Highly intuitive, idealistic, inspirational, and visionary",
    22: "The Master Builder: Practical visionary, capable of manifesting grand ideas",
}

_NON_LETTER_RE = re.compile(r"[^A-Za-z]")


def describe_vibration(number: int) -> str:
    """バイブレーションナンバーの説明文を返す。表にない値は "Unknown vibration"。"""
    return VIBRATION_DESCRIPTIONS.get(number, UNKNOWN_DESCRIPTION)


def reduce_number(total: int) -> int:
    """桁の和を繰り返し取り、1桁またはマスターナンバーになるまで還元する。"""
    while total > 9 and total not in MASTER_NUMBERS:
        total = sum(int(digit) for digit in str(total))
    return total


def calculate_name_vibration(name: str) -> NameVibrationResult:
    """名前からバイブレーションナンバーを算出する。

    ASCII英字以外を除去して大文字化し、各文字のアルファベット順位
    (A=1 ... Z=26) を合計した値を還元する。英字が1文字も残らない場合は
    番号0の結果を返す。

    Args:
        name: 利用者が入力した名前。

    Returns:
        番号と説明文。
    """
    letters = _NON_LETTER_RE.sub("", name or "").upper()
    if not letters:
        return NameVibrationResult(number=0, description=EMPTY_NAME_DESCRIPTION)

    total = sum(ord(letter) - ord("A") + 1 for letter in letters)
    number = reduce_number(total)
    return NameVibrationResult(number=number, description=describe_vibration(number))
