"""回答からの支配的エナジータイプの判定。"""

from collections.abc import Mapping

from energyquiz.models.quiz import CATEGORY_ORDER, CategoryTag

DEFAULT_ENERGY_TYPE: CategoryTag = "water"


def tally_answers(answers: Mapping[str, str]) -> dict[CategoryTag, int]:
    """回答値をカテゴリごとに集計する。未知の値は無視する。"""
    counts: dict[CategoryTag, int] = {tag: 0 for tag in CATEGORY_ORDER}
    for value in answers.values():
        if value in counts:
            counts[value] += 1  # type: ignore[index]
    return counts


def classify_energy(answers: Mapping[str, str]) -> CategoryTag:
    """最も多く選ばれたカテゴリを返す。

    CATEGORY_ORDER の順に走査し、現在の最大値を厳密に上回った場合のみ
    更新するため、同点の場合は先に宣言されたカテゴリが選ばれる。
    回答が空の場合は water を返す。
    """
    dominant = DEFAULT_ENERGY_TYPE
    max_count = 0
    for tag, count in tally_answers(answers).items():
        if count > max_count:
            dominant = tag
            max_count = count
    return dominant
