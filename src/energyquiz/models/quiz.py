"""クイズ定義（質問・選択肢・インタールード・エナジータイプ）のデータモデル。"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

CategoryTag = Literal["water", "fire", "earth", "air"]

# 同点時はこの順序で先に最大値へ到達したタグが勝つ
CATEGORY_ORDER: tuple[CategoryTag, ...] = ("water", "fire", "earth", "air")

INTERLUDE_KEY_PREFIX = "after-"


class Option(BaseModel):
    """質問の選択肢。"""

    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    value: CategoryTag


class Question(BaseModel):
    """クイズの質問。"""

    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    options: list[Option] = Field(min_length=1)

    def find_option(self, option_id: str) -> Option | None:
        """IDに一致する選択肢を返す。"""
        return next((o for o in self.options if o.id == option_id), None)


class Interlude(BaseModel):
    """質問の間に表示する補足コンテンツ。"""

    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    statistic: str | None = None


class EnergyType(BaseModel):
    """エナジータイプのカタログエントリ。"""

    model_config = ConfigDict(frozen=True)

    id: CategoryTag
    name: str
    description: str
    characteristics: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


def interlude_key(question_id: str) -> str:
    """質問IDに対応するインタールードのキーを返す。"""
    return f"{INTERLUDE_KEY_PREFIX}{question_id}"


class QuizCatalog(BaseModel):
    """起動時に読み込まれる静的なクイズ定義一式。"""

    model_config = ConfigDict(frozen=True)

    questions: list[Question]
    interludes: dict[str, Interlude] = Field(default_factory=dict)
    energy_types: dict[CategoryTag, EnergyType]

    @property
    def question_count(self) -> int:
        return len(self.questions)

    def interlude_after(self, question_id: str) -> Interlude | None:
        """指定された質問の後に表示するインタールードを返す。存在しなければNone。"""
        return self.interludes.get(interlude_key(question_id))

    def energy_type(self, tag: CategoryTag) -> EnergyType:
        return self.energy_types[tag]
