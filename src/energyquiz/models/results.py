"""スコアリング結果のデータモデル。"""

from pydantic import BaseModel, ConfigDict, Field


class NameVibrationResult(BaseModel):
    """名前から算出されたバイブレーションナンバー。"""

    model_config = ConfigDict(frozen=True)

    number: int
    description: str


class EntryResult(BaseModel):
    """エントリーフォーム送信の検証結果。

    errors はフィールド名 (name / email) からエラーメッセージへの対応。
    """

    valid: bool
    errors: dict[str, str] = Field(default_factory=dict)
    name_vibration: NameVibrationResult | None = None
