"""インサイト生成関連のデータモデル。"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from energyquiz.models.quiz import EnergyType
from energyquiz.models.results import NameVibrationResult


class InsightRequest(BaseModel):
    """インサイト生成に渡す入力。"""

    name: str
    answers: dict[str, str]
    name_vibration: NameVibrationResult
    energy_type: EnergyType


class InsightEnergyType(BaseModel):
    """インサイト内で参照されるエナジータイプの要約。"""

    name: str
    description: str


class InsightPayload(BaseModel):
    """生成されたインサイト。外部とはcamelCaseでやり取りする。"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name_vibration: NameVibrationResult
    energy_type: InsightEnergyType
    insights: list[str] = Field(default_factory=list)
    message: str
