"""クイズセッション関連のデータモデル。"""

from datetime import UTC, datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from energyquiz.models.insights import InsightPayload
from energyquiz.models.quiz import CategoryTag
from energyquiz.models.results import NameVibrationResult


class _Step(BaseModel):
    model_config = ConfigDict(frozen=True)


class InitialStep(_Step):
    """名前とメールアドレスの入力待ち。"""

    kind: Literal["initial"] = "initial"


class QuestionStep(_Step):
    """index番目の質問への回答待ち。"""

    kind: Literal["question"] = "question"
    index: int = Field(ge=0)


class InterludeStep(_Step):
    """index番目の質問の後のインタールード表示中。"""

    kind: Literal["interlude"] = "interlude"
    index: int = Field(ge=0)
    interlude_key: str


class LoadingStep(_Step):
    kind: Literal["loading"] = "loading"


class ResultsStep(_Step):
    kind: Literal["results"] = "results"


class InsightsLoadingStep(_Step):
    kind: Literal["insights_loading"] = "insights_loading"


class InsightsReadyStep(_Step):
    kind: Literal["insights_ready"] = "insights_ready"


class InsightsErrorStep(_Step):
    kind: Literal["insights_error"] = "insights_error"
    message: str


class PremiumStep(_Step):
    """プレミアムページへのリダイレクト。フローの終端。"""

    kind: Literal["premium"] = "premium"
    redirect_url: str


FlowStep = Annotated[
    InitialStep
    | QuestionStep
    | InterludeStep
    | LoadingStep
    | ResultsStep
    | InsightsLoadingStep
    | InsightsReadyStep
    | InsightsErrorStep
    | PremiumStep,
    Field(discriminator="kind"),
]


class Session(BaseModel):
    """クイズセッション。1訪問者の1回のクイズ進行を表す。"""

    id: str
    name: str = ""
    email: str = ""
    step: FlowStep = Field(default_factory=InitialStep)
    answers: dict[str, str] = Field(default_factory=dict)
    name_vibration: NameVibrationResult | None = None
    dominant_energy_type: CategoryTag | None = None
    insights: InsightPayload | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
