"""クイズの進行を制御する状態機械。

各遷移関数は Session を受け取り、許可されたステップからの操作であれば
そのセッションのみを更新する。許可されない操作は InvalidTransitionError を
送出し、セッションは変更しない。

    initial -> question(0) -> [interlude] -> question(1) -> ... -> loading
        -> results -> insights_loading -> insights_ready | insights_error
        -> premium
"""

import logging
import re
from datetime import UTC, datetime

from energyquiz.models.errors import (
    AnswerAlreadyRecordedError,
    InvalidTransitionError,
    OptionNotFoundError,
)
from energyquiz.models.insights import InsightPayload, InsightRequest
from energyquiz.models.quiz import QuizCatalog, interlude_key
from energyquiz.models.results import EntryResult
from energyquiz.models.session import (
    FlowStep,
    InsightsErrorStep,
    InsightsLoadingStep,
    InsightsReadyStep,
    InterludeStep,
    LoadingStep,
    PremiumStep,
    QuestionStep,
    ResultsStep,
    Session,
)
from energyquiz.scoring.classifier import classify_energy
from energyquiz.scoring.vibration import calculate_name_vibration

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"\S+@\S+\.\S+")

NAME_REQUIRED = "Please enter your name"
EMAIL_REQUIRED = "Please enter your email"
EMAIL_INVALID = "Please enter a valid email address"


def validate_entry(name: str, email: str) -> dict[str, str]:
    """エントリーフォームを検証し、フィールドごとのエラーを返す。"""
    errors: dict[str, str] = {}
    if not name.strip():
        errors["name"] = NAME_REQUIRED
    if not email.strip():
        errors["email"] = EMAIL_REQUIRED
    elif not _EMAIL_RE.search(email):
        errors["email"] = EMAIL_INVALID
    return errors


class QuizFlow:
    """クイズの遷移関数群。状態はすべて Session 側に持つ。"""

    def __init__(self, catalog: QuizCatalog) -> None:
        self._catalog = catalog

    @property
    def catalog(self) -> QuizCatalog:
        return self._catalog

    def _require(self, session: Session, action: str, *kinds: str) -> None:
        if session.step.kind not in kinds:
            raise InvalidTransitionError(session.id, action, session.step.kind)

    def _move(self, session: Session, step: FlowStep) -> None:
        previous = session.step.kind
        session.step = step
        session.updated_at = datetime.now(UTC)
        logger.info("Session %s: %s -> %s", session.id, previous, session.step.kind)

    def _advance_after(self, session: Session, index: int) -> None:
        """index番目の質問を終えた後、次の質問またはloadingへ進む。"""
        if index < self._catalog.question_count - 1:
            self._move(session, QuestionStep(index=index + 1))
            return
        # 全問回答済みでなければloadingへは進めない
        if len(session.answers) != self._catalog.question_count:
            raise InvalidTransitionError(session.id, "enter_loading", session.step.kind)
        self._move(session, LoadingStep())

    def submit_entry(self, session: Session, name: str, email: str) -> EntryResult:
        """名前とメールアドレスを受け付ける。

        検証に成功した場合はバイブレーションナンバーを算出して最初の質問へ進む。
        失敗した場合はステップを変えず、フィールドごとのエラーを返す。
        """
        self._require(session, "submit_entry", "initial")

        errors = validate_entry(name, email)
        if errors:
            logger.info("Session %s: entry rejected (%s)", session.id, ", ".join(sorted(errors)))
            return EntryResult(valid=False, errors=errors)

        session.name = name.strip()
        session.email = email.strip()
        session.name_vibration = calculate_name_vibration(name)
        self._move(session, QuestionStep(index=0))
        return EntryResult(valid=True, name_vibration=session.name_vibration)

    def select_option(self, session: Session, option_id: str) -> None:
        """現在の質問に対する選択肢を記録し、次のステップへ進む。"""
        self._require(session, "select_option", "question")
        index = session.step.index  # type: ignore[union-attr]
        question = self._catalog.questions[index]

        option = question.find_option(option_id)
        if option is None:
            raise OptionNotFoundError(question.id, option_id)
        if question.id in session.answers:
            raise AnswerAlreadyRecordedError(session.id, question.id)

        session.answers[question.id] = option.value

        if self._catalog.interlude_after(question.id) is not None:
            self._move(session, InterludeStep(index=index, interlude_key=interlude_key(question.id)))
        else:
            self._advance_after(session, index)

    def continue_interlude(self, session: Session) -> None:
        """インタールードを閉じて次の質問またはloadingへ進む。"""
        self._require(session, "continue_interlude", "interlude")
        self._advance_after(session, session.step.index)  # type: ignore[union-attr]

    def ensure_loading(self, session: Session) -> None:
        """セッションがloadingステップにあることを確認する。"""
        self._require(session, "get_results", "loading")

    def complete_loading(self, session: Session) -> None:
        """回答を集計して支配的エナジータイプを確定し、結果ステップへ進む。"""
        self._require(session, "complete_loading", "loading")
        session.dominant_energy_type = classify_energy(session.answers)
        self._move(session, ResultsStep())

    def begin_insights(self, session: Session) -> InsightRequest:
        """インサイト取得を開始し、外部に渡すリクエストを返す。

        エラー後の再試行のため insights_error からも開始できる。
        """
        self._require(session, "request_insights", "results", "insights_error")
        if session.name_vibration is None or session.dominant_energy_type is None:
            raise InvalidTransitionError(session.id, "request_insights", session.step.kind)
        request = InsightRequest(
            name=session.name,
            answers=dict(session.answers),
            name_vibration=session.name_vibration,
            energy_type=self._catalog.energy_type(session.dominant_energy_type),
        )
        session.insights = None
        self._move(session, InsightsLoadingStep())
        return request

    def resolve_insights(self, session: Session, payload: InsightPayload) -> None:
        self._require(session, "resolve_insights", "insights_loading")
        session.insights = payload
        self._move(session, InsightsReadyStep())

    def fail_insights(self, session: Session, message: str) -> None:
        self._require(session, "fail_insights", "insights_loading")
        self._move(session, InsightsErrorStep(message=message))

    def go_to_premium(self, session: Session, redirect_url: str) -> None:
        """プレミアムページへのリダイレクトを指示する。回答・結果は変更しない。"""
        self._require(session, "go_to_premium", "insights_ready", "insights_error")
        self._move(session, PremiumStep(redirect_url=redirect_url))
