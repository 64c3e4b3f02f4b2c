"""クイズセッションの管理とフロー制御を行うサービス。"""

import asyncio
import contextlib
import logging
import uuid

from energyquiz.insights.client import InsightsProvider
from energyquiz.models.errors import InsightsFetchError, SessionNotFoundError
from energyquiz.models.insights import InsightPayload
from energyquiz.models.results import EntryResult
from energyquiz.models.session import Session
from energyquiz.services.flow import QuizFlow
from energyquiz.storage.service import SessionStore

logger = logging.getLogger(__name__)

INSIGHTS_ERROR_MESSAGE = "Failed to connect to the spiritual realm"


class QuizService:
    """セッションIDを単位としてクイズの進行を管理する。

    遷移の判定は QuizFlow に委譲し、本クラスはセッションの読み書き、
    loadingステップの待機、インサイト取得の呼び出しを担う。
    """

    def __init__(
        self,
        store: SessionStore,
        flow: QuizFlow,
        insights_client: InsightsProvider,
        *,
        loading_delay: float = 4.0,
        premium_url: str = "/premium",
    ) -> None:
        self._store = store
        self._flow = flow
        self._insights_client = insights_client
        self._loading_delay = loading_delay
        self._premium_url = premium_url

    @property
    def flow(self) -> QuizFlow:
        return self._flow

    async def create_session(self) -> Session:
        """新しいクイズセッションを作成する。

        Returns:
            initialステップのセッション。
        """
        session = Session(id=str(uuid.uuid4()))
        await self._store.save_session(session)
        logger.info("Session %s created", session.id)
        return session

    async def get_session(self, session_id: str) -> Session:
        """セッションを取得する。

        Raises:
            SessionNotFoundError: セッションが存在しない場合。
        """
        return await self._store.load_session(session_id)

    async def submit_entry(self, session_id: str, name: str, email: str) -> EntryResult:
        """エントリーフォームを送信する。

        Args:
            session_id: セッションID。
            name: 表示名。
            email: 連絡先メールアドレス。

        Returns:
            検証結果。成功時はバイブレーションナンバーを含む。

        Raises:
            SessionNotFoundError: セッションが存在しない場合。
            InvalidTransitionError: initialステップ以外で呼び出された場合。
        """
        session = await self._store.load_session(session_id)
        result = self._flow.submit_entry(session, name, email)
        if result.valid:
            await self._store.save_session(session)
        return result

    async def select_option(self, session_id: str, option_id: str) -> Session:
        """現在の質問に回答する。

        Raises:
            SessionNotFoundError: セッションが存在しない場合。
            InvalidTransitionError: questionステップ以外で呼び出された場合。
            OptionNotFoundError: 現在の質問に存在しない選択肢の場合。
        """
        session = await self._store.load_session(session_id)
        self._flow.select_option(session, option_id)
        await self._store.save_session(session)
        return session

    async def continue_interlude(self, session_id: str) -> Session:
        session = await self._store.load_session(session_id)
        self._flow.continue_interlude(session)
        await self._store.save_session(session)
        return session

    async def await_results(self, session_id: str) -> Session:
        """loadingステップの待機を経て結果を確定する。

        結果が既に確定しているセッションでは待機せずにそのまま返す。

        Raises:
            SessionNotFoundError: セッションが存在しない場合。
            InvalidTransitionError: 回答が完了していない場合。
        """
        session = await self._store.load_session(session_id)
        if session.dominant_energy_type is not None:
            return session

        # 不正なステップでは待たずにエラーにする
        self._flow.ensure_loading(session)
        if self._loading_delay > 0:
            await asyncio.sleep(self._loading_delay)

        session = await self._store.load_session(session_id)
        if session.dominant_energy_type is None:
            self._flow.complete_loading(session)
            await self._store.save_session(session)
        return session

    async def request_insights(self, session_id: str) -> Session:
        """インサイトを取得する。

        取得に失敗した場合は insights_error ステップへ遷移する。算出済みの
        バイブレーションナンバーとエナジータイプは変更しない。取得がキャンセル
        された場合も insights_error にしてからキャンセルを伝播する。

        Raises:
            SessionNotFoundError: セッションが存在しない場合、または取得中に
                セッションが破棄された場合。
            InvalidTransitionError: 結果確定前に呼び出された場合。
        """
        session = await self._store.load_session(session_id)
        request = self._flow.begin_insights(session)
        await self._store.save_session(session)

        try:
            payload = await self._insights_client.fetch(request)
        except InsightsFetchError as e:
            logger.warning("Session %s: insight fetch failed: %s", session_id, e)
            return await self._settle_insights(session_id, None)
        except asyncio.CancelledError:
            # キャンセル時も insights_loading に残さない
            logger.warning("Session %s: insight fetch cancelled", session_id)
            with contextlib.suppress(SessionNotFoundError):
                await self._settle_insights(session_id, None)
            raise
        except Exception:
            logger.exception("Session %s: unexpected error during insight fetch", session_id)
            return await self._settle_insights(session_id, None)

        return await self._settle_insights(session_id, payload)

    async def _settle_insights(self, session_id: str, payload: InsightPayload | None) -> Session:
        """取得中に破棄されたセッションを復活させないよう、再読み込みしてから結果を反映する。"""
        session = await self._store.load_session(session_id)
        if payload is None:
            self._flow.fail_insights(session, INSIGHTS_ERROR_MESSAGE)
        else:
            self._flow.resolve_insights(session, payload)
        await self._store.save_session(session)
        return session

    async def go_to_premium(self, session_id: str) -> Session:
        session = await self._store.load_session(session_id)
        self._flow.go_to_premium(session, self._premium_url)
        await self._store.save_session(session)
        return session

    async def end_session(self, session_id: str) -> None:
        """セッションを破棄する。"""
        await self._store.load_session(session_id)
        await self._store.delete_session(session_id)
        logger.info("Session %s ended", session_id)
