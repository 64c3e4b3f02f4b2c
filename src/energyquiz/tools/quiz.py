"""クイズ進行のMCPツール定義。"""

from typing import Any

from fastmcp import FastMCP

from energyquiz.models.errors import EnergyQuizError
from energyquiz.models.quiz import QuizCatalog
from energyquiz.models.session import Session
from energyquiz.services.quiz import QuizService


def session_view(session: Session, catalog: QuizCatalog) -> dict[str, Any]:
    """表示層向けにセッションの現在の状態を辞書化する。

    選択肢のカテゴリタグは結果に影響するため表示層には渡さない。
    """
    step = session.step
    view: dict[str, Any] = {
        "session_id": session.id,
        "step": step.kind,
        "answered": len(session.answers),
        "total_questions": catalog.question_count,
    }

    if step.kind == "question":
        question = catalog.questions[step.index]
        view["question"] = {
            "id": question.id,
            "text": question.text,
            "index": step.index,
            "options": [{"id": o.id, "text": o.text} for o in question.options],
        }
    elif step.kind == "interlude":
        interlude = catalog.interludes[step.interlude_key]
        view["interlude"] = interlude.model_dump()
    elif step.kind == "insights_error":
        view["error_message"] = step.message
    elif step.kind == "premium":
        view["redirect_url"] = step.redirect_url

    if session.name_vibration is not None:
        view["name_vibration"] = session.name_vibration.model_dump()
    if session.dominant_energy_type is not None:
        view["energy_type"] = catalog.energy_type(session.dominant_energy_type).model_dump()
    if session.insights is not None:
        view["insights"] = session.insights.model_dump(by_alias=True)
    return view


def register_quiz_tools(mcp: FastMCP, quiz_service: QuizService) -> None:
    """クイズ関連のMCPツールを登録する。"""
    catalog = quiz_service.flow.catalog

    @mcp.tool()
    async def create_session() -> dict[str, Any]:
        """新しいクイズセッションを作成する。

        返却されるsession_idを以降のツール呼び出しで使用します。
        """
        try:
            session = await quiz_service.create_session()
            return session_view(session, catalog)
        except EnergyQuizError as e:
            return {"error": type(e).__name__, "message": str(e)}

    @mcp.tool()
    async def submit_entry(session_id: str, name: str, email: str) -> dict[str, Any]:
        """名前とメールアドレスを送信してクイズを開始する。

        入力に不備がある場合は errors にフィールドごとのメッセージが返り、
        ステップは initial のままです。

        Args:
            session_id: セッションID。
            name: 利用者の名前。
            email: 利用者のメールアドレス。
        """
        try:
            result = await quiz_service.submit_entry(session_id, name, email)
            if not result.valid:
                return {"session_id": session_id, "step": "initial", "valid": False, "errors": result.errors}
            session = await quiz_service.get_session(session_id)
            return {"valid": True, **session_view(session, catalog)}
        except EnergyQuizError as e:
            return {"error": type(e).__name__, "message": str(e)}

    @mcp.tool()
    async def select_option(session_id: str, option_id: str) -> dict[str, Any]:
        """現在の質問に対して選択肢を選ぶ。

        Args:
            session_id: セッションID。
            option_id: 選択肢ID（例: q1-a）。
        """
        try:
            session = await quiz_service.select_option(session_id, option_id)
            return session_view(session, catalog)
        except EnergyQuizError as e:
            return {"error": type(e).__name__, "message": str(e)}

    @mcp.tool()
    async def continue_interlude(session_id: str) -> dict[str, Any]:
        """インタールードを閉じて次へ進む。

        Args:
            session_id: セッションID。
        """
        try:
            session = await quiz_service.continue_interlude(session_id)
            return session_view(session, catalog)
        except EnergyQuizError as e:
            return {"error": type(e).__name__, "message": str(e)}

    @mcp.tool()
    async def get_results(session_id: str) -> dict[str, Any]:
        """全問回答後に結果を算出して返す。

        step が loading のときに呼び出してください。集計には数秒かかります。

        Args:
            session_id: セッションID。
        """
        try:
            session = await quiz_service.await_results(session_id)
            return session_view(session, catalog)
        except EnergyQuizError as e:
            return {"error": type(e).__name__, "message": str(e)}

    @mcp.tool()
    async def request_insights(session_id: str) -> dict[str, Any]:
        """結果をもとにより詳しいインサイトを生成する。

        生成に失敗した場合は step が insights_error になります。再度呼び出すか、
        go_to_premium で先へ進めます。

        Args:
            session_id: セッションID。
        """
        try:
            session = await quiz_service.request_insights(session_id)
            return session_view(session, catalog)
        except EnergyQuizError as e:
            return {"error": type(e).__name__, "message": str(e)}

    @mcp.tool()
    async def go_to_premium(session_id: str) -> dict[str, Any]:
        """プレミアムページへのリダイレクト先を取得する。

        Args:
            session_id: セッションID。
        """
        try:
            session = await quiz_service.go_to_premium(session_id)
            return session_view(session, catalog)
        except EnergyQuizError as e:
            return {"error": type(e).__name__, "message": str(e)}

    @mcp.tool()
    async def get_session_state(session_id: str) -> dict[str, Any]:
        """セッションの現在の状態を取得する。

        Args:
            session_id: セッションID。
        """
        try:
            session = await quiz_service.get_session(session_id)
            return session_view(session, catalog)
        except EnergyQuizError as e:
            return {"error": type(e).__name__, "message": str(e)}

    @mcp.tool()
    async def end_session(session_id: str) -> dict[str, Any]:
        """セッションを破棄する。

        Args:
            session_id: セッションID。
        """
        try:
            await quiz_service.end_session(session_id)
            return {"session_id": session_id, "ended": True}
        except EnergyQuizError as e:
            return {"error": type(e).__name__, "message": str(e)}
