"""プロセス内メモリ上のセッションストア。"""

from energyquiz.models.errors import SessionNotFoundError, StorageError
from energyquiz.models.session import Session


class SessionStore:
    """セッションをプロセスのメモリ上に保持する。

    永続化は行わない。プロセス終了またはセッション削除で内容は破棄される。
    保存・読み込みのたびにディープコピーするため、呼び出し側が保持する
    Session を変更してもストアの内容には影響しない。
    """

    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}

    @staticmethod
    def _check_id(session_id: str) -> None:
        if not session_id or not session_id.strip():
            raise StorageError(f"Invalid session ID: {session_id!r}")

    async def save_session(self, session: Session) -> None:
        """セッションを保存する。同一IDのセッションは上書きされる。"""
        self._check_id(session.id)
        self._sessions[session.id] = session.model_copy(deep=True)

    async def load_session(self, session_id: str) -> Session:
        """セッションを読み込む。

        Raises:
            SessionNotFoundError: セッションが存在しない場合。
        """
        self._check_id(session_id)
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session.model_copy(deep=True)

    async def delete_session(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)
