"""Energy Quizのカスタム例外クラス。"""


class EnergyQuizError(Exception):
    """Energy Quizの基底例外クラス。"""


class SessionNotFoundError(EnergyQuizError):
    """セッションが見つからない場合の例外。"""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Session not found: {session_id}")
        self.session_id = session_id


class InvalidTransitionError(EnergyQuizError):
    """現在のステップでは実行できない操作が要求された場合の例外。"""

    def __init__(self, session_id: str, action: str, current_step: str) -> None:
        super().__init__(f"Action '{action}' is not allowed in step '{current_step}' for session: {session_id}")
        self.session_id = session_id
        self.action = action
        self.current_step = current_step


class OptionNotFoundError(EnergyQuizError):
    """指定された選択肢が現在の質問に存在しない場合の例外。"""

    def __init__(self, question_id: str, option_id: str) -> None:
        super().__init__(f"Option not found for question {question_id}: {option_id}")
        self.question_id = question_id
        self.option_id = option_id


class AnswerAlreadyRecordedError(EnergyQuizError):
    """同一セッションで回答済みの質問に再度回答しようとした場合の例外。"""

    def __init__(self, session_id: str, question_id: str) -> None:
        super().__init__(f"Question {question_id} already answered in session: {session_id}")
        self.session_id = session_id
        self.question_id = question_id


class CatalogError(EnergyQuizError):
    """クイズ定義ファイルの読み込み・検証エラー。"""


class StorageError(EnergyQuizError):
    """セッションストア操作のエラー。"""


class InsightsFetchError(EnergyQuizError):
    """インサイト生成APIの呼び出しに失敗した場合の例外。"""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
