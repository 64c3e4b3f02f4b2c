"""Energy Quizサーバーの設定管理。"""

from pathlib import Path

from pydantic_settings import BaseSettings

_PACKAGE_ROOT = Path(__file__).parent
_REPO_ROOT = _PACKAGE_ROOT.parent.parent


class ServerConfig(BaseSettings):
    """サーバー設定。環境変数から読み込み可能。"""

    model_config = {"env_prefix": "ENERGYQUIZ_"}

    config_dir: Path = _REPO_ROOT / "config"
    host: str = "0.0.0.0"
    port: int = 8000
    url_token: str = ""
    log_level: str = "INFO"

    # クイズフロー
    loading_duration_sec: float = 4.0
    premium_url: str = "/premium"

    # Gemini (インサイト生成)
    gemini_api_key: str = ""
    gemini_model: str = "gemini-1.5-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_timeout_sec: float = 15.0
    gemini_temperature: float = 0.7
    gemini_max_output_tokens: int = 800

    # プロンプト指示 (空の場合は省略)
    gemini_instruction_style: str = ""
    gemini_response_tone: str = ""
    gemini_response_format: str = ""
    gemini_output_strategy: str = ""
    gemini_integration_rule: str = ""
