"""ロギング設定。"""

import logging
import sys

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO", format_string: str | None = None) -> None:
    """標準出力へのロギングを設定する。

    Args:
        level: ログレベル (DEBUG, INFO, WARNING, ERROR)。不明な値はINFO。
        format_string: ログフォーマット。Noneの場合は DEFAULT_FORMAT。
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=format_string or DEFAULT_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
