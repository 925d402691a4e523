"""クライアント内部ログの出力設定

各モジュールは get_logger() で structlog ロガーを取得する。イベントは
標準 logging の "k1s0_elastic_client" 階層に構造化されたまま渡されるため、
レベル制御は標準 logging の設定に従う。configure_logging() はこの階層に
だけハンドラを追加し、structlog のグローバル設定やルートロガーには触れない。
"""

from __future__ import annotations

import logging
import sys
from typing import IO

import structlog

PACKAGE_LOGGER = "k1s0_elastic_client"

# ProcessorFormatter がハンドラ側で描画できるよう、イベント辞書のまま渡す。
_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
]


class _ClientLogHandler(logging.StreamHandler):
    """configure_logging() が追加したハンドラの目印。"""


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """モジュール用のロガーを返す。"""
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def configure_logging(
    level: str = "WARNING",
    format: str = "json",
    stream: IO[str] | None = None,
) -> logging.Logger:
    """クライアントのログを stream に出力する。

    クライアントは送信したリクエストと受信したステータス、bulk の件数を
    DEBUG で出力する。繰り返し呼ぶと前回のハンドラを置き換える。

    Args:
        level: ログレベル ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        format: 出力形式 ("json" or "text")
        stream: 出力先。省略時は標準エラー出力

    Returns:
        設定済みの "k1s0_elastic_client" ロガー
    """
    renderer: structlog.types.Processor
    if format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    handler = _ClientLogHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
            foreign_pre_chain=[
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
            ],
        )
    )

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in list(package_logger.handlers):
        if isinstance(existing, _ClientLogHandler):
            package_logger.removeHandler(existing)
    package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    package_logger.propagate = False
    return package_logger
