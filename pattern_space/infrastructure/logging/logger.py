"""结构化日志。

每条记录输出为一行 JSON，结构化字段通过 ``extra={"extra": {...}}`` 传入。
开启 log_redact_content 时，消息正文截断，调用方提交的文本字段
（坐标、问题、修饰项等）只保留长度。
"""

import json
import logging
from pathlib import Path
from datetime import datetime, timezone
from typing import Any, Dict

from pattern_space.config.settings import settings

MSG_REDACT_CHARS = 64
# 由调用方提交、可能包含用户内容的字段
USER_CONTENT_FIELDS = frozenset({"coordinate", "query", "domain", "voice", "content"})


def redact_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    redacted = dict(fields)
    for key in USER_CONTENT_FIELDS.intersection(redacted):
        value = redacted[key]
        if isinstance(value, str):
            redacted[key] = f"<redacted:{len(value)} chars>"
    return redacted


class JsonFormatter(logging.Formatter):
    def __init__(self, redact: bool = False):
        super().__init__()
        self._redact = redact

    def format(self, record: logging.LogRecord) -> str:
        msg = record.getMessage()
        if self._redact:
            msg = (msg or "")[:MSG_REDACT_CHARS]
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "msg": msg,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(redact_fields(extra) if self._redact else extra)
        return json.dumps(payload, ensure_ascii=False)


def setup_logger() -> logging.Logger:
    logger = logging.getLogger("pattern_space")
    logger.setLevel(logging.INFO)
    if logger.handlers:
        return logger
    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    fh = logging.FileHandler(log_dir / "pattern_space.log", encoding="utf-8")
    fh.setLevel(logging.INFO)
    fh.setFormatter(JsonFormatter(redact=settings.log_redact_content))
    logger.addHandler(fh)
    return logger


logger = setup_logger()
