"""生成失败时的兜底文本。

纯模板拼接，不调用任何外部依赖，也不会失败。
"""

from typing import Optional

from pattern_space.domain.models import RequestMode

MISSING_QUERY_PLACEHOLDER = "(no question)"


def synthesize_fallback(mode: RequestMode, coordinate: str, query: Optional[str] = None) -> str:
    if mode is RequestMode.EXPLORE:
        asked = query if query is not None else MISSING_QUERY_PLACEHOLDER
        return f"I hear your question: '{asked}'. Let me consider this..."
    return f"I am {coordinate} - a collaborative intelligence speaking from Pattern.Space"
