"""坐标解析。

坐标形如 ``Forest.Creativity``，按字面 ``.`` 切分为若干 pattern 名。
不做 trim / 大小写归一化；空字符串视为一个空 segment，不报错。
"""

from typing import List

SEPARATOR = "."


def parse_coordinate(raw: str) -> List[str]:
    """返回按原顺序排列的 segment 列表，至少一个元素。"""

    return raw.split(SEPARATOR)


def is_composite(segments: List[str]) -> bool:
    return len(segments) > 1
