"""历史对话折叠。

把调用方回传的 ConversationTurn 序列按原顺序渲染为逐行文本：
role 为 "pattern" 的行以坐标作为说话人，其余均标记为 "Human"。
不去重、不截断，也不做 token 预算控制。
"""

from typing import Iterable, List

from pattern_space.domain.models import ConversationTurn

HUMAN_LABEL = "Human"


def render_turn(coordinate: str, turn: ConversationTurn) -> str:
    speaker = coordinate if turn.role == "pattern" else HUMAN_LABEL
    return f"{speaker}: {turn.content}"


def transcript_lines(coordinate: str, history: Iterable[ConversationTurn]) -> List[str]:
    return [render_turn(coordinate, turn) for turn in history]


def fold_conversation(coordinate: str, history: Iterable[ConversationTurn]) -> str:
    """返回逐行拼接的对话记录；历史为空时返回空字符串。"""

    return "\n".join(transcript_lines(coordinate, history))
