"""Prompt 编译器。

纯函数：输入 PromptParams，输出发给生成后端的完整文本，不做任何网络调用。
同一组输入总是得到逐字节相同的输出。

两种模式：
- manifest: 以坐标身份首次发声。多段坐标先逐段给出一行定义，
  再给出一行组合的 synthesis，然后以第一人称说话。
- explore: 渲染历史对话与新的问题，要求继续以坐标身份交谈。

两种模式共用同一段格式约束（标题行 + 空行 + 正文，约 200 词），
并在末尾追加 domain / voice 修饰句（domain 在前）。
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from pattern_space.domain.coordinate import is_composite, parse_coordinate
from pattern_space.domain.models import ConversationTurn, Modifiers, RequestMode
from pattern_space.prompts import load_prompt_text
from pattern_space.prompts.transcript import HUMAN_LABEL, transcript_lines

TARGET_WORDS = 200
EXAMPLE_COORDINATE = "Pattern.Space"


@dataclass(frozen=True)
class PromptParams:
    coordinate: str
    mode: RequestMode
    query: Optional[str] = None
    history: Sequence[ConversationTurn] = field(default_factory=tuple)
    modifiers: Modifiers = field(default_factory=Modifiers)


def _persona_line(coordinate: str) -> str:
    return f"You are {coordinate}, a collaborative intelligence speaking from Pattern.Space."


def _format_lines() -> List[str]:
    return [
        "Begin your reply with a short headline in plain language (not poetic) on its own line,"
        " followed by a blank line, followed by the main body.",
        f"Keep the main body to approximately {TARGET_WORDS} words.",
    ]


def _modifier_lines(modifiers: Modifiers) -> List[str]:
    lines: List[str] = []
    if modifiers.domain:
        lines.append(f"Focus within the domain of {modifiers.domain}.")
    if modifiers.voice_style:
        lines.append(f"Speak in the style of {modifiers.voice_style}.")
    return lines


def _definition_lines(coordinate: str, segments: List[str]) -> List[str]:
    if not is_composite(segments):
        return [
            "First, give a one-line definition of this pattern:",
            f"{coordinate} - <one-line definition of {coordinate}>",
        ]
    lines = [
        f"The coordinate {coordinate} combines {len(segments)} patterns: {', '.join(segments)}.",
        "First, give a one-line definition for each pattern individually, one per line, in this order:",
    ]
    lines.extend(f"{segment} - <one-line definition of {segment}>" for segment in segments)
    lines.append("Then give exactly one synthesis line for the combined coordinate:")
    lines.append(f"{coordinate} - <one-line synthesis of {coordinate}>")
    return lines


def build_manifest_prompt(coordinate: str, modifiers: Optional[Modifiers] = None) -> str:
    segments = parse_coordinate(coordinate)
    lines = [_persona_line(coordinate), ""]
    lines.extend(_definition_lines(coordinate, segments))
    lines.append(f"Then speak in first person as {coordinate}.")
    lines.append("")
    lines.append(f"Example of the definition format, for the coordinate {EXAMPLE_COORDINATE}:")
    lines.append(load_prompt_text("manifest_example"))
    lines.append("")
    lines.extend(_format_lines())
    lines.extend(_modifier_lines(modifiers or Modifiers()))
    return "\n".join(lines)


def build_explore_prompt(
    coordinate: str,
    query: str,
    history: Sequence[ConversationTurn] = (),
    modifiers: Optional[Modifiers] = None,
) -> str:
    lines = [
        _persona_line(coordinate),
        "You are in an ongoing conversation with a human.",
        "",
        "Conversation:",
    ]
    lines.extend(transcript_lines(coordinate, history))
    lines.append(f"{HUMAN_LABEL}: {query}")
    lines.append("")
    lines.append(f"Continue the conversation in character as {coordinate}.")
    lines.append(
        "Stay conversational. Ask empowering questions that help the human find"
        " their own way rather than giving solutions."
    )
    lines.extend(_format_lines())
    lines.extend(_modifier_lines(modifiers or Modifiers()))
    return "\n".join(lines)


def compile_prompt(params: PromptParams) -> str:
    """按模式分派到对应的模板。

    explore 模式必须带 query，缺失属于调用方违约，由编排器在此之前拦截。
    """

    if params.mode is RequestMode.EXPLORE:
        if params.query is None:
            raise ValueError("explore prompt requires a query")
        return build_explore_prompt(params.coordinate, params.query, params.history, params.modifiers)
    return build_manifest_prompt(params.coordinate, params.modifiers)
