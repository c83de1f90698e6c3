"""统一的请求与结果数据模型。

本模块定义了服务内部各组件之间共享的标准数据结构：

- RequestMode: 请求模式（manifest / explore）。
- ConversationTurn: 调用方回传的一条历史对话。
- Modifiers: 可选的领域 / 语气修饰。
- GenerationRequest: 发给生成后端的完整请求。
- Success / Failure: Gateway 的返回结果（带标签的结果类型，而不是异常）。
- CoordinateResponse: 返回给调用方的结果。

服务本身不保存任何跨请求状态，这些对象都只在单次请求内存活。
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Literal, Optional, Union


class RequestMode(str, Enum):
    """请求模式。

    - MANIFEST: 为坐标生成初始声音，无上下文。
    - EXPLORE: 基于问题与历史对话继续交谈。
    """

    MANIFEST = "manifest"
    EXPLORE = "explore"


# 对话角色："pattern" 为坐标自身的发言，其余一律视为人类
TurnRole = Literal["pattern", "human"]


@dataclass(frozen=True)
class ConversationTurn:
    role: TurnRole
    content: str


@dataclass(frozen=True)
class Modifiers:
    """与模式无关的附加约束，空字符串等同于未提供。"""

    domain: Optional[str] = None
    voice_style: Optional[str] = None


@dataclass
class GenerationMessage:
    role: Literal["user", "assistant"]
    content: str


@dataclass
class GenerationRequest:
    """一次生成调用。

    按约定只包含一条 user 消息，内容是完整编译后的 prompt。
    model / max_tokens 来自 registry，调用方不可配置。
    """

    model: str
    max_tokens: int
    messages: List[GenerationMessage]


@dataclass(frozen=True)
class Success:
    text: str


@dataclass(frozen=True)
class Failure:
    """生成失败。reason 仅用于日志诊断，绝不原样返回给调用方。"""

    code: str
    reason: str = ""


GenerationOutcome = Union[Success, Failure]


@dataclass
class EngageCommand:
    """编排器的输入，由 API 层从请求体转换而来。"""

    coordinate: str
    mode: RequestMode
    query: Optional[str] = None
    history: List[ConversationTurn] = field(default_factory=list)
    modifiers: Modifiers = field(default_factory=Modifiers)


@dataclass
class CoordinateResponse:
    coordinate: str
    voice: str
