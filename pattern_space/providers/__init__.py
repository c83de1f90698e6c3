"""生成后端集成层。

该包下的模块负责：
- 定义 Gateway 抽象接口 (base)。
- 维护模型与端点配置 (registry)。
- 提供具体实现 (claude_client)。
"""

from typing import Optional

from pattern_space.config.settings import Settings, settings
from pattern_space.providers.base import GenerationGateway
from pattern_space.providers.claude_client import ClaudeClient


def create_gateway(cfg: Optional[Settings] = None) -> GenerationGateway:
    """根据配置创建默认 Gateway 实例。"""

    return ClaudeClient(cfg or settings)
