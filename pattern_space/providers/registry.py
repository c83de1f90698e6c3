"""Provider 与模型配置。

生成后端的模型、输出上限、端点与版本头在这里集中固定，
调用方不可配置；升级模型只需修改此处。"""

from dataclasses import dataclass
from typing import Mapping


@dataclass
class ModelConfig:
    """单个模型的配置。"""

    provider_model: str
    max_tokens: int


@dataclass
class ProviderConfig:
    """某个 Provider 的整体配置。"""

    name: str
    base_url: str
    endpoint: str
    api_version: str
    model: ModelConfig


CLAUDE_CONFIG = ProviderConfig(
    name="claude",
    base_url="https://api.anthropic.com/v1",
    endpoint="/messages",
    api_version="2023-06-01",
    model=ModelConfig(
        provider_model="claude-3-5-sonnet-20241022",
        max_tokens=1000,
    ),
)


PROVIDER_REGISTRY: Mapping[str, ProviderConfig] = {
    "claude": CLAUDE_CONFIG,
}


def get_provider_config(name: str) -> ProviderConfig:
    """根据名称获取 ProviderConfig，名称不区分大小写。"""

    key = name.lower()
    for k, cfg in PROVIDER_REGISTRY.items():
        if k.lower() == key:
            return cfg
    raise KeyError(f"Unknown provider: {name!r}")
