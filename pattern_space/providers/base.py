"""Generation Gateway 抽象接口。

编排器不直接依赖具体厂商的 HTTP 细节，而是依赖此协议：

- 每个后端实现一个 GenerationGateway（如 ClaudeClient）。
- 负责：将编译好的 prompt 转成具体 API 请求，并把响应解析为生成文本。
- 所有失败（缺少密钥、网络错误、非 2xx、响应无法解析）在这里收敛为
  一个 Failure 结果，不向上抛出。
"""

from typing import Protocol

from pattern_space.domain.models import GenerationOutcome


class GenerationGateway(Protocol):
    """生成后端客户端协议。

    实现者需要提供：
    - name: Provider 名称，用于日志。
    - generate(prompt): 执行一次非流式调用，返回 Success 或 Failure。
    """

    name: str

    def generate(self, prompt: str) -> GenerationOutcome:
        ...
