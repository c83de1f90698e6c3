"""Claude Provider 适配器。

本模块负责：

1. 接收编译好的 prompt，构造只含一条 user 消息的 GenerationRequest。
2. 将其转换为 Claude Messages API 的 HTTP 请求格式。
3. 调用 HTTP 接口并处理网络/API 异常。
4. 从响应 JSON 中取出第一段生成文本。

内部仍用 BusinessError 体系区分失败原因，但 generate() 对外只返回
Success / Failure，不重试、不退避，也不返回部分结果。
"""

from typing import Any, Dict

import httpx

from pattern_space.domain.exceptions import ApiError, BusinessError, NetworkError, ValidationError
from pattern_space.domain.models import (
    Failure,
    GenerationMessage,
    GenerationOutcome,
    GenerationRequest,
    Success,
)
from pattern_space.providers.registry import CLAUDE_CONFIG


class ClaudeClient:
    """Claude 提供方客户端实现。

    - name: Provider 名称（供日志/调试使用）。
    - generate: 对外统一调用入口，返回 GenerationOutcome。
    - complete: 发送一次请求并返回文本，失败时抛出 BusinessError。
    """

    name = "claude"

    def __init__(self, settings):
        # Settings 里包含 base_url、api_key、超时等配置
        self._settings = settings

    def generate(self, prompt: str) -> GenerationOutcome:
        try:
            text = self.complete(self.build_request(prompt))
        except BusinessError as e:
            return Failure(code=e.code, reason=e.message)
        return Success(text=text)

    def build_request(self, prompt: str) -> GenerationRequest:
        model_cfg = CLAUDE_CONFIG.model
        return GenerationRequest(
            model=model_cfg.provider_model,
            max_tokens=model_cfg.max_tokens,
            messages=[GenerationMessage(role="user", content=prompt)],
        )

    def complete(self, req: GenerationRequest) -> str:
        """执行一次非流式调用。

        步骤：
        1. 校验密钥存在。
        2. 构造 HTTP 请求 payload。
        3. 发送请求（有限超时）并捕获网络错误/服务端错误。
        4. 解析响应，取第一段文本。
        """

        api_key = getattr(self._settings, "claude_api_key", None)
        if not api_key:
            # 配置缺失走 ValidationError，由 generate() 统一收敛
            raise ValidationError(code="MISSING_API_KEY", message="CLAUDE_API_KEY not set")
        payload = self._build_payload(req)
        base = getattr(self._settings, "claude_base_url", None) or CLAUDE_CONFIG.base_url
        try:
            with httpx.Client(timeout=self._settings.http_timeout, trust_env=False) as client:
                resp = client.post(
                    f"{base}{CLAUDE_CONFIG.endpoint}",
                    json=payload,
                    headers={
                        "Content-Type": "application/json",
                        "x-api-key": api_key,
                        "anthropic-version": CLAUDE_CONFIG.api_version,
                    },
                )
        except httpx.HTTPError as e:
            # 网络错误：DNS 失败、连接超时、读超时、协议错误等
            raise NetworkError(code="NETWORK_ERROR", message=str(e))
        except (httpx.InvalidURL, ValueError) as e:
            # 请求无法构造：base_url 非法、密钥含非 ASCII 字符等
            raise ValidationError(code="BAD_REQUEST_CONFIG", message=f"{type(e).__name__}: {e}")
        if not resp.is_success:
            raise ApiError(code="API_ERROR", message=resp.text, http_status=resp.status_code)
        try:
            data = resp.json()
        except ValueError as e:
            raise ApiError(code="BAD_RESPONSE", message=f"Undecodable response body: {e}")
        return self._parse_response(data)

    def _build_payload(self, req: GenerationRequest) -> Dict[str, Any]:
        """将 GenerationRequest 转成 Claude 所需的请求 JSON。"""

        return {
            "model": req.model,
            "max_tokens": req.max_tokens,
            "messages": [{"role": m.role, "content": m.content} for m in req.messages],
        }

    @staticmethod
    def _parse_response(data: Any) -> str:
        """期望 {"content": [{"text": "..."}, ...]}，只取第一段。"""

        try:
            text = data["content"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            raise ApiError(code="BAD_RESPONSE", message=f"Unexpected response shape: {e!r}")
        if not isinstance(text, str):
            raise ApiError(code="BAD_RESPONSE", message="Response text is not a string")
        return text
