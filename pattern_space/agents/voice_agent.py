"""坐标发声的编排器。

每个请求的处理流程：

    收到请求 -> 校验 -> 编译 prompt -> 调用 Gateway
        -> 成功：返回生成文本
        -> 失败：返回兜底文本（只兜底一次，不重试）

Gateway 的失败细节只写日志，不会出现在返回给调用方的结果里。
"""

from typing import Any, Dict
from uuid import uuid4
import time
import logging

from pattern_space.agents.fallback import synthesize_fallback
from pattern_space.domain.exceptions import ValidationError
from pattern_space.domain.models import (
    CoordinateResponse,
    EngageCommand,
    RequestMode,
    Success,
)
from pattern_space.infrastructure.logging.logger import logger
from pattern_space.prompts.compiler import PromptParams, compile_prompt
from pattern_space.providers.base import GenerationGateway


class VoiceAgent:
    """无状态编排器，可被多个请求线程并发共享。"""

    def __init__(self, gateway: GenerationGateway):
        self._gateway = gateway

    def engage(self, cmd: EngageCommand) -> CoordinateResponse:
        """处理一次 /engage 请求。

        Raises:
            ValidationError: explore 模式缺少 query，在调用 Gateway 之前抛出。
        """
        start_time = time.time()
        log_ctx: Dict[str, Any] = {
            "trace_id": f"tr-{uuid4().hex}",
            "mode": cmd.mode.value,
            "coordinate": cmd.coordinate,
        }

        if cmd.mode is RequestMode.EXPLORE and cmd.query is None:
            self._log(logging.WARNING, "Rejected explore request without query", log_ctx)
            raise ValidationError(
                code="MISSING_QUERY",
                message="query is required when type is 'explore'",
            )

        prompt = compile_prompt(
            PromptParams(
                coordinate=cmd.coordinate,
                mode=cmd.mode,
                query=cmd.query,
                history=tuple(cmd.history),
                modifiers=cmd.modifiers,
            )
        )
        self._log(
            logging.INFO,
            "Compiled prompt",
            log_ctx,
            prompt_chars=len(prompt),
            history_turns=len(cmd.history),
        )

        outcome = self._gateway.generate(prompt)
        if isinstance(outcome, Success):
            voice = outcome.text
            log_ctx["outcome"] = "generated"
        else:
            voice = synthesize_fallback(cmd.mode, cmd.coordinate, cmd.query)
            log_ctx["outcome"] = "fallback"
            self._log(
                logging.WARNING,
                "Generation failed, using fallback",
                log_ctx,
                provider=getattr(self._gateway, "name", "unknown"),
                error_code=outcome.code,
                error=outcome.reason,
            )

        self._log(
            logging.INFO,
            "Completed engage",
            log_ctx,
            elapsed_seconds=round(time.time() - start_time, 2),
        )
        return CoordinateResponse(coordinate=cmd.coordinate, voice=voice)

    @staticmethod
    def _log(level: int, message: str, log_ctx: Dict[str, Any], **fields: Any) -> None:
        payload = dict(log_ctx)
        payload.update(fields)
        logger.log(level, message, extra={"extra": payload})
