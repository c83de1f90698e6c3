"""对外 HTTP 服务模块。

单一业务路由 POST /engage，外加 /health 与根路径静态资源。
请求体经 pydantic 校验后转换为 EngageCommand 交给 VoiceAgent。
"""

from pathlib import Path
from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, Field

from pattern_space.agents.voice_agent import VoiceAgent
from pattern_space.config.settings import Settings, settings
from pattern_space.domain.exceptions import BusinessError
from pattern_space.domain.models import ConversationTurn, EngageCommand, Modifiers, RequestMode
from pattern_space.infrastructure.logging.logger import logger
from pattern_space.providers import create_gateway


_agent: Optional[VoiceAgent] = None


def get_default_agent() -> VoiceAgent:
    """获取基于模块级 settings 的默认 VoiceAgent 实例（单例）。"""
    global _agent
    if _agent is None:
        _agent = VoiceAgent(gateway=create_gateway(settings))
    return _agent


class TurnPayload(BaseModel):
    role: str
    content: str


class EngageRequest(BaseModel):
    coordinate: str
    mode: RequestMode = Field(alias="type")
    query: Optional[str] = None
    conversation_history: List[TurnPayload] = Field(default_factory=list)
    domain: Optional[str] = None
    voice: Optional[str] = None

    def to_command(self) -> EngageCommand:
        return EngageCommand(
            coordinate=self.coordinate,
            mode=self.mode,
            query=self.query,
            history=[ConversationTurn(role=t.role, content=t.content) for t in self.conversation_history],
            modifiers=Modifiers(domain=self.domain, voice_style=self.voice),
        )


class EngageResponse(BaseModel):
    coordinate: str
    voice: str


def create_app(cfg: Optional[Settings] = None, agent: Optional[VoiceAgent] = None) -> FastAPI:
    """构造 FastAPI 应用。

    Args:
        cfg: 配置（可选，默认使用模块级 settings）
        agent: 编排器实例（可选，测试时可注入假 Gateway）
    """
    if agent is not None:
        voice_agent = agent
    elif cfg is not None:
        # 显式传入的配置各自构造 Gateway，不复用单例
        voice_agent = VoiceAgent(gateway=create_gateway(cfg))
    else:
        voice_agent = get_default_agent()
    cfg = cfg or settings
    app = FastAPI(title="Pattern.Space", version="0.1.0")
    app.state.voice_agent = voice_agent

    @app.exception_handler(BusinessError)
    async def business_error_handler(request: Request, exc: BusinessError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.http_status,
            content={"code": exc.code, "message": exc.message},
        )

    @app.get("/health")
    def health():
        return {"status": "ok"}

    # 同步路由：由服务端线程池逐请求执行，出站调用阻塞的是工作线程
    @app.post("/engage", response_model=EngageResponse)
    def engage(body: EngageRequest) -> EngageResponse:
        result = voice_agent.engage(body.to_command())
        return EngageResponse(coordinate=result.coordinate, voice=result.voice)

    # 根路径挂载必须在路由之后，否则会遮蔽 /engage
    static_dir = Path(cfg.static_dir)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    else:
        logger.info(
            "Skipping static mount; directory not found",
            extra={"extra": {"static_dir": str(static_dir)}},
        )

    return app
