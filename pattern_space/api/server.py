"""服务启动入口。

从 settings 构造应用，命令行参数可覆盖监听地址与端口，由 uvicorn 提供服务。
"""

import argparse
from typing import Optional, Sequence

import uvicorn

from pattern_space.config.settings import Settings, settings
from pattern_space.api.service import create_app
from pattern_space.infrastructure.logging.logger import logger


def build_parser(cfg: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pattern-space", description="Serve the Pattern.Space voice endpoint.")
    parser.add_argument("--host", default=cfg.host, help=f"listen address (default: {cfg.host})")
    parser.add_argument("--port", type=int, default=cfg.port, help=f"listen port (default: {cfg.port})")
    return parser


def main(argv: Optional[Sequence[str]] = None, cfg: Optional[Settings] = None) -> None:
    # PORT 非法时 Settings 构造已失败，进程不会走到这里
    cfg = cfg or settings
    args = build_parser(cfg).parse_args(argv)
    if not 1 <= args.port <= 65535:
        raise SystemExit(f"invalid port: {args.port}")
    app = create_app(cfg)
    logger.info("Starting server", extra={"extra": {"host": args.host, "port": args.port}})
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
