"""主入口"""
import argparse
import asyncio

import uvicorn
from loguru import logger

from dicebox.config import settings
from dicebox.logging import setup_logging
from dicebox.web import create_app
from dicebox.web.routers.health import set_start_time


def parse_args(argv=None):
    """解析命令行参数"""
    parser = argparse.ArgumentParser(description="Dicebox 骰点服务")
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="启用 DEBUG 日志级别"
    )
    parser.add_argument("--host", default=None, help=f"监听地址 (默认 {settings.web_host})")
    parser.add_argument("--port", type=int, default=None, help=f"监听端口 (默认 {settings.web_port})")
    return parser.parse_args(argv)


async def main(debug: bool = False, host: str = None, port: int = None):
    """主函数"""
    # 命令行 --debug 优先于 .env 配置
    log_level = "DEBUG" if debug else settings.log_level

    setup_logging(
        level=log_level,
        log_path=settings.log_path,
        rotation="10 MB",
        retention="7 days",
    )
    logger.info("Dicebox 启动中...")
    logger.debug(f"配置: {settings}")

    set_start_time()

    web_app = create_app(settings=settings)

    host = host or settings.web_host
    port = port or settings.web_port
    web_config = uvicorn.Config(
        web_app,
        host=host,
        port=port,
        log_level="warning"
    )
    web_server = uvicorn.Server(web_config)

    try:
        logger.info(f"Web 服务启动: http://{host}:{port}")
        logger.info(f"API 文档: http://{host}:{port}/docs")
        await web_server.serve()
    except KeyboardInterrupt:
        logger.info("收到退出信号")
    finally:
        logger.info("Dicebox 已停止")


def run():
    """命令行入口"""
    args = parse_args()
    asyncio.run(main(debug=args.debug, host=args.host, port=args.port))


if __name__ == "__main__":
    run()
