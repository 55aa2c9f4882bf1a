"""EcoNirvana site backend entry point."""

import asyncio
import contextlib
import logging

from econirvana.config import settings

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=getattr(logging, settings.log_level),
)
logger = logging.getLogger(__name__)


async def _serve() -> None:
    from econirvana.auth.service import AuthService
    from econirvana.web.server import WebServer

    user = await AuthService.get().restore()
    logger.info("Startup session: %s", user.email if user else "anonymous")

    server = WebServer()
    await server.start()
    try:
        await asyncio.Event().wait()
    finally:
        await server.stop()


def main() -> None:
    """Start the web server and run until interrupted."""
    mode = "offline (mock replies)" if settings.offline_mode else f"live ({settings.chat_model})"
    logger.info("Starting EcoNirvana in %s with chat %s...", settings.app_env, mode)
    if not settings.offline_mode and not settings.anthropic_api_key:
        if settings.permissive_fallback:
            logger.warning("ANTHROPIC_API_KEY is empty, using mock replies")
        else:
            logger.warning("ANTHROPIC_API_KEY is empty, live chat replies will fail")

    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(_serve())


if __name__ == "__main__":
    main()
