"""Process entrypoint: ``python -m chat_proxy``."""

from __future__ import annotations

import logging

import uvicorn

from chat_proxy.config import load_settings
from chat_proxy.exceptions import ConfigurationError
from chat_proxy.logging import configure_logging
from chat_proxy.main import create_app

logger = logging.getLogger("chat_proxy")


def main() -> None:
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        configure_logging("error")
        logger.critical("Refusing to start", extra={"reason": str(exc)})
        raise SystemExit(1) from exc

    app = create_app(settings)
    logger.info(
        "Server starting",
        extra={"host": settings.host, "port": settings.listen_port, "environment": settings.environment},
    )
    uvicorn.run(app, host=settings.host, port=settings.listen_port, log_config=None)


if __name__ == "__main__":  # pragma: no cover
    main()
