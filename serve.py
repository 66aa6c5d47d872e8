from __future__ import annotations

from loguru import logger

from infrastructure.logging import init_logging
from server.app import create_app
from server.config import ServerConfig


def main() -> int:
    init_logging(console=True)
    config = ServerConfig.from_env()
    app = create_app(config)
    logger.info("Server running at http://localhost:{}", config.port)
    logger.info("Admin Dashboard: http://localhost:{}/admin", config.port)
    app.run(host="0.0.0.0", port=config.port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
