from __future__ import annotations

import uvicorn

from .config import DEFAULT_SERVER_CONFIG, ServerConfig


def main(config: ServerConfig = DEFAULT_SERVER_CONFIG) -> None:
    uvicorn.run(
        "restaurant_finder.app:app",
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
