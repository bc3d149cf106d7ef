"""Run the API server: ``python -m itemsapi``."""

import uvicorn

from itemsapi.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "itemsapi.main:app",
        host=settings.api.host,
        port=settings.api.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
