"""Run the API server: ``python -m notekeeper``."""

import uvicorn

from .core.config import settings


def main() -> None:
    uvicorn.run(
        "notekeeper.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
