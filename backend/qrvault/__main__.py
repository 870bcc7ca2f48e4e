"""Run the server: `python -m qrvault` (listens on HOST:PORT from the environment)."""

import uvicorn

from qrvault.config import settings


def main() -> None:
    uvicorn.run(
        "qrvault.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
