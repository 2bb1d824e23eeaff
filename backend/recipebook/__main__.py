"""
Run the API server: `python -m recipebook`.

Listens on HOST:PORT (default 0.0.0.0:3000).
"""

import uvicorn

from recipebook.config import settings


def main() -> None:
    uvicorn.run(
        "recipebook.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
