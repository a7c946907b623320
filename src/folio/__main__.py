"""Folio entrypoint.

Run with:
  python -m folio
"""

import uvicorn

from folio.core.settings import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "folio.app:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level.lower(),
    )

if __name__ == "__main__":
    main()
