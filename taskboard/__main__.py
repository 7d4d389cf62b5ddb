"""Run the API with uvicorn: `python -m taskboard`."""

import uvicorn

from taskboard.config import settings


def main() -> None:
    uvicorn.run(
        "taskboard.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    main()
