import logging

import uvicorn

from retail_api.core.config import settings
from retail_api.core.logging import setup_logging

logger = logging.getLogger("retail_api")


def main() -> None:
    setup_logging()
    logger.info("Starting %s on %s:%s", settings.PROJECT_NAME, settings.HOST, settings.PORT)
    uvicorn.run(
        "retail_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        lifespan="on",
    )


if __name__ == "__main__":
    main()
