"""Start the server: ``python -m neuro_narrative``."""

import logging

import uvicorn

from neuro_narrative.api.app import create_app
from neuro_narrative.config import load_settings
from neuro_narrative.logging_config import configure_logging

logger = logging.getLogger("neuro_narrative")


def main() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)
    app = create_app(settings=settings)
    logger.info(
        "Neuroscience-based Narrative AI system running at http://localhost:%d",
        settings.port,
    )
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
