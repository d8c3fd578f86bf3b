"""Run the PDF Render API with uvicorn: ``python -m pdf_render``."""

import logging

import uvicorn

from .config import get_settings, validate_config_on_startup

logger = logging.getLogger(__name__)


def main() -> None:
    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    settings = validate_config_on_startup()

    logger.info(f"PDF Render API is running on port {settings.port}")
    logger.info("Swagger Documentation: /api-docs")
    logger.info("POST /api/pdf/generate - Generate PDF from HTML template")
    logger.info("POST /api/pdf/download - Download PDF generated from HTML template")
    logger.info("POST /api/Utility/GeneratePdf - Generate PDF (Legacy endpoint)")

    uvicorn.run(
        "pdf_render.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
