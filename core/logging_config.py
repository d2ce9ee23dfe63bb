import logging
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Optional[Union[int, str]] = None) -> None:
    """Configure root logging once for the API and the UI."""
    if level is None:
        from core.config import settings
        level = settings.LOG_LEVEL
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(level=level, format=LOG_FORMAT)
    # the genai SDK logs every request at INFO through httpx
    logging.getLogger("httpx").setLevel(logging.WARNING)
