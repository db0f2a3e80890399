"""Logging setup shared by the API app and the CLI."""
import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging once; later calls only adjust the level."""
    from ecoflood.config import settings

    resolved = (level or settings.LOG_LEVEL or "INFO").upper()
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=resolved, format=LOG_FORMAT)
    root.setLevel(resolved)
    # requests/urllib3 are chatty at DEBUG
    logging.getLogger("urllib3").setLevel(max(logging.WARNING, root.level))
