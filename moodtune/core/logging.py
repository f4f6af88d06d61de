# ============================================================================
# FILE: moodtune/core/logging.py
# ============================================================================
import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

def setup_logging(level: Optional[str] = "INFO", debug: bool = False) -> None:
    """Configure root logging once for the whole process; later calls leave it alone"""
    resolved = logging.DEBUG if debug else getattr(logging, (level or "INFO").upper(), logging.INFO)
    logging.basicConfig(level=resolved, format=LOG_FORMAT)

    # SQL echo is too noisy outside debugging
    if not debug:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)
