import logging
import sys
from typing import Iterable

# Third-party loggers that drown out coaching debug output
QUIET_LOGGERS = ("uvicorn.access", "httpx")


def setup_logging(level: str = "INFO", quiet: Iterable[str] = QUIET_LOGGERS) -> None:
    """
    Configure stdout logging for the API process.

    Coaching engines log through logging.getLogger(__name__) under the
    "dealcoach" namespace, so LOG_LEVEL=DEBUG shows rule selection traces.
    """
    resolved = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=resolved,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("dealcoach").setLevel(resolved)

    for name in quiet:
        logging.getLogger(name).setLevel(max(resolved, logging.WARNING))
