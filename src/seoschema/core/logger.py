import logging
import sys
import contextvars
from typing import Optional

# Context variable to carry the property path being (de)serialized across the call chain
_PROPERTY_PATH: contextvars.ContextVar[str] = contextvars.ContextVar("property_path", default="-")


class _PropertyPathFilter(logging.Filter):
    """Logging filter that injects the current property path from contextvars into the record."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        record.property_path = _PROPERTY_PATH.get()
        return True


def _build_formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | path=%(property_path)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def configure_root_logger(level: str = "INFO") -> None:
    """
    Configure root logger and seoschema-specific logger.

    Root logger stays at INFO to suppress library noise (httpx, etc).
    Only seoschema namespace logs are set to the requested level.

    Args:
        level: Log level for seoschema logs (DEBUG, INFO, WARNING, ERROR).
               Other libraries stay at INFO.

    Safe to call multiple times; it will not duplicate handlers (idempotent).
    """
    root = logging.getLogger()

    # Check if we already configured our handler (has _PropertyPathFilter)
    for h in root.handlers:
        if isinstance(h, logging.StreamHandler) and any(isinstance(f, _PropertyPathFilter) for f in h.filters):
            logging.getLogger("seoschema").setLevel(getattr(logging, level.upper(), logging.INFO))
            return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_build_formatter())
    handler.addFilter(_PropertyPathFilter())
    root.addHandler(handler)
    root.setLevel(logging.INFO)

    logging.getLogger("seoschema").setLevel(getattr(logging, level.upper(), logging.INFO))


def get_logger(name: str = "seoschema") -> logging.Logger:
    """
    Get a module-specific logger.

    Library modules do not install handlers on import; applications (and the
    CLI) call configure_root_logger() once.
    """
    logger = logging.getLogger(name)
    if not any(isinstance(f, _PropertyPathFilter) for f in logger.filters):
        logger.addFilter(_PropertyPathFilter())
    return logger


def current_property_path() -> str:
    return _PROPERTY_PATH.get()


def push_property_path(segment: Optional[str]) -> Optional[contextvars.Token]:
    """Append a segment to the current property path and return a token for later reset."""
    if not segment:
        return None
    current = _PROPERTY_PATH.get()
    path = segment if current == "-" else f"{current}.{segment}"
    return _PROPERTY_PATH.set(path)


def reset_property_path(token: Optional[contextvars.Token]) -> None:
    """Reset the property path context using the provided token (if any)."""
    if token is None:
        return
    _PROPERTY_PATH.reset(token)
