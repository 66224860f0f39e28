import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_handler = None


def configure_logging(level="INFO") -> logging.Logger:
    """Attach one stream handler to the passkit logger. Safe to call repeatedly."""
    global _handler
    root = logging.getLogger("passkit")
    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(_handler)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    root.setLevel(level)
    return root
