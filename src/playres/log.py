from __future__ import annotations
import logging

CONSOLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"
DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str | int = "INFO", detailed: bool = False) -> logging.Logger:
    """Attach a single console handler to the ``playres`` logger.

    Safe to call more than once; later calls only change the level.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger("playres")
    root.setLevel(level)
    if not any(getattr(h, "_playres", False) for h in root.handlers):
        handler = logging.StreamHandler()
        fmt = DETAILED_FORMAT if detailed else CONSOLE_FORMAT
        handler.setFormatter(logging.Formatter(fmt, datefmt=DATE_FORMAT))
        handler._playres = True
        root.addHandler(handler)
    for h in root.handlers:
        h.setLevel(level)
    return root
