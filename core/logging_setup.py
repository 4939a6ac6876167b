from __future__ import annotations
import logging


def setup_console_logging(level: int | str = logging.DEBUG) -> None:
    """
    Call once at app start. Prints detailed logs to console.
    `level` may be a logging constant or a name such as "INFO".
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.DEBUG

    root = logging.getLogger()
    if root.handlers:
        # already configured (avoid duplicates)
        root.setLevel(level)
        return

    root.setLevel(level)
    h = logging.StreamHandler()
    fmt = logging.Formatter(
        "[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    h.setFormatter(fmt)
    root.addHandler(h)
    # third-party HTTP clients are chatty at DEBUG
    for name in ("httpx", "httpcore", "google_genai"):
        logging.getLogger(name).setLevel(max(level, logging.INFO))
