"""
Structured log setup for the command-line runner.
"""
import logging
import logging.handlers
import sys

from config import LOG_DIR, LOG_LEVEL, LOG_TO_FILE

_installed: list[logging.Handler] = []


def setup_logging(level: str = LOG_LEVEL, to_file: bool = LOG_TO_FILE) -> logging.Logger:
    fmt = logging.Formatter(
        "%(asctime)s.%(msecs)03d | %(levelname)-7s | %(name)-18s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Repeat calls replace our handlers instead of stacking them
    for h in _installed:
        root.removeHandler(h)
        h.close()
    _installed.clear()

    # ── Console handler (stderr, the report goes to stdout) ──────────
    ch = logging.StreamHandler(sys.stderr)
    ch.setFormatter(fmt)
    root.addHandler(ch)
    _installed.append(ch)

    # ── Rotating file handler (5 MB x 3 backups) ─────────────────────
    if to_file:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        fh = logging.handlers.RotatingFileHandler(
            LOG_DIR / "inplay.log",
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        fh.setFormatter(fmt)
        root.addHandler(fh)
        _installed.append(fh)

    return root
