import logging, os

FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup(level: str | None = None) -> logging.Logger:
    """Configure root logging once for a script run; LOG_LEVEL wins over the INFO default."""
    lvl = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(level=lvl, format=FORMAT)
    return logging.getLogger("gridbet")
