import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging once with a consistent format.

    If handlers already exist (pytest, uvicorn reload) only the level is
    adjusted so records are not emitted twice. The uvicorn loggers are
    aligned to the same level.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(numeric_level)
    else:
        logging.basicConfig(level=numeric_level, format=LOG_FORMAT)

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(numeric_level)
