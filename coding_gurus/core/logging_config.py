import logging
import sys
from typing import Union

LOG_FORMAT = "%(asctime)s | {app} | %(levelname)s | %(name)s | %(message)s"

# third-party loggers that only matter when something is wrong
QUIET_LOGGERS = {
    "sqlalchemy.engine.Engine": logging.WARNING,
    "uvicorn.access": logging.WARNING,
}


def init_logging(app_name: str, level: Union[int, str] = logging.INFO) -> logging.Logger:
    """Point the root logger at stdout with an app-tagged format.

    Safe to call more than once (every create_app does); the previous
    handlers are replaced rather than stacked.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT.format(app=app_name)))

    root = logging.getLogger()
    for existing in root.handlers[:]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)

    return root
