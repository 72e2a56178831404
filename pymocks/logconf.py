import logging
from typing import IO, Optional, Union

from .config import coerce_log_level

_FORMAT = "[pymocks] %(levelname)s %(name)s: %(message)s"


def configure_logger(
    level: Union[int, str] = logging.WARNING,
    name: str = "pymocks",
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """
    Route the ``pymocks`` logger hierarchy to one console handler.

    ``level`` takes what the config file takes ("debug", 10, "10"). Calling
    again only changes the level; the handler from the first call is reused.
    """
    pkg = logging.getLogger("pymocks")
    console = [h for h in pkg.handlers if type(h) is logging.StreamHandler]
    if not console:
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(_FORMAT))
        pkg.addHandler(handler)
    pkg.setLevel(coerce_log_level(level))
    return logging.getLogger(name)
