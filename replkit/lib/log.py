"""
Debug logging for replkit.

Everything the loop absorbs without telling the user still leaves a trace
here: failed history appends, history files that could not be loaded or
saved, line editor setup failures and the cause behind a fatal read.
User-facing messages go through rich consoles instead.

Records go to stderr through a loguru logger bound with `app="replkit"`.
Setting `REPLKIT_BEQUIET=true` silences them.

Example:
    from replkit.lib.log import LOG
    LOG(f"History not loaded: {e}")
"""

from loguru import logger
from typing import Any
import sys

app_logger = logger.bind(app="replkit")

logger_format = (
    "<green>{time:HH:mm:ss.SSS}</green> │ "
    "<level>{level: <5}</level> │ "
    "<magenta>{extra[app]}</magenta> "
    "<yellow>{name}</yellow>:<cyan>{function}</cyan>:<cyan>{line}</cyan> ║ "
    "<level>{message}</level>"
)

app_logger.remove()
app_logger.add(sys.stderr, format=logger_format, level="DEBUG")


def LOG(*args: Any, **kwargs: Any) -> None:
    """
    Emit a debug record attributed to the caller, unless `beQuiet` is set.

    Settings are looked up on every call so that tests and embedding
    applications can flip `appsettings.beQuiet` at runtime.

    :param args: Message and optional format arguments for loguru.
    :param kwargs: Extra fields bound onto the record.
    """
    try:
        from replkit.config.settings import appsettings

        if not appsettings.beQuiet:
            app_logger.opt(depth=1).debug(*args, **kwargs)
    except Exception as e:
        print(f"Logging error: {e}")
