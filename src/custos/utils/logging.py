"""Logging setup for applications that let Custos own it.

Custos modules log through module-level loggers and never install handlers
on their own. Setting `configure = true` in the `logging` section of the
config makes `document_store_from_config` set up handlers and levels when
the store is built.
"""

import logging
import os
import sys

DETAILED_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
COMPACT_FORMAT = "%(asctime)s %(levelname)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Held at WARNING unless Custos runs at DEBUG
QUIET_LOGGERS = ("custos.core", "custos.adapters")


def resolve_level(level=None) -> int:
    """Turn a level name into a logging constant.

    Without a name, `CUSTOS_LOG_LEVEL` is used, then `INFO`. Unknown names
    resolve to `INFO`.
    """
    if level is None:
        level = os.environ.get("CUSTOS_LOG_LEVEL") or "INFO"
    if isinstance(level, int):
        return level

    return logging.getLevelNamesMapping().get(level.upper(), logging.INFO)


def configure_logging(level=None, format_string=None) -> int:
    """Route log records to stdout and set Custos logger levels.

    Returns the level that was applied.
    """
    numeric_level = resolve_level(level)
    verbose = numeric_level <= logging.DEBUG

    if format_string is None:
        format_string = DETAILED_FORMAT if verbose else COMPACT_FORMAT

    logging.basicConfig(
        level=numeric_level,
        format=format_string,
        datefmt=DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )

    logging.getLogger("custos").setLevel(logging.DEBUG if verbose else logging.NOTSET)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET if verbose else logging.WARNING)

    return numeric_level


def configure_from_config(config: dict) -> bool:
    """Apply the `logging` section of a config, if it asks for it"""
    settings = config.get("logging") or {}
    if not settings.get("configure"):
        return False

    configure_logging(settings.get("level"), settings.get("format"))
    return True
