"""Logging utilities for llmcatalog.

Modules log through ``logging.getLogger(__name__)``; this module only decides
where records go and how loud each component is. Components are addressed by
short names (``discovery``, ``monitor``) so callers do not need to know the
module layout.
"""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional, Union

ROOT_LOGGER = "llmcatalog"

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

COMPONENT_LOGGERS: Dict[str, tuple[str, ...]] = {
    "discovery": (
        "llmcatalog.models.discovery.cascade",
        "llmcatalog.models.discovery.initializer",
    ),
    "monitor": ("llmcatalog.models.discovery.monitor",),
    "cache": ("llmcatalog.models.discovery.cache",),
    "transport": ("llmcatalog.models.discovery.transport", "httpx", "httpcore"),
    "config": ("llmcatalog.core.config",),
}


def get_logger(name: str) -> logging.Logger:
    """Get a module logger by name (no prefixing).

    Args:
        name: Logger name (typically ``__name__``).

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)


def _level_value(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), logging.INFO)


def configure_logging(
    level: Optional[Union[str, int]] = None,
    *,
    verbose: bool = False,
    components: Optional[Mapping[str, Union[str, int]]] = None,
    fmt: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Attach a stream handler to the package logger and set levels.

    Calling this more than once replaces the handler installed by the previous
    call instead of stacking duplicates.

    Args:
        level: Package log level; ``verbose`` forces DEBUG when no level is given.
        verbose: Enable more detailed logging when True.
        components: Per-component overrides, e.g. ``{"transport": "WARNING"}``.
        fmt: Log record format string.

    Returns:
        The configured package logger.
    """
    if level is None:
        level = logging.DEBUG if verbose else logging.INFO

    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(_level_value(level))

    for handler in list(root.handlers):
        if getattr(handler, "_llmcatalog_handler", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt))
    handler._llmcatalog_handler = True  # type: ignore[attr-defined]
    root.addHandler(handler)

    # httpx logs every request at INFO; keep it quiet unless asked for.
    if not verbose:
        set_component_level("transport", logging.WARNING)

    for component, component_level in (components or {}).items():
        set_component_level(component, component_level)

    return root


def set_component_level(component: str, level: Union[str, int]) -> None:
    """Set log level for a specific component or group.

    Accepts either string levels (e.g., "INFO") or numeric constants. Unknown
    component names are treated as logger names.
    """
    level_value = _level_value(level)
    for logger_name in COMPONENT_LOGGERS.get(component, (component,)):
        logging.getLogger(logger_name).setLevel(level_value)


__all__ = ["configure_logging", "get_logger", "set_component_level"]
