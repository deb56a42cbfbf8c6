"""Configuration exception module.

This module re-exports the exception type specific to the configuration system.
"""

from llmcatalog._internal.exceptions import ConfigError

__all__ = ["ConfigError"]
