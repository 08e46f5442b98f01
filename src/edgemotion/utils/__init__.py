"""Utility functions for edgemotion.

This module provides configuration and logging utilities.
"""

from edgemotion.utils.config import (
    DEFAULT_CONFIG,
    get_nested,
    load_adapter_config,
    load_config,
    merge_configs,
    save_config,
    to_dict,
    validate_config,
)
from edgemotion.utils.logging import (
    ContextLogger,
    get_logger,
    log_dict,
    setup_logging,
    setup_logging_from_config,
)

__all__ = [
    # config
    "DEFAULT_CONFIG",
    "load_config",
    "load_adapter_config",
    "merge_configs",
    "to_dict",
    "validate_config",
    "get_nested",
    "save_config",
    # logging
    "setup_logging",
    "setup_logging_from_config",
    "get_logger",
    "ContextLogger",
    "log_dict",
]
