from __future__ import annotations

"""Central logging configuration for edifact_mapping front-ends.

Library modules only create loggers; call :func:`setup_logging` once from an
application entry point (the CLI does this).
"""

import copy
import logging
import logging.config
import os
from typing import Any, Dict

from edifact_mapping.config import ConfigManager

__all__ = ["setup_logging"]

DEBUG_MODULES_ENV = "EDIFACT_MAPPING_DEBUG_MODULES"


def setup_logging(verbose: bool = False) -> None:
    """Configure logging from the YAML configuration, or a console fallback."""
    logging_config = copy.deepcopy(ConfigManager().get_logging_config())

    if logging_config and isinstance(logging_config, dict) and logging_config.get("version"):
        try:
            logging.config.dictConfig(logging_config)
            logging.getLogger(__name__).debug("Logging initialised from config files")
        except (ValueError, TypeError, AttributeError, ImportError) as exc:
            _setup_minimal_logging()
            logging.getLogger(__name__).error("Invalid logging config, using fallback: %s", exc)
    else:
        _setup_minimal_logging()

    if verbose:
        logging.getLogger("edifact_mapping").setLevel(logging.DEBUG)

    _apply_debug_overrides()


def _setup_minimal_logging() -> None:
    """Set up minimal console-only logging when config is unavailable."""
    minimal_config: Dict[str, Any] = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'simple': {
                'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            },
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'simple',
                'level': 'DEBUG',
            },
        },
        'root': {
            'level': 'WARNING',
            'handlers': ['console'],
        },
    }
    logging.config.dictConfig(minimal_config)


def _apply_debug_overrides() -> None:
    """Switch the loggers listed in EDIFACT_MAPPING_DEBUG_MODULES to DEBUG."""
    extra_modules = os.environ.get(DEBUG_MODULES_ENV, '').strip()
    targets = [m.strip() for m in extra_modules.split(',') if m.strip()]
    for name in targets:
        logger = logging.getLogger(name)
        logger.setLevel(logging.DEBUG)
        logger.info("Debug override active for logger '%s'", name)
