"""
Centralized logging configuration for the dispatcher.
"""

import logging
import sys
from typing import Optional

from narrative_dispatch.models.config import DispatcherConfig


def setup_logging(config: Optional[DispatcherConfig] = None) -> None:
    """
    Configure the root logger.

    Args:
        config: DispatcherConfig instance, loaded from the environment if None
    """
    if config is None:
        config = DispatcherConfig.from_env()

    logging.basicConfig(level=getattr(logging, config.log_level.upper(), logging.INFO),
                        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                        handlers=[logging.StreamHandler(sys.stdout)])


def get_logger(name: str) -> logging.Logger:
    """
    Get a module logger.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
