"""Logging setup for services that hand out paging cursors."""

import logging
from typing import Optional

from .config import Settings, get_settings


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Configure root logging from settings.

    Args:
        settings: Settings to read the level and format from. Defaults to the
            global settings instance.
    """
    settings = settings or get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format=settings.log_format
    )
    # basicConfig is a no-op once handlers exist, so always apply the level
    logging.getLogger().setLevel(getattr(logging, settings.log_level))
