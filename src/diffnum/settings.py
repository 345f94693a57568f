"""Application-wide settings and environment loading."""

import logging
import os
from typing import List

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

OPTIONS_ENV_VAR = "DIFFNUM_OPTIONS"

load_dotenv()
logger.debug("Environment variables loaded from .env if present")


def get_default_option_tokens() -> List[str]:
    """Return option tokens configured through the environment."""
    raw = os.getenv(OPTIONS_ENV_VAR, "")
    tokens = raw.split()
    if tokens:
        logger.debug("Default options retrieved", extra={"tokens": tokens})
    else:
        logger.debug("No default options configured")
    return tokens
