"""Fixed scheme parameters and logging setup."""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import os

# ---------------------------------------------------------------------------
# Scheme
# ---------------------------------------------------------------------------
KEY_SIZE = 2048
PUBLIC_EXPONENT = 65537
HASH = "sha256"
KEY_SIZE_CHOICES = ["2048", "3072", "4096"]

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL_ENV = "DIDCRYPT_LOG_LEVEL"
LOG_LEVEL_DEFAULT = "WARNING"
LOG_FORMAT = "%(asctime)s  %(name)-28s  %(levelname)-7s  %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str | None = None) -> None:
    """Installs a root handler. Meant for entry points only, the library never calls it.

    Args:
        level: Level name. Falls back to `DIDCRYPT_LOG_LEVEL`, then WARNING.
    """
    name = (level or os.getenv(LOG_LEVEL_ENV, LOG_LEVEL_DEFAULT)).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.WARNING),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )
