# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/avocado_core

"""
Logging sinks for applications and test runs.

Importing this module replaces loguru's default sink with a stderr sink and
a JSON file sink (``app.log`` under the configured log directory).
"""

import sys

from loguru import logger

from avocado_core.config import AvocadoConfig

_config = AvocadoConfig()

logger.remove()
logger.add(sys.stderr, level=_config.log_level)

_config.log_dir.mkdir(parents=True, exist_ok=True)
logger.add(
    _config.log_dir / "app.log",
    level=_config.log_level,
    rotation="10 MB",
    retention="1 week",
    serialize=True,
    enqueue=True,
)

__all__ = ["logger"]
