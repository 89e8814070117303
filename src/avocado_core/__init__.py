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
avocado-core
"""

__version__ = "0.1.0"

from .config import AvocadoConfig
from .exceptions import (
    AvocadoError,
    FetchError,
    FetchTimeoutError,
    JsonCodecError,
    ResourceIOError,
    ResourceNotFoundError,
)
from .json_codec import JsonCodec, deserialize, serialize
from .loader import ContentLoader, load_file_content_as_string
from .locator import FileLocator, get_file
from .models import ResolvedFile, ResourceScheme

__all__ = [
    "AvocadoConfig",
    "AvocadoError",
    "ContentLoader",
    "FetchError",
    "FetchTimeoutError",
    "FileLocator",
    "JsonCodec",
    "JsonCodecError",
    "ResolvedFile",
    "ResourceIOError",
    "ResourceNotFoundError",
    "ResourceScheme",
    "deserialize",
    "get_file",
    "load_file_content_as_string",
    "serialize",
]
