# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/avocado_core

from enum import Enum
from pathlib import Path

from loguru import logger
from pydantic import BaseModel


class ResourceScheme(str, Enum):
    """The kind of source a resource reference was resolved from."""

    JAR = "jar"
    HTTP = "http"
    FILE = "file"
    CLASSPATH = "classpath"
    PATH = "path"


class ResolvedFile(BaseModel):
    """A resource reference resolved to a file on the local disk.

    Attributes:
        reference: The reference string the file was resolved from.
        scheme: The branch of the resolution that matched the reference.
        path: The local file holding the resource content.
        temporary: True when ``path`` is a temporary copy (download or
            archive extraction) rather than the original file.
    """

    reference: str
    scheme: ResourceScheme
    path: Path
    temporary: bool = False

    def discard(self) -> None:
        """Deletes the temporary copy. Original files are left untouched."""
        if not self.temporary:
            return
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Failed to delete temporary copy {self.path}: {e}")
