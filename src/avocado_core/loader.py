# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/avocado_core

from pathlib import Path

from loguru import logger

from avocado_core.config import AvocadoConfig
from avocado_core.exceptions import ResourceIOError, ResourceNotFoundError
from avocado_core.locator import FileLocator


class ContentLoader:
    """Reads the full content of resolved resources."""

    def __init__(self, locator: FileLocator | None = None, config: AvocadoConfig | None = None):
        """Initializes the ContentLoader.

        Args:
            locator: Optional FileLocator used to resolve references.
            config: Optional configuration object. Defaults to the locator's
                configuration, or to a default one.
        """
        self.config = config or (locator.config if locator else AvocadoConfig())
        self.locator = locator or FileLocator(self.config)

    def read_text(self, path: Path, encoding: str | None = None) -> str:
        """Reads a local file fully as text.

        Line endings are preserved as stored.

        Args:
            path: The local file to read.
            encoding: Character encoding. Defaults to the configured one (UTF-8).

        Returns:
            str: The file content.

        Raises:
            ResourceNotFoundError: If the file does not exist.
            ResourceIOError: If the file cannot be read or decoded.
        """
        encoding = encoding or self.config.encoding
        try:
            with open(path, encoding=encoding, newline="") as f:
                return f.read()
        except FileNotFoundError as e:
            raise ResourceNotFoundError(str(path)) from e
        except (OSError, UnicodeDecodeError, LookupError) as e:
            logger.error(f"Failed to read {path} as {encoding}: {e}")
            raise ResourceIOError(f"Failed to read {path} as {encoding}: {e}") from e

    def read_bytes(self, path: Path) -> bytes:
        """Reads a local file fully as bytes."""
        try:
            return Path(path).read_bytes()
        except FileNotFoundError as e:
            raise ResourceNotFoundError(str(path)) from e
        except OSError as e:
            logger.error(f"Failed to read {path}: {e}")
            raise ResourceIOError(f"Failed to read {path}: {e}") from e

    def load_file_content_as_string(self, reference: str, encoding: str | None = None) -> str:
        """Resolves a resource reference and returns its content as text.

        Temporary copies made while resolving are deleted once read.

        Args:
            reference: Any reference accepted by ``FileLocator.resolve``.
            encoding: Character encoding. Defaults to the configured one (UTF-8).

        Returns:
            str: The resource content.
        """
        resolved = self.locator.resolve(reference)
        try:
            return self.read_text(resolved.path, encoding)
        finally:
            resolved.discard()

    def load_file_content_as_bytes(self, reference: str) -> bytes:
        """Resolves a resource reference and returns its raw content."""
        resolved = self.locator.resolve(reference)
        try:
            return self.read_bytes(resolved.path)
        finally:
            resolved.discard()


def load_file_content_as_string(reference: str, encoding: str | None = None) -> str:
    """Loads a resource as text with a default ContentLoader."""
    with FileLocator() as locator:
        return ContentLoader(locator).load_file_content_as_string(reference, encoding)
