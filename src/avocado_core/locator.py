# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/avocado_core

import os
import re
import shutil
import sys
import tempfile
import time
import zipfile
from pathlib import Path, PurePosixPath
from typing import Callable
from urllib.parse import urlparse
from urllib.request import url2pathname

import httpx
from loguru import logger

from avocado_core.config import AvocadoConfig
from avocado_core.exceptions import (
    AvocadoError,
    FetchError,
    FetchTimeoutError,
    ResourceIOError,
    ResourceNotFoundError,
)
from avocado_core.models import ResolvedFile, ResourceScheme

_JAR_PATTERN = re.compile(r"^jar:(?P<archive>.+?)!/(?P<entry>.+)$")
_HTTP_PREFIXES = ("http://", "https://")
_FILE_PREFIX = "file:"
_ARCHIVE_SUFFIXES = {".zip", ".jar", ".whl", ".egg"}
_NOT_FOUND_STATUSES = {404, 410}


def _strip_file_scheme(value: str) -> str:
    """Turns a ``file:`` URL into a filesystem path, leaving plain paths untouched."""
    if value.startswith("file://"):
        return url2pathname(urlparse(value).path)
    if value.startswith(_FILE_PREFIX):
        return value[len(_FILE_PREFIX) :]
    return value


class FileLocator:
    """Resolves resource references to files on the local disk.

    A reference is matched against an ordered list of schemes, the first
    match wins:

    1. ``jar:<archive>!/<entry>``: the entry is extracted from the zip archive.
    2. ``http://`` / ``https://``: the resource is downloaded.
    3. ``file:``: the scheme is stripped and the rest read as a path.
    4. ``/<name>``: the name is looked up on the resource search path.
    5. anything else is a filesystem path.

    A ``jar:`` reference is split at its first ``!/``. Archives nested in
    archives are not opened: ``jar:a.jar!/lib/b.jar!/x`` looks for an entry
    named ``lib/b.jar!/x`` in ``a.jar``. Search path names may not contain
    ``..`` segments.

    Downloads and extractions land in temporary files flagged on the
    returned ``ResolvedFile``.
    """

    def __init__(self, config: AvocadoConfig | None = None, client: httpx.Client | None = None):
        """Initializes the FileLocator.

        Args:
            config: Optional configuration object. If not provided, defaults are used.
            client: Optional httpx.Client used for http(s) references. One is
                created on first use when not provided.
        """
        self.config = config or AvocadoConfig()
        self._internal_client = client is None
        self._client = client
        self._resolvers: list[tuple[ResourceScheme, Callable[[str], bool], Callable[[str], ResolvedFile]]] = [
            (ResourceScheme.JAR, self._is_jar, self._resolve_jar),
            (ResourceScheme.HTTP, self._is_http, self._resolve_http),
            (ResourceScheme.FILE, self._is_file_url, self._resolve_file_url),
            (ResourceScheme.CLASSPATH, self._is_classpath, self._resolve_classpath),
            (ResourceScheme.PATH, lambda reference: True, self._resolve_path),
        ]

    def __enter__(self) -> "FileLocator":
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        self.close()

    def close(self) -> None:
        """Closes the HTTP client if this locator created it."""
        if self._internal_client and self._client is not None:
            self._client.close()
            self._client = None

    def scheme_of(self, reference: str) -> ResourceScheme:
        """Returns the scheme a reference would be resolved with."""
        scheme, _ = self._match(reference)
        return scheme

    def resolve(self, reference: str) -> ResolvedFile:
        """Resolves a resource reference to a local file.

        Args:
            reference: A path, ``file:`` URL, ``http(s)`` URL, ``jar:`` entry
                reference or ``/name`` search path reference.

        Returns:
            ResolvedFile: The local file and how it was obtained.

        Raises:
            ResourceNotFoundError: If the reference points at nothing.
            FetchTimeoutError: If downloading exceeds the configured timeout.
            FetchError: If the download fails for any other reason.
            ResourceIOError: If an archive is corrupt or a temporary copy cannot be written.
        """
        if not reference or not reference.strip():
            raise ResourceNotFoundError(reference or "", "empty reference")

        scheme, resolver = self._match(reference)
        logger.debug(f"Resolving {reference} as {scheme.value} resource")
        return resolver(reference)

    def get_file(self, reference: str) -> Path:
        """Resolves a resource reference and returns the local file path."""
        return self.resolve(reference).path

    def search_path(self) -> list[Path]:
        """Returns the roots scanned for ``/name`` references, in lookup order.

        Configured roots come first, then ``sys.path`` entries when enabled.
        The first occurrence of a duplicated root is kept.
        """
        roots = list(self.config.resource_path)
        if self.config.include_sys_path:
            roots.extend(Path(entry) if entry else Path.cwd() for entry in sys.path)

        unique: list[Path] = []
        seen: set[str] = set()
        for root in roots:
            key = os.path.normpath(str(root))
            if key not in seen:
                seen.add(key)
                unique.append(root)
        return unique

    # Matchers

    def _match(self, reference: str) -> tuple[ResourceScheme, Callable[[str], ResolvedFile]]:
        # The last matcher accepts everything, so there is always a match.
        return next((scheme, resolver) for scheme, matches, resolver in self._resolvers if matches(reference))

    @staticmethod
    def _is_jar(reference: str) -> bool:
        return _JAR_PATTERN.match(reference) is not None

    @staticmethod
    def _is_http(reference: str) -> bool:
        return reference.lower().startswith(_HTTP_PREFIXES)

    @staticmethod
    def _is_file_url(reference: str) -> bool:
        return reference.startswith(_FILE_PREFIX)

    @staticmethod
    def _is_classpath(reference: str) -> bool:
        return reference.startswith("/")

    # Resolvers

    def _resolve_jar(self, reference: str) -> ResolvedFile:
        match = _JAR_PATTERN.match(reference)
        assert match is not None
        archive = Path(_strip_file_scheme(match["archive"])).expanduser()
        return self._extract_entry(reference, ResourceScheme.JAR, archive, match["entry"])

    def _resolve_http(self, reference: str) -> ResolvedFile:
        target = self._new_temp_file(PurePosixPath(urlparse(reference).path).suffix)
        logger.info(f"Fetching {reference} to {target}")
        try:
            self._download(reference, target)
        except BaseException:
            target.unlink(missing_ok=True)
            raise
        return ResolvedFile(reference=reference, scheme=ResourceScheme.HTTP, path=target, temporary=True)

    def _download(self, reference: str, target: Path) -> None:
        timeout = self.config.fetch_timeout
        deadline = time.monotonic() + timeout
        try:
            with self._http_client().stream("GET", reference, timeout=timeout) as response:
                if response.status_code in _NOT_FOUND_STATUSES:
                    raise ResourceNotFoundError(reference, f"HTTP {response.status_code}")
                if not response.is_success:
                    raise FetchError(reference, response.reason_phrase, response.status_code)

                with open(target, "wb") as sink:
                    for chunk in response.iter_bytes():
                        if time.monotonic() > deadline:
                            raise FetchTimeoutError(reference, timeout)
                        sink.write(chunk)
        except httpx.InvalidURL as e:
            logger.error(f"Invalid URL {reference}: {e}")
            raise ResourceNotFoundError(reference, f"invalid URL: {e}") from e
        except httpx.TimeoutException as e:
            logger.error(f"Fetching {reference} timed out after {timeout}s")
            raise FetchTimeoutError(reference, timeout) from e
        except httpx.HTTPError as e:
            logger.error(f"Failed to fetch {reference}: {e}")
            raise FetchError(reference, str(e)) from e
        except AvocadoError as e:
            logger.error(f"Failed to fetch {reference}: {e}")
            raise
        except OSError as e:
            logger.error(f"Failed to write {target}: {e}")
            raise ResourceIOError(f"Failed to write downloaded content to {target}: {e}") from e

    def _resolve_file_url(self, reference: str) -> ResolvedFile:
        path = Path(_strip_file_scheme(reference)).expanduser()
        return self._existing_file(reference, ResourceScheme.FILE, path)

    def _resolve_classpath(self, reference: str) -> ResolvedFile:
        entry = reference.lstrip("/")
        if not entry:
            raise ResourceNotFoundError(reference, "empty resource name")
        if ".." in PurePosixPath(entry).parts:
            logger.warning(f"Rejected resource name outside the search path: {reference}")
            raise ResourceNotFoundError(reference, "resource names may not contain '..'")

        for root in self.search_path():
            if root.is_dir():
                candidate = root / entry
                if candidate.is_file():
                    logger.debug(f"Found {entry} in {root}")
                    return ResolvedFile(reference=reference, scheme=ResourceScheme.CLASSPATH, path=candidate)
            elif root.suffix.lower() in _ARCHIVE_SUFFIXES and self._archive_contains(root, entry):
                logger.debug(f"Found {entry} in archive {root}")
                return self._extract_entry(reference, ResourceScheme.CLASSPATH, root, entry)

        raise ResourceNotFoundError(reference, "not on the resource search path")

    def _resolve_path(self, reference: str) -> ResolvedFile:
        return self._existing_file(reference, ResourceScheme.PATH, Path(reference).expanduser())

    # Helpers

    def _http_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                timeout=self.config.fetch_timeout,
                follow_redirects=True,
                headers={"User-Agent": self.config.user_agent},
            )
        return self._client

    def _new_temp_file(self, suffix: str = "") -> Path:
        temp_dir = self.config.temp_dir
        if temp_dir is not None:
            temp_dir.mkdir(parents=True, exist_ok=True)
        fd, name = tempfile.mkstemp(
            prefix=self.config.temp_prefix,
            suffix=suffix,
            dir=str(temp_dir) if temp_dir is not None else None,
        )
        os.close(fd)
        return Path(name)

    @staticmethod
    def _existing_file(reference: str, scheme: ResourceScheme, path: Path) -> ResolvedFile:
        if not path.is_file():
            raise ResourceNotFoundError(reference)
        return ResolvedFile(reference=reference, scheme=scheme, path=path)

    @staticmethod
    def _archive_contains(archive: Path, entry: str) -> bool:
        try:
            with zipfile.ZipFile(archive) as zf:
                return entry in zf.namelist()
        except (zipfile.BadZipFile, OSError) as e:
            logger.debug(f"Skipping unreadable archive {archive}: {e}")
            return False

    def _extract_entry(self, reference: str, scheme: ResourceScheme, archive: Path, entry: str) -> ResolvedFile:
        if not archive.is_file():
            logger.error(f"Archive {archive} does not exist")
            raise ResourceNotFoundError(reference, f"archive {archive} does not exist")

        logger.info(f"Extracting {entry} from {archive}")
        try:
            with zipfile.ZipFile(archive) as zf:
                try:
                    info = zf.getinfo(entry)
                except KeyError as e:
                    raise ResourceNotFoundError(reference, f"no entry {entry} in {archive}") from e
                if info.is_dir():
                    raise ResourceNotFoundError(reference, f"{entry} is a directory")

                target = self._new_temp_file(PurePosixPath(entry).suffix)
                try:
                    with zf.open(info) as source, open(target, "wb") as sink:
                        shutil.copyfileobj(source, sink)
                except (OSError, zipfile.BadZipFile) as e:
                    target.unlink(missing_ok=True)
                    raise ResourceIOError(f"Failed to extract {entry} from {archive}: {e}") from e
        except zipfile.BadZipFile as e:
            logger.error(f"Not a valid archive: {archive}")
            raise ResourceIOError(f"Not a valid archive: {archive}") from e
        except AvocadoError as e:
            logger.error(f"Failed to extract {entry} from {archive}: {e}")
            raise
        except OSError as e:
            logger.error(f"Failed to read archive {archive}: {e}")
            raise ResourceIOError(f"Failed to read archive {archive}: {e}") from e

        return ResolvedFile(reference=reference, scheme=scheme, path=target, temporary=True)


def get_file(reference: str) -> Path:
    """Resolves a resource reference with a default FileLocator.

    Temporary copies are not cleaned up; use ``FileLocator.resolve`` to get
    hold of them.
    """
    with FileLocator() as locator:
        return locator.get_file(reference)
