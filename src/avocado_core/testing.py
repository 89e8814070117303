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
import random
import shutil
import tempfile
from pathlib import Path
from uuid import uuid4

from faker import Faker

from avocado_core.config import AvocadoConfig
from avocado_core.exceptions import AvocadoError
from avocado_core.locator import FileLocator
from avocado_core.utils.logger import logger


def _normalize_folder_name(folder_name: str) -> str:
    """Strips one leading and one trailing path separator."""
    if folder_name.startswith(os.sep):
        folder_name = folder_name[1:]
    if folder_name.endswith(os.sep):
        folder_name = folder_name[:-1]
    return folder_name


class UnitTestHarness:
    """Shared helpers for unit tests.

    Provides a random generator, a fake data generator and a temporary
    folder for the test run, deleted on ``tear_down``.
    """

    def __init__(
        self,
        base_dir: Path | None = None,
        seed: int | None = None,
        locale: str | None = None,
    ):
        """Initializes the harness and creates its test folder.

        Args:
            base_dir: Parent of the test folder. Defaults to the process temp dir.
            seed: Optional seed for both the random and the fake data generators.
            locale: Optional Faker locale (e.g. 'fr_FR').
        """
        parent = Path(base_dir) if base_dir is not None else Path(tempfile.gettempdir())
        self.test_folder = parent / str(uuid4())
        self.random = random.Random(seed)
        self.faker = Faker(locale)
        if seed is not None:
            self.faker.seed_instance(seed)

        # Absolute names are looked up from the filesystem root only.
        self._locator = FileLocator(
            AvocadoConfig(resource_path=[Path(self.test_folder.anchor)], include_sys_path=False)
        )
        self.set_up()

    def __enter__(self) -> "UnitTestHarness":
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        self.tear_down()

    def set_up(self) -> None:
        """Creates the test folder."""
        self.test_folder.mkdir(parents=True, exist_ok=True)
        logger.info(f"Test folder set to: [{self.test_folder}]")

    def tear_down(self) -> None:
        """Deletes the test folder and everything in it."""
        try:
            shutil.rmtree(self.test_folder)
            logger.info(f"Test folder [{self.test_folder}] deleted")
        except OSError as e:
            logger.error(f"Failed to delete test folder [{self.test_folder}]: {e}")

    def random_number(self, bound: int) -> int:
        """Returns a random integer in ``[0, bound)``."""
        return self.random.randrange(bound)

    def new_file(self, suffix: str = ".json") -> Path:
        """Returns a unique, not yet existing file path inside the test folder."""
        return self.test_folder / f"{uuid4()}{suffix}"

    def exist_file(self, filename: str) -> bool:
        """Checks whether a file exists in the test folder.

        A name holding a path separator is rejected unless its directory is
        the test folder itself. A bare name is looked up inside the test folder.
        """
        if os.sep in filename:
            folder, _, name = filename.rpartition(os.sep)
            if _normalize_folder_name(folder) != _normalize_folder_name(str(self.test_folder)):
                return False
        else:
            name = filename

        try:
            return self._locator.get_file(str(self.test_folder / name)).is_file()
        except AvocadoError:
            return False
