import os
import tempfile
from pathlib import Path
from typing import Generator

import pytest
from avocado_core.testing import UnitTestHarness


@pytest.fixture
def local_harness(tmp_path: Path) -> Generator[UnitTestHarness, None, None]:
    h = UnitTestHarness(base_dir=tmp_path)
    yield h
    h.tear_down()


def test_test_folder_is_created(local_harness: UnitTestHarness, tmp_path: Path) -> None:
    assert local_harness.test_folder.is_dir()
    assert local_harness.test_folder.parent == tmp_path


def test_default_test_folder_lives_in_temp_dir(harness: UnitTestHarness) -> None:
    assert harness.test_folder.parent == Path(tempfile.gettempdir())
    assert harness.test_folder.is_dir()


def test_exist_file_in_test_folder(local_harness: UnitTestHarness) -> None:
    f = local_harness.test_folder / "present.txt"
    f.write_text("here")

    assert local_harness.exist_file(str(f)) is True
    assert local_harness.exist_file(f"{local_harness.test_folder}{os.sep}") is False
    assert local_harness.exist_file("present.txt") is True


def test_exist_file_missing(local_harness: UnitTestHarness) -> None:
    assert local_harness.exist_file(str(local_harness.test_folder / "absent.txt")) is False
    assert local_harness.exist_file("absent.txt") is False


def test_exist_file_rejects_other_folder(local_harness: UnitTestHarness, tmp_path: Path) -> None:
    other = tmp_path / "other" / "dir"
    other.mkdir(parents=True)
    (other / "file.txt").write_text("elsewhere")

    assert local_harness.exist_file(str(other / "file.txt")) is False
    assert local_harness.exist_file("/other/dir/file.txt") is False


def test_exist_file_folder_comparison_ignores_leading_separator(local_harness: UnitTestHarness) -> None:
    (local_harness.test_folder / "data.json").write_text("{}")
    relative = str(local_harness.test_folder / "data.json").lstrip(os.sep)

    assert local_harness.exist_file(relative) is True


def test_random_number_bounds(local_harness: UnitTestHarness) -> None:
    values = [local_harness.random_number(10) for _ in range(200)]
    assert all(0 <= v < 10 for v in values)
    assert local_harness.random_number(1) == 0


def test_seeded_harnesses_are_reproducible(tmp_path: Path) -> None:
    with UnitTestHarness(base_dir=tmp_path, seed=42) as first, UnitTestHarness(base_dir=tmp_path, seed=42) as second:
        assert first.random_number(1_000_000) == second.random_number(1_000_000)
        assert first.faker.first_name() == second.faker.first_name()
        assert first.test_folder != second.test_folder


def test_locale(tmp_path: Path) -> None:
    with UnitTestHarness(base_dir=tmp_path, locale="fr_FR") as h:
        assert h.faker.locales == ["fr_FR"]


def test_new_file_is_unique_and_inside_folder(local_harness: UnitTestHarness) -> None:
    a, b = local_harness.new_file(), local_harness.new_file(".txt")

    assert a != b
    assert a.parent == b.parent == local_harness.test_folder
    assert a.suffix == ".json" and b.suffix == ".txt"
    assert not a.exists()


def test_tear_down_removes_folder(tmp_path: Path) -> None:
    h = UnitTestHarness(base_dir=tmp_path)
    (h.test_folder / "nested").mkdir()
    (h.test_folder / "nested" / "file.txt").write_text("x")

    h.tear_down()
    assert not h.test_folder.exists()

    # A second tear down only logs the failure
    h.tear_down()


def test_set_up_recreates_folder(local_harness: UnitTestHarness) -> None:
    local_harness.tear_down()
    local_harness.set_up()
    assert local_harness.test_folder.is_dir()
