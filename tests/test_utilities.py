import os
import stat

import pytest

from payload_toolkit.core.exceptions import DirectoryError
from payload_toolkit.core.text import slugify
from payload_toolkit.infrastructure.security.random_string import RANDOM_STRING_SOURCE, random_string
from payload_toolkit.infrastructure.storage.local_file_storage import create_dir_if_not_exists


def test_random_string_length():
    assert len(random_string(10)) == 10
    assert len(random_string()) == 25
    assert random_string(0) == ""


def test_random_string_alphabet():
    assert len(RANDOM_STRING_SOURCE) == 64
    assert len(set(RANDOM_STRING_SOURCE)) == 64
    assert set(random_string(500)) <= set(RANDOM_STRING_SOURCE)


def test_random_string_is_not_repeated():
    values = {random_string() for _ in range(100)}
    assert len(values) == 100


def test_random_string_negative_size():
    with pytest.raises(ValueError):
        random_string(-1)


def test_create_dir_if_not_exists(tmp_path):
    target = tmp_path / "myDir" / "nested"

    create_dir_if_not_exists(target)
    create_dir_if_not_exists(target)

    assert target.is_dir()
    assert stat.S_IMODE(os.stat(target).st_mode) & 0o700 == 0o700


def test_create_dir_if_not_exists_on_file(tmp_path):
    path = tmp_path / "file"
    path.write_text("x")

    with pytest.raises(DirectoryError):
        create_dir_if_not_exists(path)


@pytest.mark.parametrize(
    "name, text, expected, error_expected",
    [
        ("valid string", "now is the time", "now-is-the-time", False),
        ("empty string", "", "", True),
        (
            "complex string",
            "Now is the time for all GOOD men! + fish & such &^123",
            "now-is-the-time-for-all-good-men-fish-such-123",
            False,
        ),
        ("japanese string", "こんにちは世界", "", True),
        ("japanese and roman string", "hello worldこんにちは世界", "hello-world", False),
    ],
)
def test_slugify(name, text, expected, error_expected):
    if error_expected:
        with pytest.raises(ValueError):
            slugify(text)
        return

    assert slugify(text) == expected, name
