import pytest

from bindata.input_config import InputConfig, create_input_config


@pytest.mark.parametrize(
    "path, expected",
    [
        ("./...", InputConfig(path=".", recursive=True)),
        (".", InputConfig(path=".", recursive=False)),
        ("/path/to/foo/...", InputConfig(path="/path/to/foo", recursive=True)),
        ("/path/to/bar", InputConfig(path="/path/to/bar", recursive=False)),
    ],
)
def test_create_input_config(path, expected):
    assert create_input_config(path) == expected


def test_create_input_config_cleans_path():
    assert create_input_config("./a/b/../c/") == InputConfig("a/c", False)


def test_create_input_config_empty_path():
    assert create_input_config("") == InputConfig(".", False)