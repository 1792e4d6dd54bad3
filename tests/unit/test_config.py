import logging

import pytest

from user_directory.config import _get_level


@pytest.mark.parametrize(
    "name,expected",
    [("DEBUG", logging.DEBUG), ("warning", logging.WARNING), (" error ", logging.ERROR)],
)
def test_known_level_names(name, expected):
    assert _get_level(name) == expected


@pytest.mark.parametrize("name", ["BASIC_FORMAT", "root", "verbose", ""])
def test_unknown_level_names_fall_back_to_info(name):
    assert _get_level(name) == logging.INFO
