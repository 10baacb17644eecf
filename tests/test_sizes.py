import pytest

from upstream.errors import InvalidFormat
from upstream.sizes import parse_size


@pytest.mark.parametrize(
    "text,expected",
    [
        ("0", 0),
        ("10", 10),
        ("10B", 10),
        ("1K", 1024),
        ("1KB", 1024),
        ("1kb", 1024),
        ("1.5K", 1536),
        ("2M", 2 * 1024 ** 2),
        ("6G", 6442450944),
        ("6GB", 6442450944),
        ("1 TB", 1024 ** 4),
        ("1P", 1024 ** 5),
        ("1EB", 1024 ** 6),
    ],
)
def test_parse_size(text, expected):
    assert parse_size(text) == expected


@pytest.mark.parametrize("text", ["", "bogus", "K", "10X", "10KBB", "-1K", "1.2.3M", "10\n", " 10"])
def test_parse_size_invalid(text):
    with pytest.raises(InvalidFormat):
        parse_size(text)


def test_invalid_format_is_value_error():
    with pytest.raises(ValueError):
        parse_size("bogus")


@pytest.mark.parametrize("text", ["10 ", "10\t", "1 ", "٥", "1_0", "1  K"])
def test_parse_size_rejects_stray_space_and_non_ascii(text):
    with pytest.raises(InvalidFormat):
        parse_size(text)


def test_parse_size_space_before_unit():
    assert parse_size("2 K") == 2048
    assert parse_size("3 b") == 3
