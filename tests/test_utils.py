import pytest

from fswin.utils import format_bytes


@pytest.mark.parametrize("size, expected", [
    (0, "0 Bytes"),
    (1, "1 Bytes"),
    (1023, "1023 Bytes"),
    (1024, "1 KB"),
    (1536, "1.5 KB"),
    (1024 ** 2, "1 MB"),
    (int(2.25 * 1024 ** 3), "2.25 GB"),
    (1024 ** 5, "1 PB"),
    (1024 ** 8, "1 YB"),
    (1024 ** 9, "1024 YB"),
])
def test_format_bytes(size, expected):
    assert format_bytes(size) == expected


def test_format_bytes_rounds_to_decimals():
    assert format_bytes(1234567) == "1.18 MB"
    assert format_bytes(1234567, decimals=0) == "1 MB"
    assert format_bytes(1234567, decimals=-3) == "1 MB"
    assert format_bytes(1234567, decimals=4) == "1.1774 MB"


def test_format_bytes_rejects_negative():
    with pytest.raises(ValueError):
        format_bytes(-1)
