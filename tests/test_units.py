import pytest

from subpar.units import ByteSize


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, "0b"),
        (123, "123b"),
        (123 * 1024, "123kb"),
        ((123 * 1024) * 1024, "123mb"),
        (((123 * 1000) * 1024) * 1024, "123000mb"),
    ],
)
def test_byte_size(value, expected):
    assert str(ByteSize(value)) == expected


def test_byte_size_just_below_boundary():
    assert str(ByteSize(1023)) == "1023b"


def test_byte_size_truncates():
    assert str(ByteSize(2047)) == "1kb"