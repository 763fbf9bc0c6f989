import pytest

from doutil.text import bytes_to_string, fuzz_wrap, string_to_bytes


def test_fuzz_wrap():
    assert fuzz_wrap("hello") == "%hello%"


@pytest.mark.parametrize(
    "text, data",
    [
        ("abc", bytes([97, 98, 99])),
        ("请问", bytes([232, 175, 183, 233, 151, 174])),
    ],
)
def test_string_to_bytes(text, data):
    assert string_to_bytes(text) == data


@pytest.mark.parametrize(
    "data, text",
    [
        (bytes([97, 98, 99]), "abc"),
        (bytes([232, 175, 183, 233, 151, 174]), "请问"),
    ],
)
def test_bytes_to_string(data, text):
    assert bytes_to_string(data) == text


def test_invalid_bytes_round_trip():
    raw = b"\xff\xfeabc"
    assert string_to_bytes(bytes_to_string(raw)) == raw