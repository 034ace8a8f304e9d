import pytest
from quantumwalk.core.duration import (
    MAX_INTERVAL_MS,
    hash_to_duration,
    format_duration,
    parse_duration,
    parse_interval_string,
)
from quantumwalk.core.errors import HashFailure, InvalidInput

SHA256_OF_ZERO = "5feceb66ffc86f38d952786c6d696c79c2dbc239dd4e91b46729d73a27fb57e9"

def _digest(prefix: str) -> str:
    return prefix + "0" * (64 - len(prefix))

@pytest.mark.parametrize("prefix, max_interval, expected", [
    ("0000000000000000", MAX_INTERVAL_MS, 0),
    ("0000000000000001", MAX_INTERVAL_MS, 0),
    ("4000000000000000", MAX_INTERVAL_MS, 151_200_000),
    ("8000000000000000", MAX_INTERVAL_MS, 302_400_000),
    ("8000000000000000", 1000, 500),
    ("5555555555555555", 3, 1),
    ("aaaaaaaaaaaaaaaa", 3, 2),
    # exceeds float precision: a double-based product would round up to 2**63
    ("fffffffffffffffe", 2 ** 63, 2 ** 63 - 1),
    ("ffffffffffffffff", MAX_INTERVAL_MS, MAX_INTERVAL_MS - 1),
])
def test_hash_to_duration_reference_table(prefix, max_interval, expected):
    assert hash_to_duration(_digest(prefix), max_interval) == expected

def test_hash_to_duration_real_digest_uses_leading_64_bits():
    expected = (int(SHA256_OF_ZERO[:16], 16) * MAX_INTERVAL_MS) // (2 ** 64 - 1)
    assert hash_to_duration(SHA256_OF_ZERO) == expected
    # trailing characters do not matter
    assert hash_to_duration(SHA256_OF_ZERO[:16] + "f" * 48) == expected

def test_hash_to_duration_bounds():
    for prefix in ("0", "1", "7f", "9a3", "c0ffee", "deadbeef", "fffffffffffffff0", "ffffffffffffffff"):
        d = hash_to_duration(_digest(prefix.ljust(16, "f")), 1234567)
        assert 0 <= d < 1234567

def test_hash_to_duration_rejects_short_or_non_hex():
    with pytest.raises(HashFailure):
        hash_to_duration("abc")
    with pytest.raises(HashFailure):
        hash_to_duration("zz" * 32)
    # int() alone would read these as hex
    with pytest.raises(HashFailure):
        hash_to_duration("0x1_23456789abcd" + "0" * 48)
    with pytest.raises(HashFailure):
        hash_to_duration(" 123456789abcde" + "0" * 49)

def test_hash_to_duration_rejects_non_positive_max_interval():
    with pytest.raises(InvalidInput):
        hash_to_duration(SHA256_OF_ZERO, 0)
    with pytest.raises(InvalidInput):
        hash_to_duration(SHA256_OF_ZERO, -5)

def test_parse_and_format_duration():
    ms = parse_duration("3d 14h 23m")
    assert ms == 3 * 86_400_000 + 14 * 3_600_000 + 23 * 60_000
    assert format_duration(ms) == "3d 14h 23m"

def test_format_duration_components():
    assert format_duration(0) == "0s"
    assert format_duration(999) == "0s"
    assert format_duration(59_999) == "59s"
    assert format_duration(86_400_000) == "1d"
    assert format_duration(90_061_000) == "1d 1h 1m 1s"

def test_parse_duration_lenient():
    assert parse_duration("2.5D") == 216_000_000
    assert parse_duration("1h30m") == 5_400_000
    assert parse_duration("90 s") == 90_000
    assert parse_duration("hello") == 0
    assert parse_duration("") == 0

def test_parse_interval_string():
    assert parse_interval_string("3d 14h 23m, 2.5d, 48h, nope") == [310_980_000, 216_000_000, 172_800_000]
    assert parse_interval_string("") == []
