import hashlib
import pytest
from quantumwalk.core.hasher import Sha256Hasher, hash_timestamp, is_valid_hash
from quantumwalk.core.errors import HashFailure, HashUnavailable

def test_hash_timestamp_matches_sha256_of_decimal_string():
    assert hash_timestamp(0) == "5feceb66ffc86f38d952786c6d696c79c2dbc239dd4e91b46729d73a27fb57e9"
    assert hash_timestamp(1) == "6b86b273ff34fce19d6b804eff5a3f5747ada4eaa22f1d49c01e52ddb7875b4b"
    assert hash_timestamp(1700000000123) == hashlib.sha256(b"1700000000123").hexdigest()

def test_is_valid_hash():
    assert is_valid_hash("a" * 64)
    assert is_valid_hash("A" * 64)
    assert not is_valid_hash("a" * 63)
    assert not is_valid_hash("g" * 64)

def test_hash_failure_wraps_cause():
    class Broken:
        def digest(self, data: bytes) -> str:
            raise RuntimeError("boom")
    with pytest.raises(HashFailure) as exc:
        hash_timestamp(5, Broken())
    assert isinstance(exc.value.__cause__, RuntimeError)

def test_malformed_digest_is_hash_failure():
    class Short:
        def digest(self, data: bytes) -> str:
            return "abc"
    with pytest.raises(HashFailure):
        hash_timestamp(5, Short())

def test_uppercase_digest_is_normalized():
    class Upper:
        def digest(self, data: bytes) -> str:
            return hashlib.sha256(data).hexdigest().upper()
    assert hash_timestamp(0, Upper()) == hash_timestamp(0)

def test_hash_unavailable_is_not_masked():
    class Missing:
        def digest(self, data: bytes) -> str:
            raise HashUnavailable("no sha256")
    with pytest.raises(HashUnavailable):
        hash_timestamp(0, Missing())

def test_sha256_hasher_unavailable(monkeypatch):
    def no_algorithms(name, *args, **kwargs):
        raise ValueError(f"unsupported hash type {name}")
    monkeypatch.setattr(hashlib, "new", no_algorithms)
    with pytest.raises(HashUnavailable):
        Sha256Hasher()
