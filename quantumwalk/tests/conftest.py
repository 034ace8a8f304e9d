import pytest
from typing import List

from quantumwalk.core.hasher import Sha256Hasher

FIXED_DIGEST = "8" + "0" * 63  # leading 64 bits = 2**63, i.e. half of max_interval


class FixedHasher:
    """Returns the same digest for every input, giving a chain with constant intervals."""

    def __init__(self, digest: str = FIXED_DIGEST) -> None:
        self.value = digest
        self.inputs: List[bytes] = []

    def digest(self, data: bytes) -> str:
        self.inputs.append(data)
        return self.value


class CountingHasher(Sha256Hasher):
    def __init__(self) -> None:
        super().__init__()
        self.calls = 0

    def digest(self, data: bytes) -> str:
        self.calls += 1
        return super().digest(data)


@pytest.fixture
def fixed_hasher() -> FixedHasher:
    return FixedHasher()


@pytest.fixture
def counting_hasher() -> CountingHasher:
    return CountingHasher()
