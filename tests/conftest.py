"""Shared fixtures: fake implementations under test."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from acvp_block.errors import OracleError
from acvp_block.golden import ReferenceOracle
from acvp_block.interfaces import Transactable


@dataclass
class Call:
    operation: str
    n: int
    args: tuple[bytes, ...]
    result: bytes


class RecordingOracle(Transactable):
    """Cheap deterministic stand-in for a cipher that records every call.

    Output = (text XOR iv) with every byte incremented and rotated left
    by one position, so chaining bugs show up as wrong values.
    """

    def __init__(self, fail_after: int | None = None, short: bool = False) -> None:
        self.calls: list[Call] = []
        self.fail_after = fail_after
        self.short = short

    def transact(self, operation: str, n: int, *args: bytes) -> list[bytes]:
        if self.fail_after is not None and len(self.calls) >= self.fail_after:
            raise OracleError("implementation crashed", operation=operation)
        if self.short:
            return []

        key, text = args[0], args[1]
        iv = args[2] if len(args) > 2 else bytes(len(text))
        mixed = bytes(t ^ v ^ key[i % len(key)] for i, (t, v) in enumerate(zip(text, iv)))
        out = bytes((b + 1) & 0xFF for b in mixed[1:] + mixed[:1])

        self.calls.append(Call(operation, n, args, out))
        return [out]


@pytest.fixture
def recording_oracle() -> RecordingOracle:
    return RecordingOracle()


@pytest.fixture
def failing_oracle() -> RecordingOracle:
    """Fails on the third call."""
    return RecordingOracle(fail_after=2)


@pytest.fixture
def short_oracle() -> RecordingOracle:
    """Returns no results at all."""
    return RecordingOracle(short=True)


@pytest.fixture
def reference_oracle() -> ReferenceOracle:
    return ReferenceOracle()
