"""Data model for ACVP block-cipher vector sets and responses.

A vector set is decoded into VectorSet/TestGroup/TestCase dataclasses,
processed, and answered with TestGroupResponse/TestCaseResponse records.
Everything here lives for one request only.

Field names follow the ACVP JSON wire format:

  testGroups[]: tgId, testType, direction, keylen, tests[]
  tests[]:      tcId, pt, ct, iv, key

Missing fields decode to their zero value (0, "" or []); fields of the
wrong JSON type reject the whole document.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from .errors import VectorSetDecodeError


def _get_int(obj: dict[str, Any], name: str, where: str) -> int:
    value = obj.get(name, 0)
    # bool is an int subclass but never a valid id or length
    if isinstance(value, bool) or not isinstance(value, int):
        raise VectorSetDecodeError(
            f"{where}: field {name!r} must be an integer, got {value!r}", field=name
        )
    return value


def _get_id(obj: dict[str, Any], name: str, where: str) -> int:
    value = _get_int(obj, name, where)
    if not 0 <= value < 1 << 64:
        raise VectorSetDecodeError(
            f"{where}: field {name!r} must be an unsigned 64-bit integer, got {value}",
            field=name,
        )
    return value


def _get_str(obj: dict[str, Any], name: str, where: str) -> str:
    value = obj.get(name, "")
    if value is None:
        return ""
    if not isinstance(value, str):
        raise VectorSetDecodeError(
            f"{where}: field {name!r} must be a string, got {value!r}", field=name
        )
    return value


def _get_list(obj: dict[str, Any], name: str, where: str) -> list[Any]:
    value = obj.get(name, [])
    if value is None:
        return []
    if not isinstance(value, list):
        raise VectorSetDecodeError(
            f"{where}: field {name!r} must be an array, got {type(value).__name__}",
            field=name,
        )
    return value


def _require_object(value: Any, where: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise VectorSetDecodeError(f"{where} must be a JSON object, got {type(value).__name__}")
    return value


@dataclass
class TestCase:
    """One test case of a block-cipher test group (hex fields undecoded)."""

    __test__ = False  # not a pytest class

    tc_id: int
    pt_hex: str = ""
    ct_hex: str = ""
    iv_hex: str = ""
    key_hex: str = ""

    @classmethod
    def from_dict(cls, obj: Any, tg_id: int) -> TestCase:
        obj = _require_object(obj, f"test in group {tg_id}")
        tc_id = _get_id(obj, "tcId", f"test group {tg_id}")
        where = f"test case {tg_id}/{tc_id}"
        return cls(
            tc_id=tc_id,
            pt_hex=_get_str(obj, "pt", where),
            ct_hex=_get_str(obj, "ct", where),
            iv_hex=_get_str(obj, "iv", where),
            key_hex=_get_str(obj, "key", where),
        )


@dataclass
class TestGroup:
    """A batch of test cases sharing direction, test type and key length."""

    __test__ = False

    tg_id: int
    test_type: str = ""
    direction: str = ""
    key_bits: int = 0
    tests: list[TestCase] = field(default_factory=list)

    @classmethod
    def from_dict(cls, obj: Any) -> TestGroup:
        obj = _require_object(obj, "test group")
        tg_id = _get_id(obj, "tgId", "test group")
        where = f"test group {tg_id}"
        return cls(
            tg_id=tg_id,
            test_type=_get_str(obj, "testType", where),
            direction=_get_str(obj, "direction", where),
            key_bits=_get_int(obj, "keylen", where),
            tests=[TestCase.from_dict(t, tg_id) for t in _get_list(obj, "tests", where)],
        )


@dataclass
class VectorSet:
    """Top-level block-cipher vector set: an ordered list of test groups."""

    groups: list[TestGroup] = field(default_factory=list)

    @property
    def case_count(self) -> int:
        return sum(len(g.tests) for g in self.groups)

    @classmethod
    def from_dict(cls, obj: Any) -> VectorSet:
        obj = _require_object(obj, "vector set")
        return cls(groups=[TestGroup.from_dict(g) for g in _get_list(obj, "testGroups", "vector set")])


def parse_vector_set(data: bytes | str) -> VectorSet:
    """Decode a JSON vector set.

    Raises:
        VectorSetDecodeError: If the document is not valid JSON or does not
            have the block-cipher vector set shape
    """
    try:
        obj = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise VectorSetDecodeError(f"malformed vector set: {e}") from e
    return VectorSet.from_dict(obj)


@dataclass
class MCTResult:
    """One outer round of a Monte Carlo Test."""

    key_hex: str
    pt_hex: str = ""
    ct_hex: str = ""
    iv_hex: str = ""

    def to_dict(self) -> dict[str, str]:
        """Convert to the resultsArray wire form; iv only when present."""
        d = {"key": self.key_hex, "pt": self.pt_hex, "ct": self.ct_hex}
        if self.iv_hex:
            d["iv"] = self.iv_hex
        return d


@dataclass
class TestCaseResponse:
    """Answer to one test case: a single output or an MCT result list."""

    __test__ = False

    tc_id: int
    ct_hex: str = ""
    pt_hex: str = ""
    mct_results: list[MCTResult] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"tcId": self.tc_id}
        if self.ct_hex:
            d["ct"] = self.ct_hex
        if self.pt_hex:
            d["pt"] = self.pt_hex
        if self.mct_results:
            d["resultsArray"] = [r.to_dict() for r in self.mct_results]
        return d


@dataclass
class TestGroupResponse:
    """Answers for every case of one test group, in input order."""

    __test__ = False

    tg_id: int
    tests: list[TestCaseResponse] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"tgId": self.tg_id, "tests": [t.to_dict() for t in self.tests]}
