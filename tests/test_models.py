"""Tests for vector set parsing and response serialization."""

import pytest

from acvp_block.errors import VectorSetDecodeError
from acvp_block.models import (
    MCTResult,
    TestCaseResponse,
    TestGroupResponse,
    parse_vector_set,
)


class TestParseVectorSet:
    """Tests for parse_vector_set."""

    def test_full_group(self) -> None:
        vs = parse_vector_set(
            '{"testGroups": [{"tgId": 2, "testType": "AFT", "direction": "encrypt",'
            ' "keylen": 256, "tests": [{"tcId": 4, "pt": "00", "key": "11", "iv": "22"}]}]}'
        )

        assert len(vs.groups) == 1
        g = vs.groups[0]
        assert (g.tg_id, g.test_type, g.direction, g.key_bits) == (2, "AFT", "encrypt", 256)
        t = g.tests[0]
        assert (t.tc_id, t.pt_hex, t.ct_hex, t.iv_hex, t.key_hex) == (4, "00", "", "22", "11")
        assert vs.case_count == 1

    def test_missing_fields_default_to_zero_values(self) -> None:
        vs = parse_vector_set('{"testGroups": [{"tests": [{}]}]}')

        g = vs.groups[0]
        assert g.tg_id == 0
        assert g.direction == ""
        assert g.key_bits == 0
        assert g.tests[0].key_hex == ""

    def test_missing_test_groups(self) -> None:
        assert parse_vector_set(b"{}").groups == []

    def test_extra_fields_ignored(self) -> None:
        vs = parse_vector_set('{"vsId": 9, "testGroups": [{"tgId": 1, "payloadLen": 128}]}')
        assert vs.groups[0].tg_id == 1

    @pytest.mark.parametrize("doc", [
        b"",
        b"\xff\xfe",
        b'{"testGroups": {}}',
        b'{"testGroups": [1]}',
        b'{"testGroups": [{"tgId": true}]}',
        b'{"testGroups": [{"tgId": 1, "tests": [{"tcId": 1, "key": 5}]}]}',
        b'{"testGroups": [{"tgId": 1.5}]}',
    ])
    def test_malformed(self, doc: bytes) -> None:
        with pytest.raises(VectorSetDecodeError):
            parse_vector_set(doc)

    @pytest.mark.parametrize("doc, field", [
        (b'{"testGroups": [{"tgId": -1}]}', "tgId"),
        (b'{"testGroups": [{"tgId": 18446744073709551616}]}', "tgId"),
        (b'{"testGroups": [{"tgId": 1, "tests": [{"tcId": -3}]}]}', "tcId"),
    ])
    def test_ids_must_be_unsigned_64_bit(self, doc: bytes, field: str) -> None:
        with pytest.raises(VectorSetDecodeError, match="unsigned 64-bit") as exc:
            parse_vector_set(doc)
        assert exc.value.field == field

    def test_largest_id_accepted(self) -> None:
        vs = parse_vector_set(b'{"testGroups": [{"tgId": 18446744073709551615}]}')
        assert vs.groups[0].tg_id == 2**64 - 1


class TestResponseSerialization:
    """Tests for response to_dict methods."""

    def test_single_output_case(self) -> None:
        assert TestCaseResponse(tc_id=3, ct_hex="ab").to_dict() == {"tcId": 3, "ct": "ab"}
        assert TestCaseResponse(tc_id=3, pt_hex="cd").to_dict() == {"tcId": 3, "pt": "cd"}

    def test_mct_case(self) -> None:
        resp = TestCaseResponse(
            tc_id=1,
            mct_results=[MCTResult(key_hex="00", pt_hex="11", ct_hex="22")],
        )
        assert resp.to_dict() == {
            "tcId": 1,
            "resultsArray": [{"key": "00", "pt": "11", "ct": "22"}],
        }

    def test_mct_iv_only_when_present(self) -> None:
        with_iv = MCTResult(key_hex="00", pt_hex="11", ct_hex="22", iv_hex="33")
        assert with_iv.to_dict()["iv"] == "33"
        assert "iv" not in MCTResult(key_hex="00").to_dict()

    def test_group(self) -> None:
        group = TestGroupResponse(tg_id=5, tests=[TestCaseResponse(tc_id=1, ct_hex="ff")])
        assert group.to_dict() == {"tgId": 5, "tests": [{"tcId": 1, "ct": "ff"}]}
