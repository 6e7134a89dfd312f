"""Tests for vector set file loading and response export."""

import json

import pytest

from acvp_block.errors import VectorSetDecodeError
from acvp_block.reporting import (
    build_response_document,
    export_to_json,
    load_vector_set,
    split_envelope,
)


BODY = {
    "vsId": 1234,
    "algorithm": "ACVP-AES-ECB",
    "revision": "1.0",
    "testGroups": [{"tgId": 1, "tests": []}],
}


class TestSplitEnvelope:
    """Tests for split_envelope."""

    def test_acvp_envelope(self) -> None:
        header, body = split_envelope([{"acvVersion": "1.0"}, BODY])

        assert header == {
            "acvVersion": "1.0",
            "vsId": 1234,
            "algorithm": "ACVP-AES-ECB",
            "revision": "1.0",
        }
        assert body is BODY

    def test_bare_object(self) -> None:
        header, body = split_envelope({"testGroups": []})
        assert header == {}
        assert body == {"testGroups": []}

    def test_envelope_without_vector_set(self) -> None:
        with pytest.raises(VectorSetDecodeError, match="no testGroups"):
            split_envelope([{"acvVersion": "1.0"}])

    @pytest.mark.parametrize("doc", [42, "text", None, [1, BODY]])
    def test_wrong_shape(self, doc) -> None:
        with pytest.raises(VectorSetDecodeError):
            split_envelope(doc)


class TestLoadVectorSet:
    """Tests for load_vector_set."""

    def test_load_envelope(self, tmp_path) -> None:
        path = tmp_path / "vs.json"
        path.write_text(json.dumps([{"acvVersion": "1.0"}, BODY]))

        header, data = load_vector_set(path)

        assert header["algorithm"] == "ACVP-AES-ECB"
        assert json.loads(data) == BODY

    def test_malformed_file(self, tmp_path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("[{")

        with pytest.raises(VectorSetDecodeError, match="bad.json"):
            load_vector_set(path)


class TestBuildResponse:
    """Tests for build_response_document and export_to_json."""

    GROUPS = [{"tgId": 1, "tests": [{"tcId": 1, "ct": "00"}]}]

    def test_envelope(self) -> None:
        header = {"acvVersion": "1.0", "vsId": 7, "algorithm": "ACVP-AES-CBC"}

        doc = build_response_document(header, self.GROUPS)

        assert doc == [
            {"acvVersion": "1.0"},
            {"vsId": 7, "algorithm": "ACVP-AES-CBC", "testGroups": self.GROUPS},
        ]

    def test_default_version(self) -> None:
        doc = build_response_document({}, self.GROUPS)
        assert doc[0] == {"acvVersion": "1.0"}
        assert doc[1] == {"testGroups": self.GROUPS}

    def test_bare(self) -> None:
        doc = build_response_document({"vsId": 7}, self.GROUPS, wrap_envelope=False)
        assert doc == {"vsId": 7, "testGroups": self.GROUPS}

    def test_export(self, tmp_path) -> None:
        out = export_to_json({"testGroups": self.GROUPS}, tmp_path / "sub" / "resp.json")

        assert out.exists()
        assert json.loads(out.read_text()) == {"testGroups": self.GROUPS}

    def test_export_compact(self, tmp_path) -> None:
        out = export_to_json({"a": [1, 2]}, tmp_path / "resp.json", indent=0)
        assert out.read_text() == '{"a": [1, 2]}\n'
