"""Reading vector set files and writing response documents.

ACVP servers deliver a vector set wrapped in an envelope:

  [{"acvVersion": "1.0"}, {"vsId": 1, "algorithm": "ACVP-AES-ECB", "testGroups": [...]}]

Both the envelope and a bare vector set object are accepted.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .errors import VectorSetDecodeError

DEFAULT_ACV_VERSION = "1.0"


def split_envelope(document: Any) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split a decoded document into (header, vector set).

    The header carries acvVersion, vsId and algorithm when present.

    Raises:
        VectorSetDecodeError: If no vector set object is found
    """
    header: dict[str, Any] = {}

    if isinstance(document, list):
        body = None
        for item in document:
            if not isinstance(item, dict):
                raise VectorSetDecodeError(
                    f"vector set envelope entries must be objects, got {type(item).__name__}"
                )
            if "acvVersion" in item:
                header["acvVersion"] = item["acvVersion"]
            if "testGroups" in item:
                body = item
        if body is None:
            raise VectorSetDecodeError("vector set envelope contains no testGroups object")
    elif isinstance(document, dict):
        body = document
    else:
        raise VectorSetDecodeError(
            f"vector set must be an object or array, got {type(document).__name__}"
        )

    for name in ("vsId", "algorithm", "mode", "revision"):
        if name in body:
            header[name] = body[name]

    return header, body


def load_vector_set(path: str | Path) -> tuple[dict[str, Any], bytes]:
    """Load a vector set file.

    Returns:
        Tuple of (header, vector set JSON bytes ready for processing)

    Raises:
        VectorSetDecodeError: If the file is not valid JSON
    """
    path = Path(path)
    raw = path.read_bytes()
    try:
        document = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise VectorSetDecodeError(f"malformed vector set file {path}: {e}") from e

    header, body = split_envelope(document)
    return header, json.dumps(body).encode()


def build_response_document(
    header: dict[str, Any],
    groups: list[dict[str, Any]],
    wrap_envelope: bool = True,
) -> Any:
    """Assemble the response for a processed vector set.

    Args:
        header: Header returned by load_vector_set
        groups: Response test groups from BlockCipher.process
        wrap_envelope: Emit the ACVP [{"acvVersion"}, {...}] envelope

    Returns:
        JSON-serializable response document
    """
    body: dict[str, Any] = {}
    if "vsId" in header:
        body["vsId"] = header["vsId"]
    if "algorithm" in header:
        body["algorithm"] = header["algorithm"]
    body["testGroups"] = groups

    if not wrap_envelope:
        return body
    return [{"acvVersion": header.get("acvVersion", DEFAULT_ACV_VERSION)}, body]


def export_to_json(
    document: Any,
    output_path: str | Path,
    indent: int = 2,
) -> Path:
    """Write a response document to a JSON file.

    Args:
        document: Response document
        output_path: Path to output JSON file
        indent: JSON indentation level (0 = compact)

    Returns:
        Path to written file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w") as f:
        json.dump(document, f, indent=indent or None)
        f.write("\n")

    return output_path
