"""Golden reference implementation under test using PyCryptodome.

ReferenceOracle answers the same operations a real implementation under
test would, so vector sets can be processed offline and the driver can
be checked against a known-good cipher.
"""

from __future__ import annotations

from collections import Counter

from Crypto.Cipher import AES

from .errors import OracleError
from .interfaces import Transactable


def _ecb(key: bytes, data: bytes, encrypt: bool) -> bytes:
    cipher = AES.new(key, AES.MODE_ECB)
    return cipher.encrypt(data) if encrypt else cipher.decrypt(data)


def _cbc(key: bytes, data: bytes, iv: bytes, encrypt: bool) -> bytes:
    cipher = AES.new(key, AES.MODE_CBC, iv=iv)
    return cipher.encrypt(data) if encrypt else cipher.decrypt(data)


def _ctr(key: bytes, data: bytes, iv: bytes, encrypt: bool) -> bytes:
    # The IV is the full initial counter block
    cipher = AES.new(key, AES.MODE_CTR, nonce=b"", initial_value=iv)
    return cipher.encrypt(data)


# algo -> (function, number of arguments)
_HANDLERS = {
    "AES": (_ecb, 2),
    "AES-CBC": (_cbc, 3),
    "AES-CTR": (_ctr, 3),
}


class ReferenceOracle(Transactable):
    """PyCryptodome-backed implementation of the block-cipher operations.

    Supports "AES", "AES-CBC" and "AES-CTR", each with "/encrypt" and
    "/decrypt". Counts calls per operation in ``calls``.
    """

    def __init__(self) -> None:
        self.calls: Counter[str] = Counter()

    def transact(self, operation: str, n: int, *args: bytes) -> list[bytes]:
        algo, _, direction = operation.partition("/")
        if algo not in _HANDLERS or direction not in ("encrypt", "decrypt"):
            raise OracleError(f"unsupported operation {operation!r}", operation=operation)

        func, nargs = _HANDLERS[algo]
        if len(args) != nargs:
            raise OracleError(
                f"operation {operation!r} takes {nargs} arguments, got {len(args)}",
                operation=operation,
            )

        self.calls[operation] += 1
        try:
            result = func(*args, encrypt=direction == "encrypt")
        except (ValueError, TypeError, OverflowError) as e:
            raise OracleError(f"block operation {operation!r} failed: {e}", operation=operation) from e
        return [result]

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())

    def reset(self) -> None:
        """Clear the call counters."""
        self.calls.clear()


# Known-answer vectors: FIPS-197 Appendix C and SP 800-38A Appendix F.
KNOWN_ANSWER_VECTORS = [
    {
        "name": "FIPS-197 C.1 AES-128",
        "operation": "AES/encrypt",
        "key": bytes.fromhex("000102030405060708090a0b0c0d0e0f"),
        "iv": None,
        "plaintext": bytes.fromhex("00112233445566778899aabbccddeeff"),
        "ciphertext": bytes.fromhex("69c4e0d86a7b0430d8cdb78070b4c55a"),
    },
    {
        "name": "FIPS-197 C.2 AES-192",
        "operation": "AES/encrypt",
        "key": bytes.fromhex("000102030405060708090a0b0c0d0e0f1011121314151617"),
        "iv": None,
        "plaintext": bytes.fromhex("00112233445566778899aabbccddeeff"),
        "ciphertext": bytes.fromhex("dda97ca4864cdfe06eaf70a0ec0d7191"),
    },
    {
        "name": "FIPS-197 C.3 AES-256",
        "operation": "AES/encrypt",
        "key": bytes.fromhex(
            "000102030405060708090a0b0c0d0e0f101112131415161718191a1b1c1d1e1f"
        ),
        "iv": None,
        "plaintext": bytes.fromhex("00112233445566778899aabbccddeeff"),
        "ciphertext": bytes.fromhex("8ea2b7ca516745bfeafc49904b496089"),
    },
    {
        "name": "SP 800-38A F.1.1 ECB-AES128",
        "operation": "AES/encrypt",
        "key": bytes.fromhex("2b7e151628aed2a6abf7158809cf4f3c"),
        "iv": None,
        "plaintext": bytes.fromhex("6bc1bee22e409f96e93d7e117393172a"),
        "ciphertext": bytes.fromhex("3ad77bb40d7a3660a89ecaf32466ef97"),
    },
    {
        "name": "SP 800-38A F.2.1 CBC-AES128",
        "operation": "AES-CBC/encrypt",
        "key": bytes.fromhex("2b7e151628aed2a6abf7158809cf4f3c"),
        "iv": bytes.fromhex("000102030405060708090a0b0c0d0e0f"),
        "plaintext": bytes.fromhex("6bc1bee22e409f96e93d7e117393172a"),
        "ciphertext": bytes.fromhex("7649abac8119b246cee98e9b12e9197d"),
    },
    {
        "name": "SP 800-38A F.5.1 CTR-AES128",
        "operation": "AES-CTR/encrypt",
        "key": bytes.fromhex("2b7e151628aed2a6abf7158809cf4f3c"),
        "iv": bytes.fromhex("f0f1f2f3f4f5f6f7f8f9fafbfcfdfeff"),
        "plaintext": bytes.fromhex("6bc1bee22e409f96e93d7e117393172a"),
        "ciphertext": bytes.fromhex("874d6191b620e3261bef6864990db6ce"),
    },
]


def validate_known_answers(transactable: Transactable) -> list[tuple[str, bool, str]]:
    """Run every known-answer vector in both directions.

    Returns:
        List of (vector name, is_correct, error_detail)
    """
    report = []
    for vec in KNOWN_ANSWER_VECTORS:
        algo = vec["operation"].split("/")[0]
        for direction, data, expected in (
            ("encrypt", vec["plaintext"], vec["ciphertext"]),
            ("decrypt", vec["ciphertext"], vec["plaintext"]),
        ):
            args = [vec["key"], data]
            if vec["iv"] is not None:
                args.append(vec["iv"])
            name = f"{vec['name']} {direction}"
            result = transactable.transact(f"{algo}/{direction}", 1, *args)[0]
            if result == expected:
                report.append((name, True, ""))
            else:
                report.append((
                    name,
                    False,
                    f"mismatch: expected {expected.hex()}, got {result.hex()}",
                ))
    return report
