"""AES Monte Carlo Test engines.

Each engine runs 100 outer rounds of 1000 chained oracle calls and
returns one MCTResult per outer round. Rounds depend on each other, so
calls are strictly sequential.

The transact argument is a callable ``transact(n, *args) -> list[bytes]``
already bound to the operation name (e.g. "AES-CBC/encrypt").
"""

from __future__ import annotations

import enum
import logging
from typing import Callable, Optional

from .errors import InternalError
from .models import MCTResult
from .shuffle import SUPPORTED_KEY_LENGTHS, key_shuffle

logger = logging.getLogger(__name__)

MCT_OUTER_ROUNDS = 100
MCT_INNER_ROUNDS = 1000

TransactFunc = Callable[..., list[bytes]]
MctEngine = Callable[[TransactFunc, bool, bytes, bytes, Optional[bytes]], list[MCTResult]]


def _check_key(key: bytes) -> bytearray:
    if len(key) not in SUPPORTED_KEY_LENGTHS:
        raise InternalError(f"Monte Carlo Test cannot run with a {len(key)}-byte key")
    return bytearray(key)


def iterate_ecb(
    transact: TransactFunc,
    encrypt: bool,
    key: bytes,
    text: bytes,
    iv: bytes | None = None,
) -> list[MCTResult]:
    """AES Monte Carlo Test, ECB mode.

    Args:
        transact: Oracle call bound to the operation
        encrypt: True for the encrypt direction
        key: Initial key (16, 24 or 32 bytes); not modified
        text: Seed plaintext (encrypt) or ciphertext (decrypt)
        iv: Ignored, ECB has no IV

    Returns:
        100 MCTResult records in round order
    """
    key_buf = _check_key(key)
    results: list[MCTResult] = []

    for i in range(MCT_OUTER_ROUNDS):
        round_key = bytes(key_buf)
        record = MCTResult(key_hex=round_key.hex())
        if encrypt:
            record.pt_hex = text.hex()
        else:
            record.ct_hex = text.hex()

        for _ in range(MCT_INNER_ROUNDS):
            prev_result = text
            text = transact(1, round_key, text)[0]
        result = text

        if encrypt:
            record.ct_hex = result.hex()
        else:
            record.pt_hex = result.hex()

        key_shuffle(key_buf, result, prev_result)
        results.append(record)
        logger.debug("ECB MCT round %d: key=%s", i, record.key_hex)

    return results


def iterate_cbc(
    transact: TransactFunc,
    encrypt: bool,
    key: bytes,
    text: bytes,
    iv: bytes | None = None,
) -> list[MCTResult]:
    """AES Monte Carlo Test, CBC mode.

    Every oracle call is a one-block CBC operation ``(key, text, iv)``.
    The first inner call uses the round's seed text and IV, after which
    the round IV becomes the next text. Later calls chain on the previous
    output (encrypt) or the previous text (decrypt) as IV, and take the
    output from two calls back as text.

    Args:
        transact: Oracle call bound to the operation
        encrypt: True for the encrypt direction
        key: Initial key (16, 24 or 32 bytes); not modified
        text: Seed plaintext (encrypt) or ciphertext (decrypt)
        iv: Initial 16-byte IV

    Returns:
        100 MCTResult records in round order
    """
    if iv is None:
        raise InternalError("CBC Monte Carlo Test requires an IV")
    key_buf = _check_key(key)
    results: list[MCTResult] = []

    for i in range(MCT_OUTER_ROUNDS):
        round_key = bytes(key_buf)
        record = MCTResult(key_hex=round_key.hex(), iv_hex=iv.hex())
        if encrypt:
            record.pt_hex = text.hex()
        else:
            record.ct_hex = text.hex()

        result = b""
        prev_result = b""
        prev_text = b""
        for j in range(MCT_INNER_ROUNDS):
            prev_result = result
            if j > 0:
                iv = result if encrypt else prev_text

            result = transact(1, round_key, text, iv)[0]

            prev_text = text
            text = iv if j == 0 else prev_result

        if encrypt:
            record.ct_hex = result.hex()
        else:
            record.pt_hex = result.hex()

        key_shuffle(key_buf, result, prev_result)

        iv = result
        text = prev_result

        results.append(record)
        logger.debug("CBC MCT round %d: key=%s", i, record.key_hex)

    return results


class MctStrategy(enum.Enum):
    """Monte Carlo Test procedure a cipher mode supports."""

    NONE = "none"
    ECB = "ecb"
    CBC = "cbc"


MCT_ENGINES: dict[MctStrategy, MctEngine] = {
    MctStrategy.ECB: iterate_ecb,
    MctStrategy.CBC: iterate_cbc,
}


def get_mct_engine(strategy: MctStrategy) -> MctEngine | None:
    """Return the engine for a strategy, or None when MCT is unsupported."""
    return MCT_ENGINES.get(strategy)
