"""AES Monte Carlo key shuffle.

Between outer rounds of an AES Monte Carlo Test the key is XORed with the
last (and for longer keys the second-to-last) output block:

  128-bit: key[0:16]  ^= result[0:16]
  192-bit: key[0:8]   ^= prev_result[8:16]
           key[8:24]  ^= result[0:16]
  256-bit: key[0:16]  ^= prev_result[0:16]
           key[16:32] ^= result[0:16]
"""

from __future__ import annotations

from .errors import InternalError

SUPPORTED_KEY_LENGTHS = (16, 24, 32)


def key_shuffle(key: bytearray, result: bytes, prev_result: bytes) -> None:
    """Apply the key shuffle to key in place.

    Args:
        key: 16, 24 or 32-byte AES key, modified in place
        result: Final 16-byte output of the outer round
        prev_result: Second-to-last 16-byte output of the outer round

    Raises:
        InternalError: If the key length is not 16, 24 or 32 bytes
    """
    n = len(key)
    if n == 16:
        for i in range(16):
            key[i] ^= result[i]
    elif n == 24:
        for i in range(8):
            key[i] ^= prev_result[i + 8]
        for i in range(16):
            key[i + 8] ^= result[i]
    elif n == 32:
        for i in range(16):
            key[i] ^= prev_result[i]
        for i in range(16):
            key[i + 16] ^= result[i]
    else:
        raise InternalError(f"unhandled key length {n} in key shuffle")
