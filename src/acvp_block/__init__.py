"""ACVP block-cipher test driver with AES Monte Carlo Test support."""

__version__ = "0.1.0"

from .errors import (
    AcvpError,
    InternalError,
    OracleError,
    VectorSetDecodeError,
    VectorSetValidationError,
)
from .interfaces import RunConfig, Transactable
from .block import BlockCipher
from .mct import MctStrategy, iterate_cbc, iterate_ecb
from .shuffle import key_shuffle
from .algorithms import ALGORITHMS, get_algorithm
from .golden import ReferenceOracle

__all__ = [
    "AcvpError",
    "InternalError",
    "OracleError",
    "VectorSetDecodeError",
    "VectorSetValidationError",
    "RunConfig",
    "Transactable",
    "BlockCipher",
    "MctStrategy",
    "iterate_ecb",
    "iterate_cbc",
    "key_shuffle",
    "ALGORITHMS",
    "get_algorithm",
    "ReferenceOracle",
]
