"""Registry of supported ACVP block-cipher algorithms."""

from .block import BlockCipher
from .mct import MctStrategy

# ACVP algorithm name -> descriptor
ALGORITHMS: dict[str, BlockCipher] = {
    "ACVP-AES-ECB": BlockCipher(
        algo="AES",
        block_size=16,
        inputs_are_block_multiples=True,
        has_iv=False,
        mct=MctStrategy.ECB,
        description="AES in ECB mode (AFT, MCT)",
    ),
    "ACVP-AES-CBC": BlockCipher(
        algo="AES-CBC",
        block_size=16,
        inputs_are_block_multiples=True,
        has_iv=True,
        mct=MctStrategy.CBC,
        description="AES in CBC mode (AFT, MCT)",
    ),
    "ACVP-AES-CTR": BlockCipher(
        algo="AES-CTR",
        block_size=16,
        inputs_are_block_multiples=False,
        has_iv=True,
        mct=MctStrategy.NONE,
        description="AES in CTR mode (AFT, CTR)",
    ),
}


def get_algorithm(name: str) -> BlockCipher:
    """Get algorithm descriptor by ACVP name.

    Raises:
        KeyError: If the algorithm is not registered
    """
    if name not in ALGORITHMS:
        available = ", ".join(ALGORITHMS.keys())
        raise KeyError(f"Unknown algorithm '{name}'. Available: {available}")
    return ALGORITHMS[name]


def list_algorithms() -> list[dict[str, str]]:
    """List registered algorithms with descriptions.

    Returns:
        List of dicts with 'name' and 'description' keys
    """
    result = []
    for name, cipher in ALGORITHMS.items():
        result.append({
            "name": name,
            "description": cipher.description or "No description",
        })
    return result


__all__ = [
    "ALGORITHMS",
    "get_algorithm",
    "list_algorithms",
]
