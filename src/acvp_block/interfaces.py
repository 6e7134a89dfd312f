"""Core interfaces and configuration for the block-cipher ACVP driver."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


class Transactable(ABC):
    """An implementation under test that performs one operation per call.

    Subclasses wrap whatever channel reaches the implementation (a
    subprocess, a hardware harness, an in-process library). The driver
    only ever calls transact() and waits for it to return.
    """

    @abstractmethod
    def transact(self, operation: str, n: int, *args: bytes) -> list[bytes]:
        """Perform one operation.

        Args:
            operation: Operation name, e.g. "AES/encrypt" or "AES-CBC/decrypt"
            n: Number of results the caller expects back
            *args: Operation arguments (key, input and, for IV modes, IV)

        Returns:
            At least n result byte strings

        Raises:
            OracleError: If the implementation fails the operation
        """
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


@dataclass
class RunConfig:
    """Configuration for one processing run, built by the CLI."""

    # Registered ACVP algorithm name, e.g. "ACVP-AES-ECB"
    algorithm: str

    # JSON indentation of the written response (0 = compact)
    indent: int = 2

    # Wrap the response in the ACVP [{"acvVersion"}, {...}] envelope
    wrap_envelope: bool = True

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        from .algorithms import ALGORITHMS

        if self.algorithm not in ALGORITHMS:
            available = ", ".join(ALGORITHMS.keys())
            raise ValueError(f"Unknown algorithm '{self.algorithm}'. Available: {available}")
        if self.indent < 0:
            raise ValueError(f"indent must be >= 0, got {self.indent}")
