"""Block-cipher test-group processor.

Turns an ACVP block-cipher vector set into a response by sending each
test case to the implementation under test. See
http://usnistgov.github.io/ACVP/artifacts/draft-celi-acvp-block-ciph-00.html#rfc.section.5.2
for details about the tests.
"""

from __future__ import annotations

import binascii
import logging
from dataclasses import dataclass
from typing import Any

from .errors import (
    OracleError,
    VectorSetDecodeError,
    VectorSetValidationError,
)
from .interfaces import Transactable
from .mct import MctStrategy, TransactFunc, get_mct_engine
from .models import (
    TestCase,
    TestCaseResponse,
    TestGroup,
    TestGroupResponse,
    VectorSet,
    parse_vector_set,
)
from .shuffle import SUPPORTED_KEY_LENGTHS

logger = logging.getLogger(__name__)

DIRECTIONS = {"encrypt": True, "decrypt": False}

# testType -> is Monte Carlo
TEST_TYPES = {"AFT": False, "CTR": False, "MCT": True}


@dataclass
class _PreparedCase:
    """A test case with its operands decoded and checked."""

    tc_id: int
    key: bytes
    text: bytes
    iv: bytes | None


@dataclass
class _PreparedGroup:
    tg_id: int
    encrypt: bool
    mct: bool
    operation: str
    cases: list[_PreparedCase]


def _decode_hex(value: str, tg_id: int, tc_id: int, field: str) -> bytes:
    try:
        return binascii.unhexlify(value)
    except ValueError as e:
        raise VectorSetDecodeError(
            f"failed to decode hex in test case {tg_id}/{tc_id} field {field!r}: {e}",
            tg_id=tg_id,
            tc_id=tc_id,
            field=field,
        ) from e


@dataclass(frozen=True)
class BlockCipher:
    """Descriptor of one ACVP block-cipher algorithm.

    Attributes:
        algo: Operation prefix sent to the implementation (e.g. "AES-CBC")
        block_size: Cipher block size in bytes
        inputs_are_block_multiples: Inputs must be whole blocks
        has_iv: Mode takes a block-sized IV
        mct: Monte Carlo procedure the mode supports
        description: One-line description for listings
    """

    algo: str
    block_size: int
    inputs_are_block_multiples: bool
    has_iv: bool
    mct: MctStrategy = MctStrategy.NONE
    description: str = ""

    def operation(self, encrypt: bool) -> str:
        """Operation name for a direction, e.g. "AES/encrypt"."""
        return f"{self.algo}/{'encrypt' if encrypt else 'decrypt'}"

    def process(self, vector_set: bytes | str, transactable: Transactable) -> list[dict[str, Any]]:
        """Process a vector set and return the response test groups.

        The whole vector set is validated before the first operation is
        sent, so a rejected request causes no oracle traffic.

        Args:
            vector_set: JSON vector set with a "testGroups" array
            transactable: Implementation under test

        Returns:
            List of {"tgId", "tests"} response dicts in input order

        Raises:
            VectorSetDecodeError: Malformed JSON, shape or hex
            VectorSetValidationError: Protocol constraint violated
            OracleError: The implementation failed an operation
        """
        parsed = parse_vector_set(vector_set)
        prepared = self.prepare(parsed)

        logger.info(
            "processing %s: %d groups, %d cases",
            self.algo,
            len(prepared),
            parsed.case_count,
        )

        return [self._run_group(group, transactable).to_dict() for group in prepared]

    def prepare(self, parsed: VectorSet) -> list[_PreparedGroup]:
        """Validate every group and decode every case."""
        return [self._prepare_group(group) for group in parsed.groups]

    def _prepare_group(self, group: TestGroup) -> _PreparedGroup:
        tg_id = group.tg_id

        if group.direction not in DIRECTIONS:
            raise VectorSetValidationError(
                f"test group {tg_id} has unknown direction {group.direction!r}",
                tg_id=tg_id,
                field="direction",
                actual=group.direction,
            )
        encrypt = DIRECTIONS[group.direction]
        op = self.operation(encrypt)

        if group.test_type not in TEST_TYPES:
            raise VectorSetValidationError(
                f"test group {tg_id} has unknown type {group.test_type!r}",
                tg_id=tg_id,
                field="testType",
                actual=group.test_type,
            )
        mct = TEST_TYPES[group.test_type]
        if mct and get_mct_engine(self.mct) is None:
            raise VectorSetValidationError(
                f"test group {tg_id} has type MCT which is unsupported for {op!r}",
                tg_id=tg_id,
                field="testType",
                actual=group.test_type,
            )

        if group.key_bits % 8 != 0:
            raise VectorSetValidationError(
                f"test group {tg_id} contains non-byte-multiple key length {group.key_bits}",
                tg_id=tg_id,
                field="keylen",
                actual=group.key_bits,
            )
        key_bytes = group.key_bits // 8

        if mct and key_bytes not in SUPPORTED_KEY_LENGTHS:
            raise VectorSetValidationError(
                f"test group {tg_id} has key length {group.key_bits} which the "
                f"Monte Carlo Test does not support",
                tg_id=tg_id,
                field="keylen",
                expected=[n * 8 for n in SUPPORTED_KEY_LENGTHS],
                actual=group.key_bits,
            )

        logger.debug(
            "test group %d: type=%s direction=%s keylen=%d cases=%d",
            tg_id,
            group.test_type,
            group.direction,
            group.key_bits,
            len(group.tests),
        )

        cases = [self._prepare_case(group, test, encrypt, key_bytes) for test in group.tests]
        return _PreparedGroup(tg_id=tg_id, encrypt=encrypt, mct=mct, operation=op, cases=cases)

    def _prepare_case(
        self, group: TestGroup, test: TestCase, encrypt: bool, key_bytes: int
    ) -> _PreparedCase:
        tg_id, tc_id = group.tg_id, test.tc_id

        if len(test.key_hex) != key_bytes * 2:
            raise VectorSetValidationError(
                f"test case {tg_id}/{tc_id} contains key {test.key_hex!r} of length "
                f"{len(test.key_hex)}, but expected {group.key_bits}-bit key",
                tg_id=tg_id,
                tc_id=tc_id,
                field="key",
                expected=key_bytes * 2,
                actual=len(test.key_hex),
            )
        key = _decode_hex(test.key_hex, tg_id, tc_id, "key")

        field = "pt" if encrypt else "ct"
        text = _decode_hex(test.pt_hex if encrypt else test.ct_hex, tg_id, tc_id, field)

        if self.inputs_are_block_multiples and len(text) % self.block_size != 0:
            raise VectorSetValidationError(
                f"test case {tg_id}/{tc_id} has input of length {len(text)}, "
                f"but expected multiple of {self.block_size}",
                tg_id=tg_id,
                tc_id=tc_id,
                field=field,
                expected=self.block_size,
                actual=len(text),
            )

        iv = None
        if self.has_iv:
            iv = _decode_hex(test.iv_hex, tg_id, tc_id, "iv")
            if len(iv) != self.block_size:
                raise VectorSetValidationError(
                    f"test case {tg_id}/{tc_id} has IV of length {len(iv)}, "
                    f"but expected {self.block_size}",
                    tg_id=tg_id,
                    tc_id=tc_id,
                    field="iv",
                    expected=self.block_size,
                    actual=len(iv),
                )

        return _PreparedCase(tc_id=tc_id, key=key, text=text, iv=iv)

    def _run_group(self, group: _PreparedGroup, transactable: Transactable) -> TestGroupResponse:
        response = TestGroupResponse(tg_id=group.tg_id)

        for case in group.cases:
            transact = _bind(transactable, group.operation, group.tg_id, case.tc_id)
            test_resp = TestCaseResponse(tc_id=case.tc_id)

            if not group.mct:
                if self.has_iv:
                    result = transact(1, case.key, case.text, case.iv)
                else:
                    result = transact(1, case.key, case.text)

                if group.encrypt:
                    test_resp.ct_hex = result[0].hex()
                else:
                    test_resp.pt_hex = result[0].hex()
            else:
                engine = get_mct_engine(self.mct)
                test_resp.mct_results = engine(transact, group.encrypt, case.key, case.text, case.iv)

            response.tests.append(test_resp)

        return response


def _bind(transactable: Transactable, operation: str, tg_id: int, tc_id: int) -> TransactFunc:
    """Bind an operation name and check that enough results come back."""

    def transact(n: int, *args: bytes) -> list[bytes]:
        try:
            results = transactable.transact(operation, n, *args)
        except OracleError as e:
            if e.tg_id is None:
                e.tg_id, e.tc_id = tg_id, tc_id
            raise
        if len(results) < n:
            raise OracleError(
                f"block operation {operation!r} returned {len(results)} results, expected {n}",
                operation=operation,
                tg_id=tg_id,
                tc_id=tc_id,
            )
        return results

    return transact
