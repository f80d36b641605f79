"""
Test bootstrap:
- Make src/ importable without installing the package
- Make tests/helpers importable as ``helpers``
- Shared fixtures for XDR buffers
"""
import pathlib
import sys

import pytest

TESTS = pathlib.Path(__file__).resolve().parent
SRC = TESTS.parent / "src"

for path in (SRC, TESTS):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))


@pytest.fixture
def writer():
    """Fresh XDR writer."""
    from stellar_client.codec.writer import XdrWriter
    return XdrWriter()


@pytest.fixture
def success_two_ops():
    """fee=100, success, [create_account success, payment success]"""
    from helpers.factories import op_record, tx_result
    return tx_result(100, 0, [op_record(0, 0), op_record(1, 0)])


@pytest.fixture
def strict_limits():
    """Limits that reject trailing bytes and allow at most 3 operations."""
    from stellar_client.codec.limits import DecodeLimits
    return DecodeLimits(max_operations=3, strict_trailing_bytes=True)
