"""
Decoded XDR models for ledger submission results.

- types.py: account ids, assets, prices and offers shared by results
- operation_result.py: per-operation result variants and their dispatch table
- transaction_result.py: TransactionResult and decode_transaction_result
"""

from .types import *
from .operation_result import *
from .transaction_result import *

from . import types as _types
from . import operation_result as _operation_result
from . import transaction_result as _transaction_result

__all__ = _types.__all__ + _operation_result.__all__ + _transaction_result.__all__
