"""
Household Ledger - Source Package

Budget and settlement engine for a two-person household sharing joint and
personal expenses.

DESIGN PRINCIPLES:
1. Validate at the entry boundary, compute on trusted snapshots
2. Derived values are recomputed, never stored
3. No silent corrections
4. Every mutation is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Household Ledger Team"
