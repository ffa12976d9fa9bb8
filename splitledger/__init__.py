"""
Split Ledger

Settlement engine for shared expenses: who paid what, who owes what,
and where the money went.

DESIGN PRINCIPLES:
1. The engine is pure: same snapshot in, same numbers out
2. Allocation conserves every item's total
3. Round once, at the end, half-to-even
4. No silent corrections: gaps in Weighted/Exact maps are reported, not fixed
5. Storage layer is swappable
"""

__version__ = "1.0.0"
