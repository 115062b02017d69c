"""
Tip 'n Split - Source Package

A bill-splitting calculator: tip, total and a fair per-person breakdown.

DESIGN PRINCIPLES:
1. Tip percentage and tip amount never drift apart
2. Derived values are recomputed, never cached
3. Rounding discrepancies are reported, not hidden
4. Every applied edit is logged
"""

__version__ = "1.0.0"
__author__ = "Tip 'n Split Team"
