"""Calculation engine: the ledger and the splitter."""

from tipsplit.core.ledger import TIP_PERCENTAGE_PRESETS, Ledger
from tipsplit.core.money import round2
from tipsplit.core.splitter import derive

__all__ = ["TIP_PERCENTAGE_PRESETS", "Ledger", "derive", "round2"]
