"""Focus navigation package."""

from tipsplit.navigation.focus import (
    FOCUS_ORDER,
    FocusedField,
    FocusNavigator,
    next_field,
    previous_field,
)

__all__ = [
    "FOCUS_ORDER",
    "FocusedField",
    "FocusNavigator",
    "next_field",
    "previous_field",
]
