"""
Keyboard focus order for the numeric inputs.

Subtotal -> Tax -> Tip Percentage -> Tip Amount

Only one field can be focused at a time, so focus is a single optional
value rather than one flag per field.
"""

from enum import Enum
from typing import Optional


class FocusedField(str, Enum):
    """Focusable inputs. Values are the labels shown in the keyboard toolbar."""
    SUBTOTAL = "Subtotal"
    TAX = "Tax"
    TIP_PERCENTAGE = "Tip Percentage"
    TIP_AMOUNT = "Tip Amount"


FOCUS_ORDER: tuple[FocusedField, ...] = (
    FocusedField.SUBTOTAL,
    FocusedField.TAX,
    FocusedField.TIP_PERCENTAGE,
    FocusedField.TIP_AMOUNT,
)

_NEXT = dict(zip(FOCUS_ORDER, FOCUS_ORDER[1:]))
_PREVIOUS = dict(zip(FOCUS_ORDER[1:], FOCUS_ORDER))


def next_field(current: Optional[FocusedField]) -> Optional[FocusedField]:
    """Field after current; None for the last field or no focus."""
    if current is None:
        return None
    return _NEXT.get(current)


def previous_field(current: Optional[FocusedField]) -> Optional[FocusedField]:
    """Field before current; None for the first field or no focus."""
    if current is None:
        return None
    return _PREVIOUS.get(current)


class FocusNavigator:
    """Tracks the focused input and moves it along FOCUS_ORDER."""

    def __init__(self, current: Optional[FocusedField] = None):
        self._current = current

    @property
    def current(self) -> Optional[FocusedField]:
        return self._current

    @property
    def label(self) -> Optional[str]:
        return self._current.value if self._current else None

    @property
    def can_advance(self) -> bool:
        return next_field(self._current) is not None

    @property
    def can_retreat(self) -> bool:
        return previous_field(self._current) is not None

    def focus(self, field: Optional[FocusedField]) -> None:
        """Focus a field. Passing None leaves focus where it is."""
        if field is not None:
            self._current = field

    def clear(self) -> None:
        self._current = None

    def advance(self) -> Optional[FocusedField]:
        """Move to the next field. At the end, focus stays put and None is returned."""
        target = next_field(self._current)
        self.focus(target)
        return target

    def retreat(self) -> Optional[FocusedField]:
        """Move to the previous field. At the start, focus stays put and None is returned."""
        target = previous_field(self._current)
        self.focus(target)
        return target
