"""
What the two-line customer display can show.

Each state renders to exactly two lines of `width` characters.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Sequence, Tuple

from pricing.money import format_amount, to_decimal

DEFAULT_WIDTH = 20


def center_line(text: str, width: int = DEFAULT_WIDTH) -> str:
    """Truncate to width, then center with any odd space on the right."""
    clean = (text or "")[:width]
    left = (width - len(clean)) // 2
    return " " * left + clean + " " * (width - left - len(clean))


def split_line(left: str, right: str, width: int = DEFAULT_WIDTH) -> str:
    """`left` flush left and `right` flush right, truncating `left` first."""
    right = right[:width]
    max_left = max(width - len(right) - 1, 0)
    left = left[:max_left]
    return left + " " * (width - len(left) - len(right)) + right


def total_line(amount, width: int = DEFAULT_WIDTH, symbol: str = "$") -> str:
    return split_line("Total:", format_amount(amount, symbol=symbol), width)


@dataclass(frozen=True)
class Welcome:
    title: str = "Welcome"
    subtitle: str = ""

    def lines(self, width: int = DEFAULT_WIDTH, symbol: str = "$") -> Tuple[str, str]:
        return center_line(self.title, width), center_line(self.subtitle, width)


@dataclass(frozen=True)
class ItemAdded:
    name: str
    price: Decimal
    running_total: Decimal

    def __post_init__(self):
        object.__setattr__(self, "name", self.name or "")
        object.__setattr__(self, "price", to_decimal(self.price))
        object.__setattr__(self, "running_total", to_decimal(self.running_total))

    def lines(self, width: int = DEFAULT_WIDTH, symbol: str = "$") -> Tuple[str, str]:
        return (
            split_line(self.name, format_amount(self.price, symbol=symbol), width),
            total_line(self.running_total, width, symbol),
        )


@dataclass(frozen=True)
class Total:
    amount: Decimal

    def __post_init__(self):
        object.__setattr__(self, "amount", to_decimal(self.amount))

    def lines(self, width: int = DEFAULT_WIDTH, symbol: str = "$") -> Tuple[str, str]:
        return center_line("TOTAL", width), total_line(self.amount, width, symbol)


def state_for_cart(lines: Sequence, added_line=None, running_total=Decimal("0"), welcome: Optional[Welcome] = None):
    """
    Pick the display state after a cart change: Welcome for an empty cart,
    ItemAdded when a line was just added, Total otherwise.
    """
    if not lines:
        return welcome or Welcome()
    if added_line is not None:
        return ItemAdded(name=added_line.name, price=added_line.total_price, running_total=running_total)
    return Total(amount=running_total)
