"""
Cart ledger: the ordered line items of a shopping cart.

A ledger is an immutable value. Every operation below returns a new ledger
and leaves its input untouched, so the web layer can simply replace the
session's cart with whatever comes back.
"""
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Iterable, List, Tuple

from .catalog import CatalogEntry
from .currency import to_money


class UnknownEntryError(KeyError):
    """Raised in strict mode when an id does not match any line in the cart."""

    def __init__(self, entry_id):
        super().__init__(entry_id)
        self.entry_id = entry_id

    def __str__(self):
        return f"Game {self.entry_id} is not in the cart"


@dataclass(frozen=True)
class LineItem:
    entry: CatalogEntry
    quantity: int

    def __post_init__(self):
        if self.quantity < 1:
            raise ValueError("The quantity must be a positive number.")

    @property
    def entry_id(self) -> int:
        return self.entry.id

    @property
    def subtotal(self) -> Decimal:
        # exact; rounding happens once on the cart total
        return self.entry.price * self.quantity


@dataclass(frozen=True)
class CartLedger:
    items: Tuple[LineItem, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))
        seen = set()
        for item in self.items:
            if item.entry_id in seen:
                raise ValueError(f"Duplicate game in cart: {item.entry_id}")
            seen.add(item.entry_id)

    def __len__(self):
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __contains__(self, entry_id):
        return self.index_of(entry_id) is not None

    def index_of(self, entry_id):
        for i, item in enumerate(self.items):
            if item.entry_id == entry_id:
                return i
        return None

    def ids(self) -> List[int]:
        return [item.entry_id for item in self.items]

    @classmethod
    def from_session(cls, rows: Iterable[dict], catalog) -> "CartLedger":
        """
        Rebuild a ledger from session rows like [{"id": 1, "quantity": 2}].

        Rows for games the catalog no longer has, or with a quantity below 1,
        are dropped. Repeated ids are merged.
        """
        ledger = cls()
        for row in rows or []:
            try:
                entry_id = int(row["id"])
                quantity = int(row["quantity"])
            except (KeyError, TypeError, ValueError):
                continue
            if quantity < 1:
                continue
            entry = catalog.get_entry(entry_id)
            if entry is None:
                continue
            ledger = add_entry(ledger, entry, quantity)
        return ledger

    def to_session(self) -> List[dict]:
        return [{"id": item.entry_id, "quantity": item.quantity} for item in self.items]


def _missing(ledger: CartLedger, entry_id, strict: bool) -> CartLedger:
    if strict:
        raise UnknownEntryError(entry_id)
    return ledger


def remove(ledger: CartLedger, entry_id, strict: bool = False) -> CartLedger:
    """
    Remove the line for entry_id. The other lines keep their order.
    """
    if entry_id not in ledger:
        return _missing(ledger, entry_id, strict)
    return CartLedger(tuple(item for item in ledger.items if item.entry_id != entry_id))


def set_quantity(ledger: CartLedger, entry_id, new_quantity: int, strict: bool = False) -> CartLedger:
    """
    Set the quantity of one line in place.

    A quantity of zero or less removes the line instead.
    """
    index = ledger.index_of(entry_id)
    if index is None:
        return _missing(ledger, entry_id, strict)
    if new_quantity <= 0:
        return remove(ledger, entry_id)

    items = list(ledger.items)
    if items[index].quantity == new_quantity:
        return ledger
    items[index] = replace(items[index], quantity=new_quantity)
    return CartLedger(tuple(items))


def add_entry(ledger: CartLedger, entry: CatalogEntry, quantity: int = 1) -> CartLedger:
    """
    Add a game to the cart, bumping the quantity if it is already there.
    """
    if quantity < 1:
        raise ValueError("The quantity must be a positive number.")
    index = ledger.index_of(entry.id)
    if index is None:
        return CartLedger(ledger.items + (LineItem(entry, quantity),))
    return set_quantity(ledger, entry.id, ledger.items[index].quantity + quantity)


def increment(ledger: CartLedger, entry_id, strict: bool = False) -> CartLedger:
    index = ledger.index_of(entry_id)
    if index is None:
        return _missing(ledger, entry_id, strict)
    return set_quantity(ledger, entry_id, ledger.items[index].quantity + 1)


def decrement(ledger: CartLedger, entry_id, strict: bool = False) -> CartLedger:
    # going below 1 drops the line, same as the row's "-" button
    index = ledger.index_of(entry_id)
    if index is None:
        return _missing(ledger, entry_id, strict)
    return set_quantity(ledger, entry_id, ledger.items[index].quantity - 1)


def calculate_cart_total(ledger: CartLedger) -> Decimal:
    """
    Calculate the total value of a cart.

    Sums exactly and rounds once, half-up, to 2 decimal places.
    """
    total = sum((item.subtotal for item in ledger.items), Decimal("0"))
    return to_money(total)


def cart_item_count(ledger: CartLedger) -> int:
    """
    Count total number of items in a cart.
    """
    return sum(item.quantity for item in ledger.items)
