"""
Catalog entries and the providers that supply them.

The cart only ever reads from a catalog. Entries are validated here, at the
catalog boundary, so the ledger can assume every price is an exact,
non-negative Decimal.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Callable, Iterable, List, Optional

logger = logging.getLogger("gameverse.catalog")

FEATURED_LIMIT = 3


class CatalogError(ValueError):
    """Raised when a catalog entry is malformed."""


def parse_price(value) -> Decimal:
    """
    Normalise a price to Decimal.

    Floats are refused: a price must come in as a literal (str, int or
    Decimal) so it never passes through binary floating point.
    """
    if isinstance(value, bool) or isinstance(value, float):
        raise CatalogError(f"Price must be a Decimal, int or str, got {value!r}")
    try:
        price = Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise CatalogError(f"Invalid price: {value!r}") from e
    if not price.is_finite():
        raise CatalogError(f"Invalid price: {value!r}")
    if price < 0:
        raise CatalogError(f"Price cannot be negative: {value!r}")
    return price


@dataclass(frozen=True)
class CatalogEntry:
    id: int
    name: str
    description: str
    price: Decimal
    image_ref: Optional[str] = None

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise CatalogError(f"Catalog entry {self.id} has no name")
        # frozen dataclass, so bypass __setattr__ to store the normalised price
        object.__setattr__(self, "price", parse_price(self.price))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": str(self.price),
            "image_ref": self.image_ref,
        }


class StaticCatalog:
    """In-memory catalog provider."""

    def __init__(self, entries: Iterable[CatalogEntry]):
        self._entries: List[CatalogEntry] = list(entries)

    def get_all_entries(self) -> List[CatalogEntry]:
        return list(self._entries)

    def get_entry(self, entry_id: int) -> Optional[CatalogEntry]:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None


class SqliteCatalog:
    """
    Catalog provider backed by the `games` table.

    Prices are stored as TEXT so they round-trip exactly. `connect` is a
    zero-argument callable returning a sqlite3 connection whose row_factory
    is sqlite3.Row.
    """

    def __init__(self, connect: Callable):
        self._connect = connect

    @staticmethod
    def _row_to_entry(row) -> CatalogEntry:
        return CatalogEntry(
            id=row["id"],
            name=row["title"],
            description=row["description"] or "",
            price=row["price"],
            image_ref=row["image_url"],
        )

    def get_all_entries(self) -> List[CatalogEntry]:
        conn = self._connect()
        try:
            cur = conn.cursor()
            cur.execute("SELECT * FROM games ORDER BY id")
            rows = cur.fetchall()
        finally:
            conn.close()

        entries = []
        for row in rows:
            try:
                entries.append(self._row_to_entry(row))
            except CatalogError as e:
                logger.warning("Skipping malformed game %s: %s", row["id"], e)
        return entries

    def get_entry(self, entry_id: int) -> Optional[CatalogEntry]:
        conn = self._connect()
        try:
            cur = conn.cursor()
            cur.execute("SELECT * FROM games WHERE id = ?", (entry_id,))
            row = cur.fetchone()
        finally:
            conn.close()

        if row is None:
            return None
        try:
            return self._row_to_entry(row)
        except CatalogError as e:
            logger.warning("Skipping malformed game %s: %s", row["id"], e)
            return None


def featured_entries(entries: List[CatalogEntry], limit: int = FEATURED_LIMIT) -> List[CatalogEntry]:
    """Featured carousel: the first few entries of the catalog."""
    return list(entries[:limit])
