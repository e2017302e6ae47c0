"""
gameverse_lib package

Reusable pieces behind the GameVerse storefront: the cart ledger, the
catalog providers, currency formatting and the checkout event hook.

The purpose of this __init__.py file is to expose selected functions so they
can be imported directly from gameverse_lib without referencing submodules.
Example:
    from gameverse_lib import calculate_cart_total, format_eur
"""

# Expose cart ledger operations
from .cart_utils import (
    CartLedger, LineItem, UnknownEntryError,
    add_entry, set_quantity, remove, increment, decrement,
    calculate_cart_total, cart_item_count,
)

# Expose catalog types and providers
from .catalog import (
    CatalogEntry, CatalogError, StaticCatalog, SqliteCatalog, featured_entries,
)

# Expose currency formatting helpers
from .currency import format_eur, to_money

from .aws_events import (
    checkout_items, report_checkout, log_checkout,
    send_checkout_event_to_sqs, default_checkout_handler,
)

from .logger import setup_logger
