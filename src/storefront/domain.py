"""Storefront domain: catalogue, carts, checkout, inventory and sales records.

A single bounded context: checkout converts a cart into an order and applies
inventory bookkeeping inside one unit of work, so carts, orders and inventory
records must share a domain (and a transaction).
"""

import structlog
from protean.domain import Domain

storefront = Domain(name="storefront")

logger = structlog.get_logger(__name__)
