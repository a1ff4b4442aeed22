"""Per-cart exclusive locks for checkout.

Checkout holds the cart's lock from reading its items until the unit of work
that placed the order has committed, so a second checkout of the same cart
either waits and finds it empty or gives up with ConcurrentModificationError.
"""

import threading
from contextlib import contextmanager

from storefront.errors import ConcurrentModificationError


class _Entry:
    __slots__ = ("lock", "waiters")

    def __init__(self):
        self.lock = threading.Lock()
        self.waiters = 0


class CartLocks:
    """Registry of one lock per cart id, dropped once nobody holds or awaits it."""

    def __init__(self):
        self._guard = threading.Lock()
        self._entries: dict[str, _Entry] = {}

    def __len__(self):
        with self._guard:
            return len(self._entries)

    def is_held(self, cart_id) -> bool:
        with self._guard:
            entry = self._entries.get(str(cart_id))
            return entry is not None and entry.lock.locked()

    @contextmanager
    def hold(self, cart_id, timeout: float = 5.0):
        key = str(cart_id)
        with self._guard:
            entry = self._entries.setdefault(key, _Entry())
            entry.waiters += 1

        try:
            if timeout <= 0:
                acquired = entry.lock.acquire(blocking=False)
            else:
                acquired = entry.lock.acquire(timeout=timeout)
            if not acquired:
                raise ConcurrentModificationError({"cart": [f"Cart {key} is being checked out by another request"]})

            try:
                yield
            finally:
                entry.lock.release()
        finally:
            with self._guard:
                entry.waiters -= 1
                if entry.waiters == 0:
                    self._entries.pop(key, None)


cart_locks = CartLocks()
