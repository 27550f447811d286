# textile_shop/services/cart_sessions.py
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from textile_shop.services.cart_ledger import CartLedger


class CartSessionStore:
    """
    One `CartLedger` per session key (the shopper's profile id).

    Sync FastAPI endpoints run on a thread pool, so two requests from the
    same shopper may overlap. Each key gets its own lock; `locked(key)` holds
    it for the whole read-validate-mutate sequence of a request. Different
    shoppers never block each other.
    """

    def __init__(self, ledger_factory: Callable[[], CartLedger] = CartLedger):
        self._ledger_factory = ledger_factory
        self._ledgers: dict[str, CartLedger] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def _lock_for(self, key: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    @contextmanager
    def locked(self, key: object) -> Iterator[CartLedger]:
        """
        Exclusive access to the ledger of `key`, created on first use.
        """
        key = str(key)
        with self._lock_for(key):
            ledger = self._ledgers.get(key)
            if ledger is None:
                ledger = self._ledgers[key] = self._ledger_factory()
            yield ledger

    def drop(self, key: object) -> None:
        """Forget a session's ledger (e.g. on sign-out)."""
        key = str(key)
        with self._lock_for(key):
            self._ledgers.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return str(key) in self._ledgers

    def __len__(self) -> int:
        return len(self._ledgers)
