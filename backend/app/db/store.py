"""
Data-store boundary for the savings planner.

The analysis engine never talks to storage; routes read accounts, transactions
and purchase goals through a FinanceStore and hand plain values to the engine.
InMemoryStore backs local runs and tests and can be seeded from a JSON file
shaped like the output of app.db.seed.
"""
import json
import logging
import threading
import uuid
from abc import ABC, abstractmethod
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from app.schemas.purchase import Account, FuturePurchase, TransactionRecord

logger = logging.getLogger(__name__)


class FinanceStore(ABC):
    @abstractmethod
    def get_purchase(self, purchase_id: str, user_id: str) -> Optional[FuturePurchase]:
        ...

    @abstractmethod
    def list_purchases(self, user_id: str, status: Optional[str] = None) -> List[FuturePurchase]:
        ...

    @abstractmethod
    def create_purchase(self, user_id: str, fields: Dict[str, Any]) -> FuturePurchase:
        ...

    @abstractmethod
    def update_purchase(self, purchase_id: str, user_id: str, fields: Dict[str, Any]) -> Optional[FuturePurchase]:
        ...

    @abstractmethod
    def delete_purchase(self, purchase_id: str, user_id: str) -> bool:
        ...

    @abstractmethod
    def list_accounts(self, user_id: str) -> List[Account]:
        ...

    @abstractmethod
    def list_transactions(self, user_id: str, start: date, end: date) -> List[TransactionRecord]:
        """Transactions dated within [start, end], oldest first."""


class InMemoryStore(FinanceStore):
    def __init__(self, accounts=None, transactions=None, purchases=None):
        self._lock = threading.Lock()
        self._accounts: List[Account] = list(accounts or [])
        self._transactions: List[TransactionRecord] = list(transactions or [])
        self._purchases: Dict[str, FuturePurchase] = {p.id: p for p in (purchases or [])}

    @classmethod
    def from_json(cls, path) -> "InMemoryStore":
        with open(Path(path), "r", encoding="utf-8") as f:
            data = json.load(f)

        store = cls(
            accounts=[Account(**a) for a in data.get("accounts", [])],
            transactions=[TransactionRecord(**t) for t in data.get("transactions", [])],
            purchases=[FuturePurchase(**p) for p in data.get("future_purchases", [])],
        )
        logger.info(
            "loaded %d accounts, %d transactions, %d purchases from %s",
            len(store._accounts), len(store._transactions), len(store._purchases), path,
        )
        return store

    def get_purchase(self, purchase_id, user_id):
        with self._lock:
            purchase = self._purchases.get(purchase_id)
        if purchase is None or purchase.user_id != user_id:
            return None
        return purchase

    def list_purchases(self, user_id, status=None):
        with self._lock:
            rows = [p for p in self._purchases.values() if p.user_id == user_id]
        if status:
            rows = [p for p in rows if p.status == status]
        # most urgent first, then nearest target date
        return sorted(rows, key=lambda p: (-p.urgency, p.target_date))

    def create_purchase(self, user_id, fields):
        now = datetime.now(timezone.utc)
        purchase = FuturePurchase(
            id=str(uuid.uuid4()),
            user_id=user_id,
            created_at=now,
            updated_at=now,
            **fields,
        )
        with self._lock:
            self._purchases[purchase.id] = purchase
        return purchase

    def update_purchase(self, purchase_id, user_id, fields):
        with self._lock:
            current = self._purchases.get(purchase_id)
            if current is None or current.user_id != user_id:
                return None
            data = current.model_dump()
            data.update(fields)
            data["updated_at"] = datetime.now(timezone.utc)
            updated = FuturePurchase(**data)
            self._purchases[purchase_id] = updated
        return updated

    def delete_purchase(self, purchase_id, user_id):
        with self._lock:
            current = self._purchases.get(purchase_id)
            if current is None or current.user_id != user_id:
                return False
            del self._purchases[purchase_id]
        return True

    def list_accounts(self, user_id):
        with self._lock:
            return [a for a in self._accounts if a.user_id == user_id]

    def list_transactions(self, user_id, start, end):
        with self._lock:
            rows = [
                t for t in self._transactions
                if t.user_id == user_id and start <= t.date <= end
            ]
        return sorted(rows, key=lambda t: t.date)
