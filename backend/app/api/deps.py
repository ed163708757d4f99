from datetime import date, datetime, timezone
from typing import Optional

from fastapi import Header, HTTPException

from app.core.config import DATA_FILE
from app.db.store import FinanceStore, InMemoryStore

_store: Optional[FinanceStore] = None


def get_store() -> FinanceStore:
    global _store
    if _store is None:
        _store = InMemoryStore.from_json(DATA_FILE) if DATA_FILE else InMemoryStore()
    return _store


def get_current_user(x_user_id: Optional[str] = Header(None)) -> str:
    """
    The session layer sits in front of this API and forwards the
    authenticated user id in the X-User-Id header.
    """
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return x_user_id


def get_today() -> date:
    return datetime.now(timezone.utc).date()
