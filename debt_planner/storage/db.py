from typing import Any, Dict, List, Optional
from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from ..domain.errors import UpstreamError
from ..utils.config import settings
from ..utils.logging import get_logger

log = get_logger(__name__)

_client: Optional[MongoClient] = None


def _collection() -> Optional[Collection]:
    """Debts collection, or None when no MONGODB_URI is configured."""
    global _client
    if not settings.MONGODB_URI:
        return None
    if _client is None:
        _client = MongoClient(settings.MONGODB_URI)
    return _client.get_default_database()[settings.DEBTS_COLLECTION]


def get_active_debts() -> List[Dict[str, Any]]:
    """
    Active debt documents, oldest first (that order is the simulator's
    tie-break order). Expected doc shape:
      {
        _id, name, status, balance, interest_rate_value,
        interest_rate_type ("EA" | "EM"), minimum_payment,
        total_installments?, paid_installments?, created_at (datetime)
      }
    """
    if not settings.MONGODB_URI:
        log.warning("MONGODB_URI not set; no stored debts available")
        return []

    try:
        # a URI without a database name raises ConfigurationError here
        collection = _collection()
        cur = collection.find({"status": "active"}).sort("created_at", ASCENDING)
        return list(cur)
    except PyMongoError as e:
        log.warning(f"debt store query failed: {e}")
        raise UpstreamError("debt store unavailable")
