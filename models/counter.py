from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict, Any
from datetime import datetime

COUNTERS_COLLECTION = "counters"
COUNTER_DETAIL_DOC_ID = "counterDoc"
NOW_SERVING_PLACEHOLDER = "-"


def counter_detail_reset() -> Dict[str, Any]:
    """Fields written to a counterDoc when its queue state is cleared"""
    return {
        "receivedTokens": [],
        "priority": [],
        "nowservingtoken": NOW_SERVING_PLACEHOLDER,
    }


class Counter(BaseModel):
    """A document in the counters collection"""
    model_config = ConfigDict(extra="ignore")

    id: str
    completed: Optional[int] = Field(None, description="Tokens completed today")
    email: Optional[str] = Field(None, description="Counter login; its local-part names the detail collection")

    @classmethod
    def from_snapshot(cls, snapshot) -> "Counter":
        data = snapshot.to_dict() or {}
        email = data.get("email")
        completed = data.get("completed")
        return cls(
            id=snapshot.id,
            email=email if isinstance(email, str) else None,
            completed=completed if isinstance(completed, int) else None,
        )


class ResetReport(BaseModel):
    """Outcome of one daily reset run"""
    started_at: datetime = Field(default_factory=datetime.utcnow)
    finished_at: Optional[datetime] = None
    requests_deleted: int = 0
    queue_deleted: int = 0
    counters_reset: int = 0
    counter_docs_cleared: int = 0
    counter_doc_failures: List[str] = Field(default_factory=list, description="Counter IDs whose counterDoc was not cleared")
    succeeded: bool = False
    error: Optional[str] = None
