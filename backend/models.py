"""
Pydantic models used across the backend.

Input shapes validate at the FastAPI route boundary; output shapes document
the JSON the API returns. Keep models minimal and stable.

Guidelines:
- `StressLogIn` is what clients send. Server-assigned fields (`id`,
    `timestamp`, `date`) live only on `StressLogOut`.
- Analytics field names are camelCase because that is the wire shape the
    front end already consumes.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class StressLogIn(BaseModel):
        """Input shape for a stress log sent by clients.

        Fields:
        - `user_id`: client-chosen identifier; never checked against accounts.
        - `mood`: stress level, nominally 1-10. Not range-checked.
        - `tag`: trigger label, usually one of `suggestions.STRESS_TAGS`.
        - `note`: free text.
        - `sleep_hours` / `work_hours`: hours, nullable.
        - `heart_rate`: beats per minute, nullable.
        """

        user_id: str
        mood: int
        tag: Optional[str] = None
        note: Optional[str] = None
        sleep_hours: Optional[float] = None
        work_hours: Optional[float] = None
        heart_rate: Optional[int] = None


class StressLogOut(StressLogIn):
        """A persisted row, as returned by the list endpoint."""

        id: str
        timestamp: int
        date: str


class SubmitResponse(BaseModel):
        id: str
        suggestions: List[str]
        message: str


class TrendPoint(BaseModel):
        day: int
        mood: Optional[int]
        sleep: float
        timestamp: int


class AnalyticsSummary(BaseModel):
        averageMood: float = 0
        averageSleep: float = 0
        mostCommonTrigger: str = "None"
        trendData: List[TrendPoint] = Field(default_factory=list)


class ResetResponse(BaseModel):
        message: str
        deletedRecords: int


class StressTagsResponse(BaseModel):
        tags: List[str]
        labels: Dict[int, str]
