import uuid
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Sentiment(str, Enum):
    POSITIVE = "Positive"
    NEGATIVE = "Negative"
    NEUTRAL = "Neutral"


class ExportFormat(str, Enum):
    JSON = "json"
    CSV = "csv"
    PDF = "pdf"


def new_result_id() -> str:
    """Default id factory for analysis results."""
    return str(uuid.uuid4())


class AnalysisResult(BaseModel):
    """
    One reconciled judgment.

    ``sentiment`` and ``confidence`` hold whatever the classifier returned:
    they are not checked against :class:`Sentiment` or the [0, 1] range.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    sentiment: str
    confidence: float
    keywords: List[str] = Field(default_factory=list)
    explanation: str = ""
    source: Optional[str] = None


# Request / response bodies of the HTTP API
class AnalyzeRequest(BaseModel):
    texts: List[str]
    source: Optional[str] = None
    model_config = ConfigDict(extra="forbid")


class AnalyzeResponse(BaseModel):
    results: List[AnalysisResult]
    total: int
    chunks: int


class ExtractResponse(BaseModel):
    texts: List[str]
    count: int
    format: str


class ExportRequest(BaseModel):
    results: List[AnalysisResult]
