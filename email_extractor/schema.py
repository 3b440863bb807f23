from datetime import datetime, timezone
from typing import Annotated, Dict, List, Literal, Optional, Union
from pydantic import BaseModel, Field


class EmailExtractionOutput(BaseModel):
    """Structured response requested from the model"""
    emails: List[str] = Field(description="A list of email addresses found on the page.")


class ExtractionSuccess(BaseModel):
    """Extraction settled with a (possibly empty) list of addresses"""
    status: Literal["success"] = "success"
    emails: List[str] = Field(default_factory=list)


class ExtractionFailure(BaseModel):
    """Extraction failed; message is shown to the user as-is"""
    status: Literal["error"] = "error"
    message: str


ExtractionOutcome = Annotated[
    Union[ExtractionSuccess, ExtractionFailure],
    Field(discriminator="status")
]

ResultMap = Dict[str, ExtractionOutcome]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BatchRun(BaseModel):
    """
    One submission of URLs processed together.

    A run starts ``pending`` with an empty result map and is settled exactly
    once with the reduced map. Runs are never merged; a new submission gets a
    new run.
    """
    source_name: str
    urls: List[str] = Field(default_factory=list)
    status: Literal["pending", "settled"] = "pending"
    results: ResultMap = Field(default_factory=dict)
    started_at: datetime = Field(default_factory=_utcnow)
    finished_at: Optional[datetime] = None

    def settle(self, results: ResultMap) -> "BatchRun":
        if self.status == "settled":
            raise RuntimeError(f"Batch run for {self.source_name} is already settled")
        self.results = dict(results)
        self.status = "settled"
        self.finished_at = _utcnow()
        return self

    @property
    def total_emails(self) -> int:
        return sum(
            len(outcome.emails) for outcome in self.results.values()
            if isinstance(outcome, ExtractionSuccess)
        )

    @property
    def success_count(self) -> int:
        return sum(1 for o in self.results.values() if isinstance(o, ExtractionSuccess))

    @property
    def failure_count(self) -> int:
        return sum(1 for o in self.results.values() if isinstance(o, ExtractionFailure))

    @property
    def has_emails(self) -> bool:
        return self.total_emails > 0

    @property
    def duration_seconds(self) -> Optional[float]:
        if self.finished_at is None:
            return None
        return (self.finished_at - self.started_at).total_seconds()
