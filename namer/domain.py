"""
Identity ideas, availability analyses and the signed-in user.

Wire/storage names are camelCase (availabilityScore, takenOn, ...) to stay
compatible with data written by the browser app; attributes are snake_case.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

MIN_SCORE = 1
MAX_SCORE = 10


class AppState(str, Enum):
    IDLE = "IDLE"
    GENERATING = "GENERATING"
    RESULTS = "RESULTS"
    ERROR = "ERROR"
    SAVED = "SAVED"


class TldStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    TAKEN = "TAKEN"
    UNKNOWN = "UNKNOWN"


class IdentityIdea(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    handle: str
    style: str
    explanation: str
    vibe: str
    availability_score: int = Field(alias="availabilityScore")
    category: str = "Other"

    @field_validator("handle")
    @classmethod
    def _handle_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("handle must not be empty")
        return v

    @field_validator("availability_score")
    @classmethod
    def _clamp_score(cls, v: int) -> int:
        # Heuristic from the model; out-of-range values are pulled in, not rejected
        return max(MIN_SCORE, min(MAX_SCORE, v))

    @field_validator("category", mode="before")
    @classmethod
    def _default_category(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return "Other"
        return v

    def to_record(self) -> dict:
        """Storage / wire form."""
        return self.model_dump(by_alias=True)


class IdentityAnalysis(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    handle: str
    taken_on: list[str] = Field(default_factory=list, alias="takenOn")
    summary: str
    profile_title: Optional[str] = Field(default=None, alias="profileTitle")
    profile_description: Optional[str] = Field(default=None, alias="profileDescription")
    tld_status: dict[str, TldStatus] = Field(default_factory=dict, alias="tldStatus")


UNVERIFIED_SUMMARY = "Could not verify detailed availability. Please check manually."
BACKEND_FAILED_SUMMARY = "Availability check failed due to network or API limits."


def default_analysis(handle: str, summary: str = UNVERIFIED_SUMMARY) -> IdentityAnalysis:
    """The "unknown" analysis every availability failure degrades to."""
    return IdentityAnalysis(handle=handle, taken_on=[], summary=summary, tld_status={})


class User(BaseModel):
    name: str
    email: str
