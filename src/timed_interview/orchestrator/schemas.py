"""
Pydantic schemas for the orchestrator module.

Defines the interview data model: questions, responses, transcript
messages, timer snapshots and the session record handed to callers.
"""

from datetime import datetime, timezone
from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator


def _now_utc() -> datetime:
    """Get current UTC datetime (timezone-aware)."""
    return datetime.now(timezone.utc)


NO_ANSWER_PLACEHOLDER = "(No answer provided)"


class Difficulty(str, Enum):
    """Difficulty level of a question; fixes its time budget."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


# Time units allotted per difficulty
DIFFICULTY_DURATIONS: dict[Difficulty, int] = {
    Difficulty.EASY: 20,
    Difficulty.MEDIUM: 60,
    Difficulty.HARD: 120,
}


def duration_for(difficulty: Difficulty | str) -> int:
    """
    Map a difficulty to its allotted duration in time units.

    Args:
        difficulty: Difficulty enum member or its string value.

    Returns:
        Allotted duration (20, 60 or 120).

    Raises:
        ValueError: If the value is not a known difficulty.
    """
    return DIFFICULTY_DURATIONS[Difficulty(difficulty)]


class SessionStatus(str, Enum):
    """States of the interview session state machine."""

    NOT_STARTED = "not_started"
    GENERATING_QUESTIONS = "generating_questions"
    PRESENTING = "presenting"
    AWAITING_ANSWER = "awaiting_answer"
    EVALUATING = "evaluating"
    RECORDED = "recorded"
    SUMMARIZING = "summarizing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        """Check if no further transitions are accepted from this state."""
        return self in (SessionStatus.COMPLETED, SessionStatus.FAILED)


class MessageRole(str, Enum):
    """Author of a transcript message."""

    SYSTEM = "system"
    CANDIDATE = "candidate"


class ScoreBand(str, Enum):
    """Coarse rating used when displaying a score."""

    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"
    UNSCORED = "unscored"


def score_band(score: float | None) -> ScoreBand:
    """Bucket a 0-100 score into a display band."""
    if score is None:
        return ScoreBand.UNSCORED
    if score >= 80:
        return ScoreBand.STRONG
    if score >= 60:
        return ScoreBand.MODERATE
    return ScoreBand.WEAK


class CandidateProfile(BaseModel):
    """Profile information about a candidate."""

    candidate_id: UUID = Field(default_factory=uuid4, description="Unique candidate identifier")
    name: str = Field(..., min_length=1, description="Candidate's full name")
    email: str = Field(default="", description="Candidate's email address")
    phone: str = Field(default="", description="Candidate's phone number")
    resume_text: str = Field(default="", description="Plain text of the candidate's resume")


class Question(BaseModel):
    """A single interview question. Immutable once generated."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., min_length=1, description="Question text")
    difficulty: Difficulty = Field(..., description="Difficulty level")

    @property
    def allotted_duration(self) -> int:
        """Time units the candidate has to answer."""
        return duration_for(self.difficulty)


class Response(BaseModel):
    """Recorded outcome for one question."""

    model_config = ConfigDict(frozen=True)

    question: Question = Field(..., description="The question answered")
    answer_text: str = Field(..., description="Submitted answer or the no-answer placeholder")
    difficulty: Difficulty = Field(..., description="Difficulty of the question")
    time_taken_units: int = Field(..., ge=0, description="Time units spent before submission")
    score: float | None = Field(default=None, ge=0.0, le=100.0, description="Evaluator score (0-100)")
    feedback: str | None = Field(default=None, description="Evaluator feedback")

    @model_validator(mode="after")
    def _check_consistency(self) -> "Response":
        if self.difficulty != self.question.difficulty:
            raise ValueError("response difficulty must match the question difficulty")
        if self.time_taken_units > self.question.allotted_duration:
            raise ValueError("time taken cannot exceed the allotted duration")
        return self


class TimerState(BaseModel):
    """Snapshot of the countdown for the active question."""

    model_config = ConfigDict(frozen=True)

    remaining: int = Field(default=0, ge=0, description="Time units left")
    total: int = Field(default=0, ge=0, description="Time units allotted")

    @property
    def percentage(self) -> float:
        """Share of the budget still available, 0-100."""
        if self.total == 0:
            return 0.0
        return self.remaining * 100 / self.total

    @property
    def is_warning(self) -> bool:
        """At most 30% of the budget left."""
        return self.total > 0 and self.percentage <= 30

    @property
    def is_danger(self) -> bool:
        """At most 10% of the budget left."""
        return self.total > 0 and self.percentage <= 10

    def clock(self) -> str:
        """Render the remaining time as m:ss."""
        minutes, seconds = divmod(self.remaining, 60)
        return f"{minutes}:{seconds:02d}"


class Message(BaseModel):
    """A single entry of the visible interview transcript."""

    model_config = ConfigDict(frozen=True)

    role: MessageRole = Field(..., description="Author of the message")
    content: str = Field(..., description="Message text")
    sequence_number: int = Field(..., ge=0, description="Position in the transcript")
    timestamp: datetime = Field(default_factory=_now_utc, description="When the message was appended")


class InterviewSession(BaseModel):
    """Snapshot of a session record, safe to hand to callers."""

    id: UUID = Field(..., description="Unique session identifier")
    candidate: CandidateProfile = Field(..., description="Candidate being interviewed")
    candidate_ref: str | None = Field(default=None, description="Reference returned by the persistence sink")
    status: SessionStatus = Field(..., description="Current state machine status")
    current_index: int = Field(default=0, ge=0, description="Index of the active or next question")
    questions: list[Question] = Field(default_factory=list, description="Ordered questions")
    responses: list[Response] = Field(default_factory=list, description="Recorded responses in question order")
    score: float | None = Field(default=None, ge=0.0, le=100.0, description="Overall score from the summarizer")
    summary: str | None = Field(default=None, description="Summary text from the summarizer")
    error_kind: str | None = Field(default=None, description="Name of the failure that ended the session")
    started_at: datetime = Field(default_factory=_now_utc, description="Session start time")
    completed_at: datetime | None = Field(default=None, description="Session completion time")

    @property
    def score_band(self) -> ScoreBand:
        """Display band of the overall score."""
        return score_band(self.score)
