"""
Request and response shapes exchanged with external collaborators.

Field names are snake_case in Python and camelCase on the wire.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from timed_interview.orchestrator.schemas import Difficulty, Question, Response


class WireModel(BaseModel):
    """Base for payloads serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict:
        """Dump to a JSON-ready dict using wire names."""
        return self.model_dump(mode="json", by_alias=True)


class QuestionRequest(WireModel):
    """Input to the question generator."""

    candidate_name: str = Field(..., description="Candidate's name")
    resume_text: str = Field(default="", description="Plain text of the resume")


class GeneratedQuestion(WireModel):
    """One question as returned by the generator."""

    question: str = Field(..., min_length=1, description="Question text")
    difficulty: Difficulty = Field(..., description="easy, medium or hard")

    def to_question(self) -> Question:
        return Question(text=self.question, difficulty=self.difficulty)


class EvaluationRequest(WireModel):
    """Input to the answer evaluator."""

    question: str = Field(..., description="Question text")
    answer: str = Field(..., description="Candidate's answer")
    difficulty: Difficulty = Field(..., description="Question difficulty")

    @classmethod
    def from_response(cls, response: Response) -> "EvaluationRequest":
        return cls(
            question=response.question.text,
            answer=response.answer_text,
            difficulty=response.difficulty,
        )


class EvaluationResult(WireModel):
    """Evaluator verdict for one answer."""

    score: float = Field(..., ge=0.0, le=100.0, description="Score (0-100)")
    feedback: str = Field(default="", description="Feedback shown to the candidate")


class SummaryItem(WireModel):
    """One recorded response as sent to the summarizer."""

    question: str
    answer: str
    difficulty: Difficulty
    score: float | None = None
    feedback: str | None = None

    @classmethod
    def from_response(cls, response: Response) -> "SummaryItem":
        return cls(
            question=response.question.text,
            answer=response.answer_text,
            difficulty=response.difficulty,
            score=response.score,
            feedback=response.feedback,
        )


class SummaryRequest(WireModel):
    """Input to the summarizer."""

    candidate_name: str = Field(..., description="Candidate's name")
    responses: list[SummaryItem] = Field(default_factory=list, description="Responses in question order")


class SummaryResult(WireModel):
    """Summarizer verdict for the whole session."""

    score: float = Field(..., ge=0.0, le=100.0, description="Overall score (0-100)")
    summary: str = Field(default="", description="Summary of the candidate's performance")


class CandidateRecord(WireModel):
    """Candidate registration written when a session starts."""

    name: str
    email: str = ""
    phone: str = ""


class ResponseRecord(WireModel):
    """Durable record written for every response."""

    session_ref: str
    question: str
    answer: str
    difficulty: Difficulty
    time_taken_units: int = Field(..., ge=0)

    @classmethod
    def from_response(cls, session_ref: str, response: Response) -> "ResponseRecord":
        return cls(
            session_ref=session_ref,
            question=response.question.text,
            answer=response.answer_text,
            difficulty=response.difficulty,
            time_taken_units=response.time_taken_units,
        )


class FinalUpdate(WireModel):
    """Final outcome written when a session completes."""

    session_ref: str
    score: float = Field(..., ge=0.0, le=100.0)
    summary: str
