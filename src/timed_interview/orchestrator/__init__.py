"""
Orchestrator module: session state, timing and transcript components.

The state machine itself lives in
``timed_interview.orchestrator.interview_orchestrator``.
"""

from timed_interview.orchestrator.answer_capture import AnswerCapture
from timed_interview.orchestrator.errors import (
    AnswerValidationError,
    BusyError,
    CollaboratorError,
    EvaluationFailed,
    GenerationFailed,
    InterviewError,
    PersistenceFailed,
    StateError,
    SummaryFailed,
)
from timed_interview.orchestrator.interview_state import InterviewState
from timed_interview.orchestrator.schemas import (
    CandidateProfile,
    Difficulty,
    InterviewSession,
    Message,
    MessageRole,
    Question,
    Response,
    SessionStatus,
    TimerState,
    duration_for,
)
from timed_interview.orchestrator.sequencer import QuestionSequencer
from timed_interview.orchestrator.timer import CountdownTimer
from timed_interview.orchestrator.transcript import MessageLog

__all__ = [
    "AnswerCapture",
    "AnswerValidationError",
    "BusyError",
    "CandidateProfile",
    "CollaboratorError",
    "CountdownTimer",
    "Difficulty",
    "EvaluationFailed",
    "GenerationFailed",
    "InterviewError",
    "InterviewSession",
    "InterviewState",
    "Message",
    "MessageLog",
    "MessageRole",
    "PersistenceFailed",
    "Question",
    "QuestionSequencer",
    "Response",
    "SessionStatus",
    "StateError",
    "SummaryFailed",
    "TimerState",
    "duration_for",
]
