"""
Collaborators module: contracts for the external services the
orchestrator calls, and their HTTP implementations.
"""

from timed_interview.collaborators.evaluator import AnswerEvaluatorBase, FunctionsAnswerEvaluator
from timed_interview.collaborators.functions_client import FunctionsClient, ServiceError
from timed_interview.collaborators.persistence import PersistenceSinkBase
from timed_interview.collaborators.question_generator import (
    FunctionsQuestionGenerator,
    QuestionGeneratorBase,
)
from timed_interview.collaborators.schemas import (
    CandidateRecord,
    EvaluationRequest,
    EvaluationResult,
    FinalUpdate,
    GeneratedQuestion,
    QuestionRequest,
    ResponseRecord,
    SummaryItem,
    SummaryRequest,
    SummaryResult,
)
from timed_interview.collaborators.summarizer import FunctionsSummarizer, SummarizerBase

__all__ = [
    "AnswerEvaluatorBase",
    "CandidateRecord",
    "EvaluationRequest",
    "EvaluationResult",
    "FinalUpdate",
    "FunctionsAnswerEvaluator",
    "FunctionsClient",
    "FunctionsQuestionGenerator",
    "FunctionsSummarizer",
    "GeneratedQuestion",
    "PersistenceSinkBase",
    "QuestionGeneratorBase",
    "QuestionRequest",
    "ResponseRecord",
    "ServiceError",
    "SummarizerBase",
    "SummaryItem",
    "SummaryRequest",
    "SummaryResult",
]
