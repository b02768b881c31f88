"""
Answer evaluator contract.
"""

from abc import ABC, abstractmethod

from pydantic import ValidationError

from timed_interview.collaborators.functions_client import FunctionsClient, ServiceError
from timed_interview.collaborators.schemas import EvaluationRequest, EvaluationResult


class AnswerEvaluatorBase(ABC):
    """Abstract base class for answer evaluators."""

    @abstractmethod
    async def evaluate(self, request: EvaluationRequest) -> EvaluationResult:
        """
        Score one answer.

        Args:
            request: Question, answer and difficulty.

        Returns:
            Score (0-100) and feedback.
        """
        ...


class FunctionsAnswerEvaluator(AnswerEvaluatorBase):
    """Evaluator backed by the ``evaluate-response`` function."""

    FUNCTION_NAME = "evaluate-response"

    def __init__(self, client: FunctionsClient) -> None:
        self._client = client

    async def evaluate(self, request: EvaluationRequest) -> EvaluationResult:
        data = await self._client.invoke(self.FUNCTION_NAME, request.to_payload())
        try:
            return EvaluationResult.model_validate(data)
        except ValidationError as e:
            raise ServiceError(
                f"{self.FUNCTION_NAME} returned a malformed evaluation: {e}",
                function=self.FUNCTION_NAME,
            ) from e
