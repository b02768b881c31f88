"""
Question generator contract.

Produces the ordered interview questions for a candidate from their
name and resume text.
"""

import logging
from abc import ABC, abstractmethod

from pydantic import ValidationError

from timed_interview.collaborators.functions_client import FunctionsClient, ServiceError
from timed_interview.collaborators.schemas import GeneratedQuestion, QuestionRequest

logger = logging.getLogger(__name__)


class QuestionGeneratorBase(ABC):
    """Abstract base class for question generators."""

    @abstractmethod
    async def generate(self, request: QuestionRequest) -> list[GeneratedQuestion]:
        """
        Generate questions for a candidate.

        Args:
            request: Candidate name and resume text.

        Returns:
            Non-empty list of questions, easiest first.
        """
        ...


class FunctionsQuestionGenerator(QuestionGeneratorBase):
    """Question generator backed by the ``generate-questions`` function."""

    FUNCTION_NAME = "generate-questions"

    def __init__(self, client: FunctionsClient) -> None:
        self._client = client

    async def generate(self, request: QuestionRequest) -> list[GeneratedQuestion]:
        data = await self._client.invoke(self.FUNCTION_NAME, request.to_payload())

        items = data.get("questions") if isinstance(data, dict) else data
        if not isinstance(items, list):
            raise ServiceError(
                f"{self.FUNCTION_NAME} response has no questions list",
                function=self.FUNCTION_NAME,
            )

        try:
            questions = [GeneratedQuestion.model_validate(item) for item in items]
        except ValidationError as e:
            raise ServiceError(
                f"{self.FUNCTION_NAME} returned a malformed question: {e}",
                function=self.FUNCTION_NAME,
            ) from e

        logger.info(f"Generated {len(questions)} questions for {request.candidate_name}")
        return questions
