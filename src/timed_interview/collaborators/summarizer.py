"""
Session summarizer contract.
"""

from abc import ABC, abstractmethod

from pydantic import ValidationError

from timed_interview.collaborators.functions_client import FunctionsClient, ServiceError
from timed_interview.collaborators.schemas import SummaryRequest, SummaryResult


class SummarizerBase(ABC):
    """Abstract base class for session summarizers."""

    @abstractmethod
    async def summarize(self, request: SummaryRequest) -> SummaryResult:
        """
        Produce the overall verdict for a session.

        Args:
            request: Candidate name and every recorded response.

        Returns:
            Overall score (0-100) and summary text.
        """
        ...


class FunctionsSummarizer(SummarizerBase):
    """Summarizer backed by the ``generate-summary`` function."""

    FUNCTION_NAME = "generate-summary"

    def __init__(self, client: FunctionsClient) -> None:
        self._client = client

    async def summarize(self, request: SummaryRequest) -> SummaryResult:
        data = await self._client.invoke(self.FUNCTION_NAME, request.to_payload())
        try:
            return SummaryResult.model_validate(data)
        except ValidationError as e:
            raise ServiceError(
                f"{self.FUNCTION_NAME} returned a malformed summary: {e}",
                function=self.FUNCTION_NAME,
            ) from e
