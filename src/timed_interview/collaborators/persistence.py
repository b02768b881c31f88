"""
Persistence sink contract.

The orchestrator only writes to the results store; it never reads back.
"""

from abc import ABC, abstractmethod

from timed_interview.collaborators.schemas import CandidateRecord, FinalUpdate, ResponseRecord


class PersistenceSinkBase(ABC):
    """Abstract base class for write-only result stores."""

    @abstractmethod
    async def register_candidate(self, record: CandidateRecord) -> str:
        """
        Create the candidate record for a new session.

        Args:
            record: Candidate contact details.

        Returns:
            Reference used by later writes for this session.
        """
        ...

    @abstractmethod
    async def record_response(self, record: ResponseRecord) -> None:
        """
        Store one response.

        Args:
            record: Durable response record.
        """
        ...

    @abstractmethod
    async def finalize(self, update: FinalUpdate) -> None:
        """
        Store the session's final score and summary.

        Args:
            update: Final outcome.
        """
        ...
