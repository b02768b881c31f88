"""
Repository pattern for database operations.

Provides a clean abstraction over SQLAlchemy for the writes the
orchestrator makes, and the persistence sink built on top of it.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from timed_interview.collaborators.persistence import PersistenceSinkBase
from timed_interview.collaborators.schemas import CandidateRecord, FinalUpdate, ResponseRecord
from timed_interview.db.models import Base, CandidateModel, InterviewResponseModel

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Base)


class BaseRepository(ABC, Generic[T]):
    """Abstract base repository with common CRUD operations."""

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self._session = session

    @property
    @abstractmethod
    def _model_class(self) -> type[T]:
        """Get the model class for this repository."""
        ...

    async def get_by_id(self, entity_id: uuid.UUID) -> T | None:
        """
        Get an entity by its ID.

        Args:
            entity_id: The entity's UUID.

        Returns:
            The entity if found, None otherwise.
        """
        return await self._session.get(self._model_class, entity_id)

    async def create(self, entity: T) -> T:
        """
        Create a new entity.

        Args:
            entity: The entity to create.

        Returns:
            The created entity.
        """
        self._session.add(entity)
        await self._session.flush()
        await self._session.refresh(entity)
        return entity

    async def update(self, entity: T) -> T:
        """
        Update an existing entity.

        Args:
            entity: The entity to update.

        Returns:
            The updated entity.
        """
        await self._session.flush()
        await self._session.refresh(entity)
        return entity


class CandidateRepository(BaseRepository[CandidateModel]):
    """Repository for candidate operations."""

    @property
    def _model_class(self) -> type[CandidateModel]:
        """Get the model class."""
        return CandidateModel

    async def create_from_record(self, record: CandidateRecord) -> CandidateModel:
        """
        Create a candidate from a registration record.

        Args:
            record: Candidate contact details.

        Returns:
            The created candidate model.
        """
        candidate = CandidateModel(
            name=record.name,
            email=record.email or None,
            phone=record.phone or None,
        )
        return await self.create(candidate)

    async def set_outcome(self, candidate: CandidateModel, score: float, summary: str) -> CandidateModel:
        """
        Store the final interview outcome on a candidate.

        Args:
            candidate: Existing candidate model.
            score: Overall score (0-100).
            summary: Summary text.

        Returns:
            The updated candidate model.
        """
        candidate.score = score
        candidate.summary = summary
        return await self.update(candidate)


class ResponseRepository(BaseRepository[InterviewResponseModel]):
    """Repository for interview response operations."""

    @property
    def _model_class(self) -> type[InterviewResponseModel]:
        """Get the model class."""
        return InterviewResponseModel

    async def create_from_record(self, candidate_id: uuid.UUID, record: ResponseRecord) -> InterviewResponseModel:
        """
        Create a response row from a durable response record.

        Args:
            candidate_id: Owning candidate's UUID.
            record: Response record emitted by the orchestrator.

        Returns:
            The created response model.
        """
        response = InterviewResponseModel(
            candidate_id=candidate_id,
            question=record.question,
            answer=record.answer,
            difficulty=record.difficulty.value,
            time_taken=record.time_taken_units,
        )
        return await self.create(response)

    async def list_for_candidate(self, candidate_id: uuid.UUID) -> list[InterviewResponseModel]:
        """
        Get all responses for a candidate in the order they were recorded.

        Read-back for inspection and reporting; the sink itself never reads.

        Args:
            candidate_id: Candidate's UUID.

        Returns:
            List of responses.
        """
        stmt = (
            select(InterviewResponseModel)
            .where(InterviewResponseModel.candidate_id == candidate_id)
            .order_by(InterviewResponseModel.created_at)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())


class DatabaseSink(PersistenceSinkBase):
    """
    Persistence sink writing to the SQL results store.

    Each write runs in its own transaction.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """
        Initialize the sink.

        Args:
            session_factory: Factory producing async sessions.
        """
        self._session_factory = session_factory

    async def register_candidate(self, record: CandidateRecord) -> str:
        async with self._session_factory() as session, session.begin():
            candidate = await CandidateRepository(session).create_from_record(record)
            candidate_id = candidate.id
        logger.info(f"Registered candidate {record.name} as {candidate_id}")
        return str(candidate_id)

    async def record_response(self, record: ResponseRecord) -> None:
        async with self._session_factory() as session, session.begin():
            await ResponseRepository(session).create_from_record(uuid.UUID(record.session_ref), record)
        logger.debug(f"Stored response for {record.session_ref}")

    async def finalize(self, update: FinalUpdate) -> None:
        async with self._session_factory() as session, session.begin():
            repository = CandidateRepository(session)
            candidate = await repository.get_by_id(uuid.UUID(update.session_ref))
            if candidate is None:
                raise LookupError(f"Unknown candidate reference: {update.session_ref}")
            await repository.set_outcome(candidate, update.score, update.summary)
        logger.info(f"Stored final score {update.score:g} for {update.session_ref}")
