"""Abstract repository interfaces (ports) for the dashboard record collections."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from app.domain.entities import User

T = TypeVar("T")


class RecordRepository(ABC, Generic[T]):
    """Port for one record collection — implemented in the infrastructure layer.

    Records are replaced whole on save; there is no partial patching.
    """

    @abstractmethod
    async def get_all(self) -> list[T]:
        """Return every record. Order is unspecified; callers sort."""
        ...

    @abstractmethod
    async def save(self, record: T) -> None:
        """Insert the record, or replace the one with the same identifier."""
        ...

    @abstractmethod
    async def delete(self, record_id: str) -> None:
        """Remove the record if present. An unknown identifier is a no-op."""
        ...


class UserRepository(RecordRepository[User]):
    """Users are keyed by username, so creation intent must be explicit."""

    @abstractmethod
    async def save(self, record: User, *, is_new: bool = False) -> None:
        """Persist a user.

        Args:
            record: The user to write.
            is_new: When True the username must not exist yet
                (raises DuplicateEntityError); otherwise upsert.
        """
        ...
