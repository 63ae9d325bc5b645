"""Abstract durable slot storage used by the local backend and the session token."""

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """Port — string values under fixed slot names."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        ...
