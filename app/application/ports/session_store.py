from __future__ import annotations

from abc import ABC, abstractmethod

from app.application.use_cases.attribute_session import AttributeSession


class SelectionSessionStorePort(ABC):
    @abstractmethod
    def create(self, session_id: str | None = None) -> AttributeSession:
        """Create a fresh session, replacing any existing one with the same id."""
        raise NotImplementedError

    @abstractmethod
    def get(self, session_id: str) -> AttributeSession | None:
        raise NotImplementedError

    @abstractmethod
    def discard(self, session_id: str) -> bool:
        raise NotImplementedError
