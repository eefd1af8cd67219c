from __future__ import annotations

import logging
import uuid
from collections import OrderedDict
from typing import Callable

from app.application.ports.session_store import SelectionSessionStorePort
from app.application.use_cases.attribute_session import AttributeSession


class MemorySessionStore(SelectionSessionStorePort):
    def __init__(self, session_factory: Callable[[str], AttributeSession], session_limit: int = 500) -> None:
        self._factory = session_factory
        self._sessions: OrderedDict[str, AttributeSession] = OrderedDict()
        self._session_limit = session_limit
        self._logger = logging.getLogger(__name__)

    def create(self, session_id: str | None = None) -> AttributeSession:
        session_id = (session_id or "").strip() or uuid.uuid4().hex
        self._sessions.pop(session_id, None)
        session = self._factory(session_id)
        self._sessions[session_id] = session
        while len(self._sessions) > self._session_limit:
            evicted, _ = self._sessions.popitem(last=False)
            self._logger.info("Session evicted", extra={"session_id": evicted, "reason": "session limit"})
        return session

    def get(self, session_id: str) -> AttributeSession | None:
        session = self._sessions.get(session_id)
        if session is not None:
            self._sessions.move_to_end(session_id)
        return session

    def discard(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        return len(self._sessions)
