from functools import lru_cache

from app.core.config import settings
from app.application.ports.session_store import SelectionSessionStorePort
from app.application.use_cases.attribute_session import AttributeSession
from app.application.use_cases.cascade import CascadeResolver
from app.infrastructure.cascade_rules.registry import build_cascade_registry
from app.infrastructure.store.memory_store import MemorySessionStore


_session_store: MemorySessionStore | None = None


@lru_cache
def get_cascade_resolver() -> CascadeResolver:
    return CascadeResolver(
        registry=build_cascade_registry(),
        preferred_tokens=settings.PREFERRED_OPTION_TOKENS,
        auto_select=settings.AUTO_SELECT_DEFAULTS,
    )


def build_session(session_id: str) -> AttributeSession:
    return AttributeSession(
        resolver=get_cascade_resolver(),
        session_id=session_id,
        auto_select_first_segment=settings.AUTO_SELECT_FIRST_SEGMENT,
    )


def get_session_store() -> SelectionSessionStorePort:
    global _session_store
    if _session_store is None:
        _session_store = MemorySessionStore(session_factory=build_session, session_limit=settings.SESSION_LIMIT)
    return _session_store
