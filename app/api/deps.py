import logging
import time
import uuid
from collections import OrderedDict
from typing import Callable, Generic, Optional, Tuple, TypeVar

from fastapi import Request

from app.core.config import settings
from app.core.exceptions import SessionNotFoundError
from app.core.llm import Generator
from app.core.logger import set_session_id
from app.services.interview import InterviewSession
from app.services.resume import ResumeBuilder

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SessionRegistry(Generic[T]):
    """
    In-memory sessions keyed by id. A session lives from the moment a view is
    opened until the client discards it or leaves it idle for ``ttl_seconds``;
    nothing is persisted. At most ``max_sessions`` are kept, least recently
    used first out.

    Args:
        kind: Label used in errors and logs.
        ttl_seconds: Idle time after which a session is evicted.
        max_sessions: Upper bound on live sessions.
        clock: Monotonic time source, replaceable in tests.
    """

    def __init__(
        self,
        kind: str,
        ttl_seconds: Optional[float] = None,
        max_sessions: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.kind = kind
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.SESSION_TTL_SECONDS
        self.max_sessions = max_sessions if max_sessions is not None else settings.MAX_SESSIONS
        self.clock = clock
        # id -> (last access, session); ordered oldest access first
        self._sessions: "OrderedDict[str, Tuple[float, T]]" = OrderedDict()

    def _evict(self) -> None:
        cutoff = self.clock() - self.ttl_seconds
        expired = [sid for sid, (last_access, _) in self._sessions.items() if last_access <= cutoff]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info(f"Evicted {len(expired)} idle {self.kind} session(s)")

        while len(self._sessions) >= self.max_sessions:
            sid, _ = self._sessions.popitem(last=False)
            logger.warning(f"{self.kind.capitalize()} session limit reached, evicted {sid}")

    def create(self, factory: Callable[[], T]) -> tuple[str, T]:
        self._evict()
        session_id = str(uuid.uuid4())
        session = factory()
        self._sessions[session_id] = (self.clock(), session)
        set_session_id(session_id)
        return session_id, session

    def get(self, session_id: str) -> T:
        now = self.clock()
        entry = self._sessions.get(session_id)
        if entry is None or entry[0] <= now - self.ttl_seconds:
            self._sessions.pop(session_id, None)
            raise SessionNotFoundError(f"No {self.kind} session with id {session_id}")

        session = entry[1]
        self._sessions[session_id] = (now, session)
        self._sessions.move_to_end(session_id)
        set_session_id(session_id)
        return session

    def discard(self, session_id: str) -> None:
        self.get(session_id)
        del self._sessions[session_id]

    def __len__(self) -> int:
        return len(self._sessions)


def get_generator(request: Request) -> Generator:
    return request.app.state.generator


def get_resume_sessions(request: Request) -> SessionRegistry[ResumeBuilder]:
    return request.app.state.resume_sessions


def get_interview_sessions(request: Request) -> SessionRegistry[InterviewSession]:
    return request.app.state.interview_sessions
