"""Per-client scoring session with supersede/cancel semantics.

States and transitions::

    IDLE --submit--> PENDING --result(latest)--> RESOLVED
                     PENDING --cancel/reset----> IDLE
    RESOLVED --submit--> PENDING

Every submission gets a monotonically increasing sequence number. A new
submission cancels the in-flight one, and a result whose sequence is not
the latest issued is dropped without touching session state, so a stale
response can never overwrite a newer one.
"""

import asyncio
import logging
from collections import OrderedDict
from enum import Enum
from typing import Callable

from models.requests import ScoreRequest
from models.schemas.score_outcome import ScoreOutcome
from services.scorers.base import BaseScorer
from services.scorers.registry import get_scorer
from services.scoring_service import score_safely

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    RESOLVED = "resolved"


class ScoringSession:
    def __init__(self, scorer: BaseScorer) -> None:
        self._scorer = scorer
        self._sequence = 0
        self._task: asyncio.Task | None = None
        self.state = SessionState.IDLE
        self.outcome: ScoreOutcome | None = None

    @property
    def sequence(self) -> int:
        """Sequence number of the latest submission."""
        return self._sequence

    def submit(self, request: ScoreRequest) -> asyncio.Task:
        """Start scoring *request*, superseding any in-flight submission.

        Must be called from a running event loop. The returned task yields
        the ScoreOutcome, or None if it was superseded before finishing.
        """
        self._cancel_task()
        self._sequence += 1
        self.state = SessionState.PENDING
        self._task = asyncio.create_task(self._run(self._sequence, request))
        return self._task

    async def run(self, request: ScoreRequest) -> ScoreOutcome | None:
        """Submit and wait. Returns None when superseded or cancelled."""
        task = self.submit(request)
        try:
            await asyncio.wait({task})
        except asyncio.CancelledError:
            # Our caller went away; nobody will read this result.
            if self._task is task:
                self.cancel()
            raise
        if task.cancelled():
            return None
        return task.result()

    async def _run(self, sequence: int, request: ScoreRequest) -> ScoreOutcome | None:
        try:
            outcome = await score_safely(self._scorer, request, sequence=sequence)
        except Exception as e:
            # Unexpected scorer errors resolve as failures too.
            logger.exception("Scorer %r crashed on submission #%d", self._scorer.name, sequence)
            outcome = ScoreOutcome(ok=False, error_kind="scoring_error", error=str(e), sequence=sequence)
        if sequence != self._sequence:
            logger.debug("Dropping stale result #%d (latest is #%d)", sequence, self._sequence)
            return None
        self.outcome = outcome
        self.state = SessionState.RESOLVED
        self._task = None
        return outcome

    def cancel(self) -> bool:
        """Drop the pending submission, if any. Returns True if one was dropped."""
        if self.state is not SessionState.PENDING:
            return False
        self._cancel_task()
        self._sequence += 1  # invalidate anything still finishing
        self.state = SessionState.IDLE
        self.outcome = None
        return True

    def reset(self) -> None:
        """Back to IDLE from any state, forgetting the last outcome."""
        self.cancel()
        self.state = SessionState.IDLE
        self.outcome = None

    def _cancel_task(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None


class SessionRegistry:
    """One ScoringSession per client id, evicting the least recently used idle ones."""

    def __init__(
        self,
        scorer_factory: Callable[[], BaseScorer] = get_scorer,
        max_sessions: int = 1024,
    ) -> None:
        self._scorer_factory = scorer_factory
        self._max_sessions = max_sessions
        self._sessions: OrderedDict[str, ScoringSession] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, client_id: str) -> ScoringSession:
        session = self._sessions.get(client_id)
        if session is None:
            session = ScoringSession(self._scorer_factory())
            self._sessions[client_id] = session
            self._evict()
        else:
            self._sessions.move_to_end(client_id)
        return session

    def peek(self, client_id: str) -> ScoringSession | None:
        return self._sessions.get(client_id)

    def discard(self, client_id: str) -> None:
        session = self._sessions.pop(client_id, None)
        if session is not None:
            session.reset()

    def clear(self) -> None:
        for session in self._sessions.values():
            session.reset()
        self._sessions.clear()

    def _evict(self) -> None:
        if len(self._sessions) <= self._max_sessions:
            return
        for client_id, session in list(self._sessions.items()):
            if len(self._sessions) <= self._max_sessions:
                break
            if session.state is not SessionState.PENDING:
                del self._sessions[client_id]
                logger.debug("Evicted scoring session %s", client_id)


sessions = SessionRegistry()
