"""AdvisorSession — one advisory request at a time, off the UI thread.

``ask`` appends the question to the transcript and submits the request
to an executor, returning the ``Future``.  While it is pending the
session is ``in_flight`` and further questions are refused.  ``poll``
is called from the UI loop and appends the answer once it lands, even
if the farm has moved on since the question was asked.
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import TYPE_CHECKING

from smartfarm.advisor.client import FALLBACK_ADVICE, AdvisorClient
from smartfarm.advisor.transcript import ChatTranscript

if TYPE_CHECKING:
    from smartfarm.simulation.state import FarmState

logger = logging.getLogger(__name__)


class AdvisorSession:
    """Tracks the transcript and the single pending advisory request.

    Attributes:
        advisor: Client used to answer questions.
        transcript: Conversation shown to the player.
    """

    def __init__(
        self,
        advisor: AdvisorClient,
        executor: Executor | None = None,
        transcript: ChatTranscript | None = None,
    ) -> None:
        self.advisor = advisor
        self.transcript = transcript or ChatTranscript()
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix="advisor",
        )
        self._pending: Future[str] | None = None

    @property
    def in_flight(self) -> bool:
        """True while a submitted question has not been answered yet."""
        return self._pending is not None

    def ask(self, state: FarmState, question: str) -> Future[str] | None:
        """Submit ``question`` about the ``state`` snapshot.

        Args:
            state: Frozen snapshot taken at the moment of asking.
            question: Player's question; surrounding whitespace is dropped.

        Returns:
            The pending future, or None if the question was blank or
            another request is still in flight.
        """
        text = question.strip()
        if not text:
            return None
        if self.in_flight:
            logger.info("Advisor busy; ignoring question %r", text)
            return None
        self.transcript.add_user(text)
        self._pending = self._executor.submit(self.advisor.request_advice, state, text)
        return self._pending

    def poll(self) -> bool:
        """Append the pending answer if it has arrived.

        Returns:
            True if an answer was appended on this call.
        """
        pending = self._pending
        if pending is None or not pending.done():
            return False
        self._pending = None
        try:
            answer = pending.result()
        except Exception:
            logger.exception("Advisor request failed")
            answer = FALLBACK_ADVICE
        self.transcript.add_assistant(answer)
        return True

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the pending answer lands, then append it."""
        if self._pending is None:
            return False
        self._pending.exception(timeout=timeout)
        return self.poll()

    def close(self) -> None:
        """Shut down the executor if this session created it."""
        if self._owns_executor:
            self._executor.shutdown(wait=False)
