# risk_scanner/session.py
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from loguru import logger

from risk_scanner.client import AnalysisClient
from risk_scanner.models import AnalysisRequest, ErrorResult, SuccessResult

UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"
INTERRUPTED_MESSAGE = "Analysis interrupted"


class Phase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    DONE = "done"


class Event(str, Enum):
    SUBMIT = "submit"
    RESOLVE = "resolve"
    FAIL = "fail"


TRANSITIONS: Dict[Tuple[Phase, Event], Phase] = {
    (Phase.IDLE, Event.SUBMIT): Phase.LOADING,
    (Phase.DONE, Event.SUBMIT): Phase.LOADING,
    (Phase.LOADING, Event.RESOLVE): Phase.DONE,
    (Phase.LOADING, Event.FAIL): Phase.DONE,
}


class InvalidTransition(Exception):
    pass


Listener = Callable[["AnalysisSession"], None]


class AnalysisSession:
    """
    The single live request lifecycle.

    - phase: IDLE -> LOADING -> DONE, and DONE -> LOADING on resubmit
    - result: replaced wholesale per submission, never mutated
    - listeners: called after every phase change
    """

    def __init__(self, client: AnalysisClient):
        self.client = client
        self.phase: Phase = Phase.IDLE
        self.result: Optional[SuccessResult | ErrorResult] = None
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener):
        self._listeners.append(listener)

    @property
    def loading(self) -> bool:
        return self.phase is Phase.LOADING

    # ----------------------------
    # Transitions
    # ----------------------------

    def submit(self, request: AnalysisRequest) -> Optional[SuccessResult | ErrorResult]:
        """
        Run one round-trip and return the stored result.
        A submit while LOADING is rejected and returns None.
        """
        if (self.phase, Event.SUBMIT) not in TRANSITIONS:
            logger.warning(f"Submission rejected: session is {self.phase.value}")
            return None

        self.result = None
        self._fire(Event.SUBMIT)

        try:
            result = self.client.analyze(request)
        except Exception:
            logger.exception("Analysis client raised instead of returning a result")
            self.result = ErrorResult(message=UNKNOWN_ERROR_MESSAGE)
            self._fire(Event.FAIL)
            return self.result
        except KeyboardInterrupt:
            self.result = ErrorResult(message=INTERRUPTED_MESSAGE)
            self._fire(Event.FAIL)
            raise

        self.result = result
        self._fire(Event.RESOLVE)
        return self.result

    def _fire(self, event: Event):
        key = (self.phase, event)
        if key not in TRANSITIONS:
            raise InvalidTransition(f"{event.value} not allowed in {self.phase.value}")

        self.phase = TRANSITIONS[key]
        logger.debug(f"session {event.value} -> {self.phase.value}")

        for listener in self._listeners:
            try:
                listener(self)
            except Exception:
                logger.exception(f"Session listener failed on {event.value}")
