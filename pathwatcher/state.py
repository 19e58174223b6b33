"""
Observer state owned by a single execution context.

Snapshots reach the store as messages on the observer's dispatcher, so the
update counter is only ever touched from that one thread and needs no lock.
Readers get immutable ObserverState values.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from .logging_config import get_logger
from .models import PathSnapshot, SupportResult

logger = get_logger(__name__)


class ViewPhase(str, Enum):
    """What the presentation layer should be showing."""

    SUPPORT_UNKNOWN = "support_unknown"
    UNSUPPORTED = "unsupported"
    SUPPORTED = "supported"
    QUERY_RESULT = "query_result"


@dataclass(frozen=True)
class ObserverState:
    phase: ViewPhase = ViewPhase.SUPPORT_UNKNOWN
    update_count: int = 0
    snapshot: Optional[PathSnapshot] = None


class PathStateStore:
    """Holds the latest ObserverState and notifies listeners of changes."""

    def __init__(self):
        self._state = ObserverState()
        self._listeners: List[Callable[[ObserverState], None]] = []

    @property
    def state(self) -> ObserverState:
        return self._state

    def add_listener(self, listener):
        self._listeners.append(listener)

    def attach(self, observer):
        """
        Start the observer with this store as its subscriber.

        Returns:
            SupportResult: Whatever the observer's start returned
        """
        result = observer.start(self.apply)
        if result is SupportResult.SUPPORTED:
            # Queue behind any snapshot already delivered
            observer.dispatcher.submit(self.set_support, result)
        else:
            self.set_support(result)
        return result

    def set_support(self, result):
        """Record the support outcome unless results are already showing."""
        if self._state.phase is not ViewPhase.SUPPORT_UNKNOWN:
            return
        phase = ViewPhase.SUPPORTED if result is SupportResult.SUPPORTED else ViewPhase.UNSUPPORTED
        self._set(ObserverState(phase=phase))

    def apply(self, snapshot):
        """Record one delivered snapshot and bump the update counter."""
        self._set(
            ObserverState(
                phase=ViewPhase.QUERY_RESULT,
                update_count=self._state.update_count + 1,
                snapshot=snapshot,
            )
        )

    def _set(self, state):
        self._state = state
        logger.debug(f"Observer state: phase={state.phase.value}, updates={state.update_count}")
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("State listener failed")
