# kai/storage/escalations.py
import threading
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Callable, Dict, Optional, Union

from kai.nlu.schema import EscalationState


@dataclass
class EscalationAttemptState:
    count: int = 0
    last_attempt_at: float = 0.0  # epoch seconds from the tracker clock


@dataclass
class EscalationDecision:
    state: EscalationState
    attempt_count: int
    escalate_now: bool


def _state_for(count: int) -> EscalationState:
    if count <= 0:
        return EscalationState.NONE
    if count == 1:
        return EscalationState.REQUESTED_ONCE
    return EscalationState.INSISTING


class EscalationTracker:
    """
    In-process insistence tracker: the first explicit request is deflected,
    a second one within the window escalates. Resets on server restart.

    Expiry is checked on read (no timers); expired entries are also swept
    every `purge_every` recorded attempts so the store stays bounded.
    Users map onto a fixed pool of striped locks, so memory does not grow
    with the number of users and unrelated users rarely wait on each other.
    """

    def __init__(self, window: Union[timedelta, float] = timedelta(minutes=30),
                 clock: Callable[[], float] = time.time,
                 lock_stripes: int = 64, purge_every: int = 256):
        if not isinstance(window, timedelta):
            window = timedelta(minutes=window)
        self.window_s = window.total_seconds()
        self.clock = clock
        self.purge_every = purge_every
        self._states: Dict[str, EscalationAttemptState] = {}
        self._locks = tuple(threading.Lock() for _ in range(lock_stripes))
        self._counter_lock = threading.Lock()
        self._attempts_since_purge = 0

    def _lock_for(self, user_id: str) -> threading.Lock:
        return self._locks[hash(user_id) % len(self._locks)]

    def _expired(self, st: EscalationAttemptState, now: float) -> bool:
        return (now - st.last_attempt_at) > self.window_s

    def _current(self, user_id: str, now: float) -> Optional[EscalationAttemptState]:
        st = self._states.get(user_id)
        if st is not None and self._expired(st, now):
            del self._states[user_id]
            return None
        return st

    def record_attempt(self, user_id: str) -> EscalationDecision:
        with self._lock_for(user_id):
            now = self.clock()
            st = self._current(user_id, now) or EscalationAttemptState()
            st.count += 1
            st.last_attempt_at = now
            self._states[user_id] = st
            state = _state_for(st.count)
            decision = EscalationDecision(
                state=state,
                attempt_count=st.count,
                escalate_now=state == EscalationState.INSISTING,
            )
        # Sweep outside the stripe lock; purge takes stripes one at a time
        if self._purge_due():
            self.purge_expired()
        return decision

    def _purge_due(self) -> bool:
        with self._counter_lock:
            self._attempts_since_purge += 1
            if self._attempts_since_purge < self.purge_every:
                return False
            self._attempts_since_purge = 0
            return True

    def state(self, user_id: str) -> EscalationState:
        with self._lock_for(user_id):
            st = self._current(user_id, self.clock())
            return _state_for(st.count if st else 0)

    def reset(self, user_id: str) -> None:
        """Forget the user's attempts. Safe to call for unknown users."""
        with self._lock_for(user_id):
            self._states.pop(user_id, None)

    def purge_expired(self) -> int:
        """Drop expired entries; returns how many were removed."""
        now = self.clock()
        removed = 0
        for uid in list(self._states):
            with self._lock_for(uid):
                st = self._states.get(uid)
                if st is not None and self._expired(st, now):
                    del self._states[uid]
                    removed += 1
        return removed

    def __len__(self) -> int:
        return len(self._states)
