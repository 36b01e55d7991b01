"""
Client session lifecycle.

A Session owns the stored token, the identity read from it, and a single
expiry timer. States:

    UNINITIALIZED -> AUTHENTICATED -> EXPIRED | LOGGED_OUT

Observers registered with ``subscribe`` are told about every transition.
"""

import logging
import threading
from enum import Enum
from typing import Any, Callable, Optional, Protocol

from pydantic import ValidationError

from modules.auth.models import UserPublic
from shared.models import Role

from .timer import DeadlineTimer
from .token_store import TokenStore
from .tokens import decode_claims, is_token_expired, token_expiry

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    AUTHENTICATED = "authenticated"
    EXPIRED = "expired"
    LOGGED_OUT = "logged_out"


class Timer(Protocol):
    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], Timer]
Listener = Callable[[SessionState], None]


class Session:
    """
    Holds who is logged in and logs them out when their token expires.

    Args:
        store: Where the token is persisted
        timer_factory: Builds the expiry timer from (deadline, callback);
            defaults to DeadlineTimer
    """

    def __init__(self, store: TokenStore, timer_factory: Optional[TimerFactory] = None):
        self._store = store
        self._timer_factory = timer_factory or DeadlineTimer
        self._lock = threading.RLock()
        self._state = SessionState.UNINITIALIZED
        self._token: Optional[str] = None
        self._user: Optional[UserPublic] = None
        self._timer: Optional[Timer] = None
        # Bumped on every arm/cancel so a stale timer cannot end a newer session
        self._generation = 0
        self._listeners: list[Listener] = []

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def user(self) -> Optional[UserPublic]:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._state == SessionState.AUTHENTICATED

    @property
    def is_admin(self) -> bool:
        return self._user is not None and self._user.role == Role.ADMIN

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener for state transitions.

        Returns:
            A function that unregisters the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def initialize(self) -> SessionState:
        """Restore the session from the stored token, if it is still usable."""
        with self._lock:
            token = self._store.get()
            claims = decode_claims(token)
            if token and claims is not None and not is_token_expired(token):
                try:
                    user = UserPublic.model_validate(claims)
                except ValidationError:
                    user = None
                if user is not None:
                    self._token = token
                    self._user = user
                    self._arm_timer(token)
                    self._transition(SessionState.AUTHENTICATED)
                    return self._state

            self._cancel_timer()
            if token:
                logger.info("Discarding stored session token (expired or malformed)")
                self._store.remove()
            self._token = None
            self._user = None
            self._transition(SessionState.LOGGED_OUT)
            return self._state

    def start(self, token: str, user: UserPublic | dict[str, Any]) -> None:
        """Begin a session after a successful login or registration."""
        if isinstance(user, dict):
            user = UserPublic.model_validate(user)
        with self._lock:
            self._store.set(token)
            self._token = token
            self._user = user
            self._arm_timer(token)
            self._transition(SessionState.AUTHENTICATED)

    def logout(self) -> None:
        """End the session at the user's request."""
        self._end(SessionState.LOGGED_OUT)

    def expire(self) -> None:
        """End the session because its token is no longer usable."""
        logger.info("Session expired, logging out")
        self._end(SessionState.EXPIRED)

    def _end(self, state: SessionState) -> None:
        with self._lock:
            self._cancel_timer()
            self._store.remove()
            self._token = None
            self._user = None
            self._transition(state)

    def _arm_timer(self, token: str) -> None:
        self._cancel_timer()
        deadline = token_expiry(token)
        if deadline is None:
            # A token with no usable expiry is treated as already expired
            deadline = 0.0
        generation = self._generation

        def on_deadline() -> None:
            with self._lock:
                if generation == self._generation:
                    self.expire()

        self._timer = self._timer_factory(deadline, on_deadline)
        self._timer.start()

    def _cancel_timer(self) -> None:
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _transition(self, state: SessionState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)
