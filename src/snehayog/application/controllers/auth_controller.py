"""Authentication state controller."""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from typing import Any, Optional

from snehayog.application.observable import Observable
from snehayog.domain.models.user import AuthState, AuthStatus, CachedUser
from snehayog.domain.services.sign_in_service import SignInService, UserStore

logger = logging.getLogger(__name__)

SIGN_IN_FAILED = "Sign in failed"
NO_AUTH_DATA = "No authentication data found"


class AuthController(Observable):
    """
    Holds the signed-in user and publishes authentication state changes.

    Start-up shows the locally cached user straight away and verifies it in a
    background task. Foreground operations never raise; failures end up in
    the ``error`` field of the published state.
    """

    def __init__(self, sign_in_service: SignInService, user_store: UserStore) -> None:
        """
        Initialize the controller.

        Args:
            sign_in_service: Identity provider and backend session service
            user_store: Local storage for the fallback user and token
        """
        super().__init__()
        self.sign_in_service = sign_in_service
        self.user_store = user_store
        self._state = AuthState()
        self._refresh_task: asyncio.Task[None] | None = None

    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def user(self) -> Optional[CachedUser]:
        return self._state.user

    @property
    def error(self) -> Optional[str]:
        return self._state.error

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    @property
    def is_signed_in(self) -> bool:
        return self._state.is_signed_in

    @property
    def refresh_task(self) -> asyncio.Task[None] | None:
        """The background refresh started by :meth:`start`, if any."""
        return self._refresh_task

    def _publish(self, **changes: Any) -> None:
        self._state = dataclasses.replace(self._state, **changes)
        self._notify()

    def _save(self, user: CachedUser) -> None:
        try:
            self.user_store.save(user)
        except Exception as e:
            logger.warning("Failed to store user %s: %s", user.id, e)

    async def start(self) -> None:
        """
        Publish the initial authentication state.

        With a cached user, the fallback is published and verification runs in
        the background; this method returns without waiting for it. Without
        one, the remote session is checked before returning.
        """
        await self._cancel_refresh()

        try:
            cached = self.user_store.load()
        except Exception as e:
            logger.warning("Failed to read cached user: %s", e)
            cached = None

        if cached is not None:
            self._publish(status=AuthStatus.LOADING, user=cached.as_fallback(), error=None)
            self._refresh_task = asyncio.create_task(self._refresh_in_background(cached))
            return

        self._publish(status=AuthStatus.LOADING, is_loading=True)
        try:
            user = await self.sign_in_service.fetch_current_user(self.user_store.get_token())
        except Exception as e:
            logger.error("Session check failed: %s", e)
            self._publish(status=AuthStatus.ERROR, error=str(e), is_loading=False)
            return

        if user is not None:
            user = user.as_confirmed()
            self._save(user)
        self._publish(status=AuthStatus.READY, user=user, is_loading=False)

    async def _refresh_in_background(self, cached: CachedUser) -> None:
        try:
            fresh = await self.sign_in_service.fetch_current_user(cached.token)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning("Background auth refresh failed, keeping cached user: %s", e)
            self._publish(status=AuthStatus.READY)
            return

        if fresh is None:
            logger.info("No remote session for cached user %s, keeping cached data", cached.id)
            self._publish(status=AuthStatus.READY)
            return

        if fresh.token is None:
            fresh = dataclasses.replace(fresh, token=cached.token)
        fresh = fresh.as_confirmed()
        self._save(fresh)
        self._publish(status=AuthStatus.READY, user=fresh)
        logger.debug("Refreshed user %s", fresh.id)

    async def _cancel_refresh(self) -> None:
        task, self._refresh_task = self._refresh_task, None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def sign_in(self) -> Optional[CachedUser]:
        """
        Run the interactive sign-in flow.

        Returns:
            The signed-in user, or None if sign-in failed
        """
        await self._cancel_refresh()
        self._publish(status=AuthStatus.LOADING, is_loading=True, error=None)

        try:
            user = await self.sign_in_service.sign_in()
        except Exception as e:
            logger.error("Sign in failed: %s", e)
            self._publish(status=AuthStatus.ERROR, error=str(e), is_loading=False)
            return None

        if user is None:
            self._publish(status=AuthStatus.ERROR, error=SIGN_IN_FAILED, is_loading=False)
            return None

        user = user.as_confirmed()
        self._save(user)
        self._publish(status=AuthStatus.READY, user=user, is_loading=False)
        logger.info("Signed in %s", user)
        return user

    async def sign_out(self) -> None:
        """
        Sign out and clear local state.

        Local state is cleared even when the remote sign-out fails; that
        failure is published as the error.
        """
        await self._cancel_refresh()
        error: str | None = None

        try:
            await self.sign_in_service.sign_out()
        except Exception as e:
            logger.warning("Remote sign out failed: %s", e)
            error = str(e)

        try:
            self.user_store.clear()
        except Exception as e:
            logger.warning("Failed to clear stored user: %s", e)
            error = error or str(e)

        self._publish(status=AuthStatus.READY, user=None, error=error, is_loading=False)

    def clear_error(self) -> None:
        self._publish(error=None)

    async def refresh_auth_state(self) -> None:
        """Re-check the remote session in the foreground."""
        await self._cancel_refresh()
        self._publish(is_loading=True)

        try:
            user = await self.sign_in_service.fetch_current_user(self.user_store.get_token())
        except Exception as e:
            logger.error("Auth refresh failed: %s", e)
            self._publish(status=AuthStatus.ERROR, error=str(e), is_loading=False)
            return

        if user is None:
            self._publish(status=AuthStatus.READY, user=None, error=NO_AUTH_DATA, is_loading=False)
            return

        user = user.as_confirmed()
        self._save(user)
        self._publish(status=AuthStatus.READY, user=user, error=None, is_loading=False)

    async def close(self) -> None:
        """Cancel the background refresh and drop all subscribers."""
        await self._cancel_refresh()
        self.clear_listeners()
