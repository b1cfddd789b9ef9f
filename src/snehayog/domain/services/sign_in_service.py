"""Abstract base classes for the identity provider and local user storage."""

from abc import ABC, abstractmethod
from typing import Optional

from snehayog.domain.models.user import CachedUser


class SignInService(ABC):
    """
    Abstract third-party sign-in flow combined with the backend session.

    Implementations run the identity provider's interactive flow, exchange its
    token for a backend bearer token and verify existing sessions.
    """

    @abstractmethod
    async def sign_in(self) -> Optional[CachedUser]:
        """
        Run the interactive sign-in flow.

        Returns:
            The signed-in user with a backend token, or None if the user
            cancelled the flow

        Raises:
            AuthenticationError: If the provider or the backend rejects the sign-in
        """
        pass

    @abstractmethod
    async def sign_out(self) -> None:
        """
        Sign out of the identity provider.

        Raises:
            AuthenticationError: If the provider sign-out fails
        """
        pass

    @abstractmethod
    async def fetch_current_user(self, token: Optional[str]) -> Optional[CachedUser]:
        """
        Verify a backend session and return fresh user data.

        Args:
            token: Backend bearer token, None if no session is stored

        Returns:
            The user if the session is valid, None if there is no valid session

        Raises:
            AuthenticationError: If verification fails for reasons other than
                an absent or expired session
            APIError: If the backend cannot be reached
        """
        pass


class UserStore(ABC):
    """Small persistent key-value store for the fallback user and bearer token."""

    @abstractmethod
    def load(self) -> Optional[CachedUser]:
        """Return the stored user marked as fallback, or None."""
        pass

    @abstractmethod
    def save(self, user: CachedUser) -> None:
        """Persist the user record and its token."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove the stored user and token."""
        pass

    @abstractmethod
    def get_token(self) -> Optional[str]:
        """Return the stored bearer token, or None."""
        pass
