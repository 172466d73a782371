"""Base identity provider interface for TradeLight."""

from abc import ABC, abstractmethod
from typing import Optional

from tradelight.models import User


class AuthError(Exception):
    """Raised when sign-in, sign-up or a profile change fails."""


class BaseIdentityProvider(ABC):
    """Abstract base class for identity providers.

    The journal only needs a stable ``uid`` from the signed-in user; it is
    the partition key for every stored day log.
    """

    @property
    @abstractmethod
    def current_user(self) -> Optional[User]:
        """The signed-in user, or None."""
        pass

    @abstractmethod
    def sign_in(self, email: str, password: str) -> User:
        """Sign in with email and password.

        Raises:
            AuthError: If the credentials are wrong.
        """
        pass

    @abstractmethod
    def sign_up(self, email: str, password: str, display_name: str) -> User:
        """Create an account and sign in.

        Raises:
            AuthError: If the email is taken or the input is invalid.
        """
        pass

    @abstractmethod
    def sign_out(self) -> None:
        """Forget the signed-in user."""
        pass

    @abstractmethod
    def update_display_name(self, display_name: str) -> User:
        """Change the signed-in user's display name.

        Raises:
            AuthError: If nobody is signed in.
        """
        pass
