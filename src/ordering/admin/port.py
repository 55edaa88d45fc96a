"""Admin auth port — abstract interface for verifying the shop owner.

Credential storage and verification live with an external identity
provider; the ordering context only needs a yes/no for each request.
"""

from abc import ABC, abstractmethod


class AdminAuthPort(ABC):
    """Abstract interface for admin auth adapters."""

    @abstractmethod
    def sign_in(self, email: str, password: str) -> str | None:
        """Verify credentials and start a session.

        Returns:
            An opaque session token, or None when the credentials are wrong.
        """
        ...

    @abstractmethod
    def sign_out(self, token: str) -> None:
        """End the session. Unknown tokens are ignored."""
        ...

    @abstractmethod
    def is_admin(self, token: str | None) -> bool:
        """True when ``token`` belongs to a live admin session."""
        ...
