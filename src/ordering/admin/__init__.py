"""Admin authentication — pluggable sign-in for the shop owner's console."""

import os

_admin_auth_instance = None


def get_admin_auth():
    """Return the configured admin auth adapter (singleton).

    Uses FakeAdminAuth by default, with credentials from ADMIN_EMAIL and
    ADMIN_PASSWORD. Select another adapter via ADMIN_AUTH_ADAPTER.
    """
    global _admin_auth_instance
    if _admin_auth_instance is None:
        adapter = os.environ.get("ADMIN_AUTH_ADAPTER", "fake")
        if adapter == "fake":
            from ordering.admin.fake_adapter import FakeAdminAuth

            _admin_auth_instance = FakeAdminAuth(
                email=os.environ.get("ADMIN_EMAIL", "admin@example.com"),
                password=os.environ.get("ADMIN_PASSWORD", "admin"),
            )
        else:
            raise ValueError(f"Unknown admin auth adapter: {adapter}")
    return _admin_auth_instance


def reset_admin_auth():
    """Reset the admin auth singleton (useful for testing)."""
    global _admin_auth_instance
    _admin_auth_instance = None
