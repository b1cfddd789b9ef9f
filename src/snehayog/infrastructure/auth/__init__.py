"""Identity provider integration."""

from snehayog.infrastructure.auth.google_sign_in import GoogleSignInService

__all__ = ["GoogleSignInService"]
