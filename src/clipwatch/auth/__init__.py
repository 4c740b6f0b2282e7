"""Authentication for clipwatch."""

from clipwatch.auth.credentials import Credential, CredentialManager

__all__ = ["Credential", "CredentialManager"]
