"""Credential resolution for keystore signing."""

from keystore_credentials.credential_manager.credential_loader import (
    CredentialsResolver,
    SigningCredentials,
    load_signing_credentials,
)
from keystore_credentials.credential_manager.credential_manager import (
    ConfigurationError,
    CredentialManager,
    CredentialNotFoundError,
    PropertiesCredentialManager,
)
from keystore_credentials.credential_manager.policy import (
    ExtractionMode,
    ExtractionPolicy,
    PropertyRule,
)
from keystore_credentials.credential_manager.properties import PropertiesParseError

__all__ = [
    "ConfigurationError",
    "CredentialManager",
    "CredentialNotFoundError",
    "CredentialsResolver",
    "ExtractionMode",
    "ExtractionPolicy",
    "PropertiesCredentialManager",
    "PropertiesParseError",
    "PropertyRule",
    "SigningCredentials",
    "load_signing_credentials",
]
