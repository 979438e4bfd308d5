"""
Keystore Credentials - resolve keystore signing credentials for build steps.
"""

__version__ = "0.1.0"

# Import configuration classes
from keystore_credentials.config_manager import (
    ConfigManager,
    CredentialsConfig,
    ExtensionConfiguration,
    KeystoreCredentialsConfig,
    LoggingConfig,
    PathResolver,
)

# Import resolution
from keystore_credentials.credential_manager import (
    ConfigurationError,
    CredentialsResolver,
    ExtractionMode,
    ExtractionPolicy,
    PropertyRule,
    SigningCredentials,
    load_signing_credentials,
)
from keystore_credentials.plugin import CredentialsPlugin, Project
from keystore_credentials.properties_sink import ExtraProperties, PropertySink, publish

# Make main components available at package level
__all__ = [
    # Resolution
    "CredentialsResolver",
    "SigningCredentials",
    "ConfigurationError",
    "ExtractionMode",
    "ExtractionPolicy",
    "PropertyRule",
    "load_signing_credentials",
    # Publishing
    "PropertySink",
    "ExtraProperties",
    "publish",
    "CredentialsPlugin",
    "Project",
    # Configuration
    "ConfigManager",
    "KeystoreCredentialsConfig",
    "CredentialsConfig",
    "LoggingConfig",
    "ExtensionConfiguration",
    "PathResolver",
]
