from keystore_credentials.config_manager.config_manager import (
    ConfigManager,
    CredentialsConfig,
    KeystoreCredentialsConfig,
    LoggingConfig,
)
from keystore_credentials.config_manager.extension_configuration import (
    ExtensionConfiguration,
)
from keystore_credentials.config_manager.path_resolver import PathResolver
from keystore_credentials.config_manager.settings import RuntimeSettings, get_settings

__all__ = [
    "ConfigManager",
    "KeystoreCredentialsConfig",
    "CredentialsConfig",
    "LoggingConfig",
    "ExtensionConfiguration",
    "PathResolver",
    "RuntimeSettings",
    "get_settings",
]
