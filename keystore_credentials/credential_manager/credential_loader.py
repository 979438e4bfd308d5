"""
Keystore and credentials resolution.

Resolves both files under a base directory, checks they exist as regular
files, reads the credentials file and extracts the signing secrets according
to an extraction policy. Nothing is published here: the caller receives a
``SigningCredentials`` record and decides where it goes.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Optional, Union

from keystore_credentials.config_manager.path_resolver import PathResolver
from keystore_credentials.credential_manager import properties
from keystore_credentials.credential_manager.credential_manager import (
    ConfigurationError,
    PropertiesCredentialManager,
)
from keystore_credentials.credential_manager.policy import (
    ExtractionMode,
    ExtractionPolicy,
)

if TYPE_CHECKING:
    from keystore_credentials.config_manager.extension_configuration import (
        ExtensionConfiguration,
    )

logger = logging.getLogger("keystore_credentials")


@dataclass(frozen=True)
class SigningCredentials:
    """Resolved files and secrets. Secret fields are kept out of ``repr``."""

    keystore_file: Path
    credentials_file: Path
    mode: ExtractionMode
    store_password: Optional[str] = field(default=None, repr=False)
    key_alias: Optional[str] = None
    key_password: Optional[str] = field(default=None, repr=False)

    def as_properties(self) -> Dict[str, object]:
        """Map output names to values; ``keyAlias`` only exists in named mode."""
        result: Dict[str, object] = {
            "storeFile": self.keystore_file,
            "keystoreFile": self.keystore_file,
            "credentialsFile": self.credentials_file,
            "storePassword": self.store_password,
        }
        if self.mode is ExtractionMode.NAMED:
            result["keyAlias"] = self.key_alias
        result["keyPassword"] = self.key_password
        return result


class CredentialsResolver:
    """
    Resolve signing credentials relative to a project root.

    Usage:
        resolver = CredentialsResolver("/work/app")
        credentials = resolver.resolve(
            "signing", "release.jks", "credentials.properties",
            store_password_property="RELEASE_STORE_PASSWORD",
        )
        credentials.keystore_file  # PosixPath('/work/app/signing/release.jks')
    """

    def __init__(
        self,
        project_root: Union[str, Path, None] = None,
        encoding: str = properties.DEFAULT_ENCODING,
    ):
        self.project_root = PathResolver.get_project_root(project_root)
        self.encoding = encoding

    def resolve(
        self,
        base_dir: Union[str, Path, None],
        keystore_file_name: Optional[str],
        credentials_file_name: Optional[str],
        *,
        mode: "ExtractionMode | str" = ExtractionMode.NAMED,
        store_password_property: Optional[str] = None,
        key_alias_property: Optional[str] = None,
        key_password_property: Optional[str] = None,
        policy: Optional[ExtractionPolicy] = None,
    ) -> SigningCredentials:
        """
        Resolve the keystore and credentials files and read the secrets.

        Args:
            base_dir: Directory holding both files, relative to the project
                root (absolute paths are used as-is, None means the root)
            keystore_file_name: Keystore file name inside ``base_dir``
            credentials_file_name: Properties file name inside ``base_dir``
            mode: ``fixed`` or ``named`` extraction
            store_password_property: Store password property (named mode)
            key_alias_property: Key alias property (named mode)
            key_password_property: Key password property (named mode)
            policy: Explicit rule table, overrides ``mode`` and property names

        Returns:
            SigningCredentials for both files and the extracted secrets

        Raises:
            ConfigurationError: If a file is missing or not a regular file,
                the credentials file can't be read, or a required property
                is missing
        """
        if policy is None:
            policy = ExtractionPolicy.for_mode(
                mode, store_password_property, key_alias_property, key_password_property
            )

        logger.info("Start processing credentials")

        base_path = PathResolver.resolve_base_dir(self.project_root, base_dir)
        keystore_file = self._get_keystore_file(base_path, keystore_file_name)
        credentials_file = self._get_credentials_file(base_path, credentials_file_name)

        credentials = self._read_credentials_file(credentials_file)
        values = policy.extract(credentials)

        logger.info("Finish processing credentials")
        return SigningCredentials(
            keystore_file=keystore_file,
            credentials_file=credentials_file,
            mode=policy.mode,
            **values,
        )

    def resolve_configuration(
        self, configuration: "ExtensionConfiguration"
    ) -> SigningCredentials:
        """Resolve from the values held by an ``ExtensionConfiguration``."""
        return self.resolve(
            configuration.base_dir,
            configuration.keystore_file_name,
            configuration.credentials_file_name,
            mode=configuration.extraction_mode or ExtractionMode.NAMED,
            store_password_property=configuration.store_password_property,
            key_alias_property=configuration.key_alias_property,
            key_password_property=configuration.key_password_property,
        )

    def _get_keystore_file(self, base_path: Path, file_name: Optional[str]) -> Path:
        keystore_file = self._locate(base_path, file_name)
        logger.debug(f"Keystore file: {keystore_file}")
        if keystore_file is None or not PathResolver.is_regular_file(keystore_file):
            raise ConfigurationError("Keystore file must be defined")
        return keystore_file

    def _get_credentials_file(self, base_path: Path, file_name: Optional[str]) -> Path:
        credentials_file = self._locate(base_path, file_name)
        logger.debug(f"Credentials file: {credentials_file}")
        if credentials_file is None or not PathResolver.is_regular_file(
            credentials_file
        ):
            raise ConfigurationError("Credentials file must be defined")
        return credentials_file

    @staticmethod
    def _locate(base_path: Path, file_name: Optional[str]) -> Optional[Path]:
        if not file_name:
            return None
        return PathResolver.resolve_file(base_path, file_name)

    def _read_credentials_file(
        self, credentials_file: Path
    ) -> PropertiesCredentialManager:
        try:
            return PropertiesCredentialManager.from_file(
                credentials_file, encoding=self.encoding
            )
        except (
            OSError,
            LookupError,
            UnicodeDecodeError,
            properties.PropertiesParseError,
        ) as e:
            raise ConfigurationError("Failed to read credentials file") from e


def load_signing_credentials(
    configuration: "ExtensionConfiguration", encoding: str = properties.DEFAULT_ENCODING
) -> SigningCredentials:
    """
    Resolve signing credentials straight from a configuration holder.

    Examples:
        config = ExtensionConfiguration("/work/app")
        config.set_base_dir("signing")
        config.set_keystore_file_name("release.jks")
        config.set_credentials_file_name("credentials.properties")
        credentials = load_signing_credentials(config)
    """
    resolver = CredentialsResolver(configuration.project_root, encoding=encoding)
    return resolver.resolve_configuration(configuration)
