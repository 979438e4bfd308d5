from __future__ import annotations

import codecs
import copy
import logging
import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from keystore_credentials.config_manager.extension_configuration import (
    ExtensionConfiguration,
)
from keystore_credentials.config_manager.migrations import (
    CURRENT_VERSION,
    run_migrations,
)
from keystore_credentials.config_manager.path_resolver import PathResolver
from keystore_credentials.config_manager.settings import get_settings
from keystore_credentials.credential_manager.credential_manager import (
    ConfigurationError,
)
from keystore_credentials.credential_manager.policy import (
    KEY_ALIAS_PROPERTY,
    KEY_PASSWORD_PROPERTY,
    STORE_PASSWORD_PROPERTY,
    ExtractionMode,
)
from keystore_credentials.credential_manager.properties import DEFAULT_ENCODING

logger = logging.getLogger("keystore_credentials")

DEFAULT_CONFIG_FILE = "keystore-credentials.yaml"


# ---------- Config Schema ----------
@dataclass
class CredentialsConfig:
    """Where the keystore and credentials files live and how to read them."""

    base_dir: Optional[str] = None
    keystore_file_name: Optional[str] = None
    credentials_file_name: Optional[str] = None
    mode: str = ExtractionMode.NAMED.value  # fixed | named
    store_password_property: str = STORE_PASSWORD_PROPERTY
    key_alias_property: str = KEY_ALIAS_PROPERTY
    key_password_property: str = KEY_PASSWORD_PROPERTY
    encoding: str = DEFAULT_ENCODING


@dataclass
class LoggingConfig:
    """Logging configuration."""

    debug: bool = False


@dataclass
class KeystoreCredentialsConfig:
    """Complete configuration schema."""

    version: int = CURRENT_VERSION
    credentials: CredentialsConfig = field(default_factory=CredentialsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> KeystoreCredentialsConfig:
        """
        Create config from dictionary, migrating older layouts first.

        Raises:
            ConfigurationError: If a section has unknown keys or the wrong shape
        """
        version = data.get("version", 1)
        if not isinstance(version, int) or isinstance(version, bool):
            raise ConfigurationError(f"Config version must be an integer, got {version!r}")

        data = run_migrations(copy.deepcopy(data))
        return cls(
            version=data.get("version", CURRENT_VERSION),
            credentials=_build_section(
                CredentialsConfig, data.get("credentials"), "credentials"
            ),
            logging=_build_section(LoggingConfig, data.get("logging"), "logging"),
        )

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> KeystoreCredentialsConfig:
        """
        Create config from YAML file.

        Args:
            path: Path to YAML config file

        Returns:
            KeystoreCredentialsConfig instance

        Raises:
            FileNotFoundError: If the YAML file doesn't exist
            ConfigurationError: If the YAML is malformed or has unknown keys

        Example:
            >>> config = KeystoreCredentialsConfig.from_yaml("keystore-credentials.yaml")
        """
        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Failed to parse config file {path}") from e

        if not data:
            logger.warning(f"Empty config file at {path}, using defaults")
            return cls()
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")
        return cls.from_dict(data)


def _build_section(section_cls, data: Optional[Dict[str, Any]], name: str):
    if data is None:
        return section_cls()
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config section '{name}' must be a mapping")

    known = {f.name for f in fields(section_cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError(
            f"Unknown keys in config section '{name}': {', '.join(unknown)}"
        )
    for key, value in data.items():
        _check_value(section_cls, name, key, value)
    return section_cls(**data)


# credentials fields that may be left unset
_OPTIONAL_FIELDS = {"base_dir", "keystore_file_name", "credentials_file_name"}


def _check_value(section_cls, name: str, key: str, value: Any) -> None:
    if section_cls is LoggingConfig:
        if not isinstance(value, bool):
            raise ConfigurationError(f"Config value {name}.{key} must be true or false")
        return

    if value is None and key in _OPTIONAL_FIELDS:
        return
    if not isinstance(value, str):
        raise ConfigurationError(
            f"Config value {name}.{key} must be a string, got {value!r}"
        )

    if key == "mode" and value not in {m.value for m in ExtractionMode}:
        raise ConfigurationError(
            f"Config value {name}.mode must be one of: "
            f"{', '.join(m.value for m in ExtractionMode)}"
        )
    if key == "encoding":
        try:
            codecs.lookup(value)
        except LookupError:
            raise ConfigurationError(
                f"Config value {name}.encoding is not a known encoding: {value}"
            ) from None


# ---------- ConfigManager ----------
class ConfigManager:
    """
    Loads the YAML configuration for a project.

    Usage:
        config = ConfigManager(project_root="/work/app")
        config.credentials.keystore_file_name = "release.jks"
        config.save()

        holder = config.to_extension_configuration()
    """

    def __init__(
        self,
        path: Optional[Union[str, Path]] = None,
        project_root: Optional[Union[str, Path]] = None,
        load: bool = True,
    ):
        settings = get_settings()
        self.project_root = PathResolver.get_project_root(
            project_root or settings.project_root
        )

        # Resolution order:
        # 1) Explicit path arg
        # 2) KEYSTORE_CREDENTIALS_CONFIG_PATH env var
        # 3) Default file name in the project root
        raw_path = path or settings.config_path or DEFAULT_CONFIG_FILE
        self.path = PathResolver.normalize(self.project_root / Path(raw_path).expanduser())

        self._config = KeystoreCredentialsConfig()
        if load:
            self.load_config()

    # ---------------- Typed property access ----------------
    @property
    def config(self) -> KeystoreCredentialsConfig:
        return self._config

    @property
    def credentials(self) -> CredentialsConfig:
        """Access credentials configuration."""
        return self._config.credentials

    @property
    def logging(self) -> LoggingConfig:
        """Access logging configuration."""
        return self._config.logging

    # ---------------- I/O ----------------
    def load_config(self) -> None:
        """Load YAML from file into memory. A missing file leaves the defaults."""
        if not self.path.exists():
            logger.debug(f"No config file at {self.path}, using defaults")
            self._config = KeystoreCredentialsConfig()
            return

        self._config = KeystoreCredentialsConfig.from_yaml(self.path)

    def save(self) -> None:
        """Persist current in-memory config to YAML file."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.dump(self._config.to_dict(), f, sort_keys=False, default_flow_style=False)

    def reload(self) -> None:
        """Reload config from disk."""
        self.load_config()

    def as_dict(self) -> Dict[str, Any]:
        """Return a deep copy of the config dict to avoid accidental mutation."""
        return copy.deepcopy(self._config.to_dict())

    def to_extension_configuration(self) -> ExtensionConfiguration:
        """Build a configuration holder from the loaded credentials section."""
        section = self._config.credentials
        holder = ExtensionConfiguration(self.project_root)
        if section.base_dir is not None:
            holder.set_base_dir(section.base_dir)
        if section.keystore_file_name is not None:
            holder.set_keystore_file_name(section.keystore_file_name)
        if section.credentials_file_name is not None:
            holder.set_credentials_file_name(section.credentials_file_name)
        holder.set_extraction_mode(section.mode)
        holder.set_store_password_property(section.store_password_property)
        holder.set_key_alias_property(section.key_alias_property)
        holder.set_key_password_property(section.key_password_property)
        return holder

    def __repr__(self) -> str:
        return f"<ConfigManager path={self.path!s}>"
