"""
Extraction policies for reading signing secrets from a credentials file.

Each output field maps to a ``PropertyRule`` naming the property to look up,
whether it must be present and the value used when it is absent. The two
modes differ only in their rule tables:

    field           fixed mode                 named mode
    store_password  STORE_PASSWORD, optional   <caller>, required
    key_alias       (not read)                 <caller>, optional, "key"
    key_password    KEY_PASSWORD, optional     <caller>, required
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from keystore_credentials.credential_manager.credential_manager import (
    ConfigurationError,
    CredentialManager,
    CredentialNotFoundError,
)

logger = logging.getLogger("keystore_credentials")

STORE_PASSWORD_PROPERTY = "STORE_PASSWORD"
KEY_ALIAS_PROPERTY = "KEY_ALIAS"
KEY_PASSWORD_PROPERTY = "KEY_PASSWORD"
DEFAULT_KEY_ALIAS = "key"


class ExtractionMode(str, Enum):
    """How property names are chosen."""

    FIXED = "fixed"
    NAMED = "named"


@dataclass(frozen=True)
class PropertyRule:
    """Lookup rule for a single output field."""

    property_name: str
    required: bool = True
    default: Optional[str] = None

    def extract(self, credentials: CredentialManager) -> Optional[str]:
        try:
            return credentials.resolve_key(self.property_name)
        except CredentialNotFoundError:
            if self.required:
                raise ConfigurationError(
                    f"Property {self.property_name} must be defined"
                ) from None
            logger.debug(
                f"Property {self.property_name} not defined, using default"
            )
            return self.default


@dataclass(frozen=True)
class ExtractionPolicy:
    """Rule table for the secrets published after resolution."""

    mode: ExtractionMode
    store_password: PropertyRule
    key_password: PropertyRule
    key_alias: Optional[PropertyRule] = None

    @classmethod
    def fixed_keys(cls) -> "ExtractionPolicy":
        return cls(
            mode=ExtractionMode.FIXED,
            store_password=PropertyRule(STORE_PASSWORD_PROPERTY, required=False),
            key_password=PropertyRule(KEY_PASSWORD_PROPERTY, required=False),
        )

    @classmethod
    def named_keys(
        cls,
        store_password_property: Optional[str] = None,
        key_alias_property: Optional[str] = None,
        key_password_property: Optional[str] = None,
    ) -> "ExtractionPolicy":
        return cls(
            mode=ExtractionMode.NAMED,
            store_password=PropertyRule(
                store_password_property
                if store_password_property is not None
                else STORE_PASSWORD_PROPERTY
            ),
            key_alias=PropertyRule(
                key_alias_property if key_alias_property is not None else KEY_ALIAS_PROPERTY,
                required=False,
                default=DEFAULT_KEY_ALIAS,
            ),
            key_password=PropertyRule(
                key_password_property
                if key_password_property is not None
                else KEY_PASSWORD_PROPERTY
            ),
        )

    @classmethod
    def for_mode(
        cls,
        mode: "ExtractionMode | str",
        store_password_property: Optional[str] = None,
        key_alias_property: Optional[str] = None,
        key_password_property: Optional[str] = None,
    ) -> "ExtractionPolicy":
        """Build the policy for ``mode``. Property names only apply to named mode."""
        try:
            mode = ExtractionMode(mode)
        except ValueError:
            raise ConfigurationError(
                f"Extraction mode must be one of: "
                f"{', '.join(m.value for m in ExtractionMode)}"
            ) from None

        if mode is ExtractionMode.FIXED:
            return cls.fixed_keys()
        return cls.named_keys(
            store_password_property, key_alias_property, key_password_property
        )

    def extract(self, credentials: CredentialManager) -> Dict[str, Optional[str]]:
        """Apply every rule, in store password, key alias, key password order."""
        logger.debug(f"Extracting signing properties ({self.mode.value} mode)")
        values = {"store_password": self.store_password.extract(credentials)}
        if self.key_alias is not None:
            values["key_alias"] = self.key_alias.extract(credentials)
        values["key_password"] = self.key_password.extract(credentials)
        return values
