from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Mapping, Union

from keystore_credentials.credential_manager import properties


class ConfigurationError(Exception):
    """Raised when the signing configuration cannot be resolved."""

    pass


class CredentialNotFoundError(KeyError):
    """Raised when a credential key is not found."""

    pass


class CredentialManager(ABC):
    """Abstract base class for credential resolution."""

    @abstractmethod
    def resolve_key(self, key: str) -> str:
        """
        Resolve and return the value for the given credential key.

        Args:
            key: Credential identifier

        Returns:
            The credential value as a string

        Raises:
            CredentialNotFoundError: If key doesn't exist
        """
        pass


class PropertiesCredentialManager(CredentialManager):
    """Credential manager backed by the entries of a properties file."""

    def __init__(self, entries: Mapping[str, str]):
        self._entries: Dict[str, str] = dict(entries)

    @classmethod
    def from_file(
        cls, path: Union[str, Path], encoding: str = properties.DEFAULT_ENCODING
    ) -> "PropertiesCredentialManager":
        return cls(properties.load_file(path, encoding=encoding))

    def resolve_key(self, key: str) -> str:
        try:
            return self._entries[key]
        except KeyError:
            raise CredentialNotFoundError(key) from None

    def keys(self) -> List[str]:
        return sorted(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"<PropertiesCredentialManager keys={self.keys()!r}>"
