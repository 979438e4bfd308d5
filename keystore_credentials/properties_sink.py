"""
Property sinks that receive resolved signing credentials.

A sink is the only place resolved values are written to. ``publish`` runs
after resolution has fully succeeded, so a sink never holds a partial set.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, Optional

from keystore_credentials.credential_manager.credential_loader import (
    SigningCredentials,
)

logger = logging.getLogger("keystore_credentials")


class PropertySink(ABC):
    """Write-only destination for published properties."""

    @abstractmethod
    def set(self, name: str, value: Any) -> None:
        pass


class ExtraProperties(PropertySink):
    """Dict-backed sink shared between build steps."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._values: Dict[str, Any] = dict(initial or {})

    def set(self, name: str, value: Any) -> None:
        self._values[name] = value

    def get(self, name: str, default: Any = None) -> Any:
        return self._values.get(name, default)

    def has(self, name: str) -> bool:
        return name in self._values

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)


def publish(credentials: SigningCredentials, sink: PropertySink) -> None:
    """Write every output of ``credentials`` into ``sink``."""
    published = credentials.as_properties()
    for name, value in published.items():
        sink.set(name, value)
    logger.debug(f"Published properties: {', '.join(published)}")
