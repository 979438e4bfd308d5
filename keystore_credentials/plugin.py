"""
Build host adapter.

``Project`` models the small part of a build host this package touches: a
root directory, named extensions, a shared property sink and after-evaluate
hooks. ``CredentialsPlugin`` wires the configuration holder and the resolver
into that lifecycle.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from keystore_credentials.config_manager.extension_configuration import (
    ExtensionConfiguration,
)
from keystore_credentials.credential_manager.credential_loader import (
    CredentialsResolver,
)
from keystore_credentials.credential_manager.properties import DEFAULT_ENCODING
from keystore_credentials.properties_sink import ExtraProperties, publish

logger = logging.getLogger("keystore_credentials")

EXTENSION_NAME = "credentials"


class Project:
    """Minimal build project: root dir, extensions, extra properties, hooks."""

    def __init__(
        self,
        root_dir: Union[str, Path],
        extra_properties: Optional[ExtraProperties] = None,
    ):
        self.root_dir = Path(root_dir).absolute()
        self.extensions: Dict[str, Any] = {}
        self.extra_properties = extra_properties if extra_properties is not None else ExtraProperties()
        self._after_evaluate: List[Callable[["Project"], None]] = []

    def after_evaluate(self, action: Callable[["Project"], None]) -> None:
        self._after_evaluate.append(action)

    def evaluate(self) -> None:
        """Run after-evaluate actions in registration order. Errors propagate."""
        for action in self._after_evaluate:
            action(self)


class CredentialsAction:
    """After-evaluate action: resolve from the holder, then publish."""

    def __init__(
        self, configuration: ExtensionConfiguration, encoding: str = DEFAULT_ENCODING
    ):
        self.configuration = configuration
        self.encoding = encoding

    def __call__(self, project: Project) -> None:
        resolver = CredentialsResolver(project.root_dir, encoding=self.encoding)
        credentials = resolver.resolve_configuration(self.configuration)
        publish(credentials, project.extra_properties)


class CredentialsPlugin:
    """
    Registers the ``credentials`` extension on a project.

    Usage:
        project = Project("/work/app")
        CredentialsPlugin().apply(project)
        project.extensions["credentials"].set_base_dir("signing")
        ...
        project.evaluate()
        project.extra_properties.get("storePassword")
    """

    def __init__(self, encoding: str = DEFAULT_ENCODING):
        self.encoding = encoding

    def apply(self, project: Project) -> ExtensionConfiguration:
        configuration = ExtensionConfiguration(project.root_dir)
        project.extensions[EXTENSION_NAME] = configuration
        project.after_evaluate(CredentialsAction(configuration, encoding=self.encoding))
        logger.debug(f"Registered '{EXTENSION_NAME}' extension on {project.root_dir}")
        return configuration
