from pathlib import Path
from typing import Optional, Union

from keystore_credentials.config_manager.path_resolver import PathResolver


class ExtensionConfiguration:
    """
    Values supplied by the build script before credentials are resolved.

    The base directory is stored relative to the project root as an absolute,
    not yet normalized, path. Nothing is checked here; validation happens when
    the resolver runs.

    Usage:
        config = ExtensionConfiguration("/work/app")
        config.set_base_dir("signing")
        config.set_keystore_file_name("release.jks")
        config.set_credentials_file_name("credentials.properties")
    """

    def __init__(self, project_root: Union[str, Path]):
        self._project_root = PathResolver.get_project_root(project_root)
        self._base_dir: Optional[Path] = None
        self._keystore_file_name: Optional[str] = None
        self._credentials_file_name: Optional[str] = None
        self._extraction_mode: Optional[str] = None
        self._store_password_property: Optional[str] = None
        self._key_alias_property: Optional[str] = None
        self._key_password_property: Optional[str] = None

    @property
    def project_root(self) -> Path:
        return self._project_root

    @property
    def base_dir(self) -> Optional[Path]:
        return self._base_dir

    def set_base_dir(self, base_dir: Union[str, Path]) -> None:
        self._base_dir = self._project_root / base_dir

    @property
    def keystore_file_name(self) -> Optional[str]:
        return self._keystore_file_name

    def set_keystore_file_name(self, keystore_file_name: str) -> None:
        self._keystore_file_name = keystore_file_name

    @property
    def credentials_file_name(self) -> Optional[str]:
        return self._credentials_file_name

    def set_credentials_file_name(self, credentials_file_name: str) -> None:
        self._credentials_file_name = credentials_file_name

    @property
    def extraction_mode(self) -> Optional[str]:
        return self._extraction_mode

    def set_extraction_mode(self, extraction_mode: str) -> None:
        """Either ``"fixed"`` or ``"named"``; checked at resolution time."""
        self._extraction_mode = extraction_mode

    @property
    def store_password_property(self) -> Optional[str]:
        return self._store_password_property

    def set_store_password_property(self, name: str) -> None:
        self._store_password_property = name

    @property
    def key_alias_property(self) -> Optional[str]:
        return self._key_alias_property

    def set_key_alias_property(self, name: str) -> None:
        self._key_alias_property = name

    @property
    def key_password_property(self) -> Optional[str]:
        return self._key_password_property

    def set_key_password_property(self, name: str) -> None:
        self._key_password_property = name

    def __repr__(self) -> str:
        return (
            f"<ExtensionConfiguration base_dir={self._base_dir!s} "
            f"keystore={self._keystore_file_name!r} "
            f"credentials={self._credentials_file_name!r}>"
        )
