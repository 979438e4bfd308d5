"""Migration v2: Rename build-script camelCase keys, make the extraction mode explicit."""

from typing import Any, Dict

VERSION = 2

_RENAMES = {
    "baseDir": "base_dir",
    "keystoreFileName": "keystore_file_name",
    "credentialsFileName": "credentials_file_name",
    "storePasswordProperty": "store_password_property",
    "keyAliasProperty": "key_alias_property",
    "keyPasswordProperty": "key_password_property",
}


def migrate(config: Dict[str, Any]) -> Dict[str, Any]:
    """Rename credentials.<camelCase> -> credentials.<snake_case> and set credentials.mode."""
    credentials = config.get("credentials") or {}
    if not isinstance(credentials, dict):
        # left for schema validation to reject
        return config

    for old, new in _RENAMES.items():
        if old in credentials and new not in credentials:
            credentials[new] = credentials.pop(old)

    # v1 files without property names read STORE_PASSWORD/KEY_PASSWORD leniently
    if "mode" not in credentials:
        named = any(
            key in credentials
            for key in ("store_password_property", "key_alias_property", "key_password_property")
        )
        credentials["mode"] = "named" if named else "fixed"

    config["credentials"] = credentials
    return config
