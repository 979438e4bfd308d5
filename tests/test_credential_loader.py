from __future__ import annotations

import logging

import pytest

from keystore_credentials.config_manager import ExtensionConfiguration
from keystore_credentials.credential_manager import (
    ConfigurationError,
    CredentialsResolver,
    ExtractionMode,
    ExtractionPolicy,
    PropertiesParseError,
    PropertyRule,
    load_signing_credentials,
)


@pytest.fixture()
def resolver(project_root):
    return CredentialsResolver(project_root)


def test_resolve_named_mode(resolver, project_root):
    result = resolver.resolve("signing", "release.jks", "credentials.properties")

    assert result.keystore_file == project_root / "signing" / "release.jks"
    assert result.credentials_file == project_root / "signing" / "credentials.properties"
    assert result.keystore_file.is_absolute()
    assert result.mode is ExtractionMode.NAMED
    assert result.store_password == "store-secret"
    assert result.key_alias == "release"
    assert result.key_password == "key-secret"


def test_base_dir_is_normalized(project_root):
    (project_root / "a").mkdir()
    (project_root / "a" / "b.jks").write_bytes(b"jks")
    (project_root / "a" / "creds.properties").write_text("STORE_PASSWORD=abc\n")

    resolver = CredentialsResolver(project_root)
    result = resolver.resolve("a/../a", "b.jks", "creds.properties", mode="fixed")

    assert result.keystore_file == project_root / "a" / "b.jks"
    assert ".." not in result.keystore_file.parts


def test_file_name_with_parent_segments_is_normalized(resolver, project_root):
    result = resolver.resolve("other", "../signing/release.jks", "../signing/credentials.properties")
    assert result.keystore_file == project_root / "signing" / "release.jks"


def test_absolute_base_dir(resolver, project_root):
    result = resolver.resolve(
        project_root / "signing", "release.jks", "credentials.properties"
    )
    assert result.keystore_file == project_root / "signing" / "release.jks"


def test_missing_keystore(resolver):
    with pytest.raises(ConfigurationError, match="^Keystore file must be defined$"):
        resolver.resolve("signing", "missing.jks", "credentials.properties")


def test_keystore_directory_fails_like_missing(resolver, project_root):
    (project_root / "signing" / "dir.jks").mkdir()
    with pytest.raises(ConfigurationError, match="^Keystore file must be defined$"):
        resolver.resolve("signing", "dir.jks", "credentials.properties")


def test_keystore_name_not_set(resolver):
    with pytest.raises(ConfigurationError, match="^Keystore file must be defined$"):
        resolver.resolve("signing", None, "credentials.properties")


def test_keystore_checked_before_credentials(resolver):
    with pytest.raises(ConfigurationError, match="^Keystore file must be defined$"):
        resolver.resolve("signing", "missing.jks", "missing.properties")


def test_missing_credentials(resolver):
    with pytest.raises(ConfigurationError, match="^Credentials file must be defined$"):
        resolver.resolve("signing", "release.jks", "missing.properties")


def test_credentials_directory(resolver, project_root):
    (project_root / "signing" / "creds").mkdir()
    with pytest.raises(ConfigurationError, match="^Credentials file must be defined$"):
        resolver.resolve("signing", "release.jks", "creds")


def test_fixed_mode_is_permissive(resolver, write_credentials):
    write_credentials("STORE_PASSWORD=abc\n")

    result = resolver.resolve(
        "signing", "release.jks", "credentials.properties", mode=ExtractionMode.FIXED
    )

    assert result.store_password == "abc"
    assert result.key_password is None
    assert result.key_alias is None
    assert "keyAlias" not in result.as_properties()


def test_fixed_mode_ignores_property_names(resolver):
    result = resolver.resolve(
        "signing",
        "release.jks",
        "credentials.properties",
        mode="fixed",
        store_password_property="OTHER",
    )
    assert result.store_password == "store-secret"


def test_named_mode_missing_store_password(resolver, write_credentials):
    write_credentials("KEY_PASSWORD=k\n")
    with pytest.raises(
        ConfigurationError, match="^Property RELEASE_STORE_PASSWORD must be defined$"
    ):
        resolver.resolve(
            "signing",
            "release.jks",
            "credentials.properties",
            store_password_property="RELEASE_STORE_PASSWORD",
        )


def test_named_mode_missing_key_password(resolver, write_credentials):
    write_credentials("STORE_PASSWORD=s\n")
    with pytest.raises(ConfigurationError, match="^Property KEY_PASSWORD must be defined$"):
        resolver.resolve("signing", "release.jks", "credentials.properties")


def test_named_mode_missing_alias_defaults_to_key(resolver, write_credentials):
    write_credentials("STORE_PASSWORD=s\nKEY_PASSWORD=k\n")
    result = resolver.resolve("signing", "release.jks", "credentials.properties")
    assert result.key_alias == "key"
    assert result.as_properties()["keyAlias"] == "key"


def test_named_mode_custom_property_names(resolver, write_credentials):
    write_credentials("RS=s\nRA=upload\nRK=k\n")
    result = resolver.resolve(
        "signing",
        "release.jks",
        "credentials.properties",
        store_password_property="RS",
        key_alias_property="RA",
        key_password_property="RK",
    )
    assert (result.store_password, result.key_alias, result.key_password) == ("s", "upload", "k")


def test_empty_value_counts_as_defined(resolver, write_credentials):
    write_credentials("STORE_PASSWORD=\nKEY_PASSWORD=k\n")
    result = resolver.resolve("signing", "release.jks", "credentials.properties")
    assert result.store_password == ""


def test_explicit_policy(resolver, write_credentials):
    write_credentials("STORE_PASSWORD=s\n")
    policy = ExtractionPolicy(
        mode=ExtractionMode.NAMED,
        store_password=PropertyRule("STORE_PASSWORD"),
        key_alias=PropertyRule("KEY_ALIAS", required=False, default="upload"),
        key_password=PropertyRule("KEY_PASSWORD", required=False, default="fallback"),
    )
    result = resolver.resolve(
        "signing", "release.jks", "credentials.properties", policy=policy
    )
    assert result.key_alias == "upload"
    assert result.key_password == "fallback"


def test_unknown_mode(resolver):
    with pytest.raises(ConfigurationError, match="Extraction mode must be one of"):
        resolver.resolve("signing", "release.jks", "credentials.properties", mode="strict")


def test_malformed_credentials_file(resolver, write_credentials):
    write_credentials("STORE_PASSWORD=\\uzzzz\n")
    with pytest.raises(ConfigurationError, match="^Failed to read credentials file$") as excinfo:
        resolver.resolve("signing", "release.jks", "credentials.properties")
    assert isinstance(excinfo.value.__cause__, PropertiesParseError)


def test_undecodable_credentials_file(project_root):
    (project_root / "signing" / "credentials.properties").write_bytes(b"STORE_PASSWORD=\xff\n")
    resolver = CredentialsResolver(project_root, encoding="utf-8")
    with pytest.raises(ConfigurationError, match="^Failed to read credentials file$") as excinfo:
        resolver.resolve("signing", "release.jks", "credentials.properties")
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


def test_repr_hides_secrets(resolver):
    result = resolver.resolve("signing", "release.jks", "credentials.properties")
    text = repr(result)
    assert "store-secret" not in text
    assert "key-secret" not in text
    assert "release.jks" in text


def test_secrets_never_logged(resolver, caplog):
    caplog.set_level(logging.DEBUG, logger="keystore_credentials")
    resolver.resolve("signing", "release.jks", "credentials.properties")

    assert "Start processing credentials" in caplog.text
    assert "Finish processing credentials" in caplog.text
    assert "release.jks" in caplog.text
    assert "store-secret" not in caplog.text
    assert "key-secret" not in caplog.text


def test_resolve_configuration(project_root):
    config = ExtensionConfiguration(project_root)
    config.set_base_dir("signing")
    config.set_keystore_file_name("release.jks")
    config.set_credentials_file_name("credentials.properties")
    config.set_extraction_mode("fixed")

    result = CredentialsResolver(project_root).resolve_configuration(config)
    assert result.mode is ExtractionMode.FIXED
    assert result.store_password == "store-secret"


def test_load_signing_credentials_defaults_to_named_mode(project_root):
    config = ExtensionConfiguration(project_root)
    config.set_base_dir("signing")
    config.set_keystore_file_name("release.jks")
    config.set_credentials_file_name("credentials.properties")

    result = load_signing_credentials(config)
    assert result.mode is ExtractionMode.NAMED
    assert result.key_alias == "release"


def test_unset_base_dir_means_project_root(project_root):
    (project_root / "root.jks").write_bytes(b"jks")
    (project_root / "root.properties").write_text("STORE_PASSWORD=s\n")
    config = ExtensionConfiguration(project_root)
    config.set_keystore_file_name("root.jks")
    config.set_credentials_file_name("root.properties")
    config.set_extraction_mode("fixed")

    result = load_signing_credentials(config)
    assert result.keystore_file == project_root / "root.jks"


def test_credentials_file_closed_after_parse_failure(resolver, write_credentials, monkeypatch):
    from keystore_credentials.credential_manager import properties

    write_credentials("STORE_PASSWORD=\\uzzzz\n")
    handles = []

    def recording_open(*args, **kwargs):
        handle = open(*args, **kwargs)
        handles.append(handle)
        return handle

    monkeypatch.setattr(properties, "open", recording_open, raising=False)

    with pytest.raises(ConfigurationError, match="^Failed to read credentials file$"):
        resolver.resolve("signing", "release.jks", "credentials.properties")

    assert len(handles) == 1
    assert handles[0].closed


def test_credentials_file_closed_after_success(resolver, monkeypatch):
    from keystore_credentials.credential_manager import properties

    handles = []

    def recording_open(*args, **kwargs):
        handle = open(*args, **kwargs)
        handles.append(handle)
        return handle

    monkeypatch.setattr(properties, "open", recording_open, raising=False)
    resolver.resolve("signing", "release.jks", "credentials.properties")

    assert len(handles) == 1
    assert handles[0].closed


def test_unknown_encoding_is_wrapped(project_root):
    resolver = CredentialsResolver(project_root, encoding="latin-9x")
    with pytest.raises(ConfigurationError, match="^Failed to read credentials file$") as excinfo:
        resolver.resolve("signing", "release.jks", "credentials.properties")
    assert isinstance(excinfo.value.__cause__, LookupError)
