from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest

from keystore_credentials.config_manager import settings

CREDENTIALS = """\
# release signing
STORE_PASSWORD=store-secret
KEY_ALIAS=release
KEY_PASSWORD=key-secret
"""


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    for name in list(os.environ):
        if name.upper().startswith("KEYSTORE_CREDENTIALS_"):
            monkeypatch.delenv(name)
    settings.reload_settings()
    yield
    settings.reload_settings()


@pytest.fixture(autouse=True)
def reset_logger():
    logger = logging.getLogger("keystore_credentials")
    yield
    logger.handlers = []
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture()
def project_root(tmp_path) -> Path:
    root = tmp_path / "app"
    signing = root / "signing"
    signing.mkdir(parents=True)
    (signing / "release.jks").write_bytes(b"\xfe\xed\xfe\xed\x00\x00\x00\x02")
    (signing / "credentials.properties").write_text(CREDENTIALS, encoding="iso-8859-1")
    return root


@pytest.fixture()
def write_credentials(project_root):
    def _write(text: str, name: str = "credentials.properties") -> Path:
        path = project_root / "signing" / name
        path.write_text(text, encoding="iso-8859-1")
        return path

    return _write
