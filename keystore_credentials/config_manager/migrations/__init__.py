"""Versioned config migrations, applied in order to raw config dicts."""

import logging
from typing import Any, Dict

from keystore_credentials.config_manager.migrations import v002_snake_case_keys

logger = logging.getLogger("keystore_credentials")

MIGRATIONS = [v002_snake_case_keys]

CURRENT_VERSION = MIGRATIONS[-1].VERSION


def run_migrations(config: Dict[str, Any]) -> Dict[str, Any]:
    """Apply every migration newer than ``config["version"]`` (default 1)."""
    version = config.get("version", 1)
    for migration in MIGRATIONS:
        if migration.VERSION <= version:
            continue
        logger.debug(f"Migrating config to v{migration.VERSION}")
        config = migration.migrate(config)
        config["version"] = migration.VERSION
    return config
