"""
Keystore credentials CLI.
"""

from keystore_credentials.cli.main import cli

__all__ = ["cli"]
