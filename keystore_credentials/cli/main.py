"""
Keystore credentials CLI - resolve signing credentials for a project.
"""

import json
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from keystore_credentials.cli.logs import configure_logging
from keystore_credentials.config_manager import ConfigManager, get_settings
from keystore_credentials.credential_manager import (
    ConfigurationError,
    CredentialsResolver,
    ExtractionMode,
    SigningCredentials,
)
from keystore_credentials.credential_manager import properties
from keystore_credentials.properties_sink import ExtraProperties, publish

console = Console()
err_console = Console(stderr=True)

_SECRET_NAMES = ("storePassword", "keyPassword")


def _render_table(credentials: SigningCredentials) -> None:
    table = Table(title=f"Signing Credentials ({credentials.mode.value} mode)")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="white")

    for name, value in credentials.as_properties().items():
        if name in _SECRET_NAMES:
            display = "[green]set[/green]" if value is not None else "[yellow]not set[/yellow]"
        else:
            display = escape(str(value))
        table.add_row(name, display)

    console.print(table)


def _serializable(sink: ExtraProperties) -> dict:
    return {
        name: str(value) if isinstance(value, Path) else value
        for name, value in sink.as_dict().items()
    }


@click.group()
@click.version_option(package_name="keystore-credentials")
def cli():
    """Resolve keystore signing credentials."""
    pass


@cli.command()
@click.option("--project-root", "-r", help="Project root directory", default=None)
@click.option("--config", "-c", "config_path", help="Config file path", default=None)
@click.option("--base-dir", "-b", help="Directory holding both files, relative to the root", default=None)
@click.option("--keystore", "-k", help="Keystore file name", default=None)
@click.option("--credentials", "-p", help="Credentials properties file name", default=None)
@click.option(
    "--mode",
    type=click.Choice([m.value for m in ExtractionMode]),
    help="Property extraction mode",
    default=None,
)
@click.option("--store-password-property", help="Store password property name", default=None)
@click.option("--key-alias-property", help="Key alias property name", default=None)
@click.option("--key-password-property", help="Key password property name", default=None)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json", "properties"]),
    help="Output format",
    default="table",
)
@click.option("--debug", is_flag=True, help="Enable debug logging", default=False)
def resolve(
    project_root: str,
    config_path: str,
    base_dir: str,
    keystore: str,
    credentials: str,
    mode: str,
    store_password_property: str,
    key_alias_property: str,
    key_password_property: str,
    output_format: str,
    debug: bool,
):
    """Resolve the keystore and credentials files and print the published values."""
    settings = get_settings()

    try:
        config = ConfigManager(config_path, project_root=project_root)
    except (ConfigurationError, OSError) as e:
        err_console.print(f"❌ [red]{escape(str(e))}[/red]")
        raise SystemExit(1)

    configure_logging(debug or settings.debug or config.logging.debug)
    logger = logging.getLogger("keystore_credentials")
    logger.debug(f"Using config {config.path}")

    # CLI options override the config file
    section = config.credentials
    resolver = CredentialsResolver(config.project_root, encoding=section.encoding)

    try:
        result = resolver.resolve(
            base_dir if base_dir is not None else section.base_dir,
            keystore if keystore is not None else section.keystore_file_name,
            credentials if credentials is not None else section.credentials_file_name,
            mode=mode if mode is not None else section.mode,
            store_password_property=(
                store_password_property
                if store_password_property is not None
                else section.store_password_property
            ),
            key_alias_property=(
                key_alias_property
                if key_alias_property is not None
                else section.key_alias_property
            ),
            key_password_property=(
                key_password_property
                if key_password_property is not None
                else section.key_password_property
            ),
        )
    except ConfigurationError as e:
        message = str(e)
        if e.__cause__ is not None:
            message = f"{message}: {e.__cause__}"
        err_console.print(f"❌ [red]{escape(message)}[/red]")
        raise SystemExit(1)

    if output_format == "table":
        _render_table(result)
        return

    sink = ExtraProperties()
    publish(result, sink)
    if output_format == "json":
        click.echo(json.dumps(_serializable(sink), indent=2))
    else:
        # absent values have no properties representation
        present = {k: v for k, v in _serializable(sink).items() if v is not None}
        click.echo(properties.dumps(present), nl=False)


@cli.command()
@click.option("--project-root", "-r", help="Project root directory", default=None)
@click.option("--config", "-c", "config_path", help="Config file path", default=None)
@click.option("--force", is_flag=True, help="Overwrite an existing config file", default=False)
def init(project_root: str, config_path: str, force: bool):
    """Write a default config file."""
    config = ConfigManager(config_path, project_root=project_root, load=False)

    if config.path.exists() and not force:
        err_console.print(f"❌ [red]Config file already exists: {escape(str(config.path))}[/red]")
        raise SystemExit(1)

    config.save()
    console.print(f"📝 Wrote default config to {config.path}")


if __name__ == "__main__":
    cli()
