"""Command line interface for dist-provisioner."""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.table import Table

from dist_provisioner.cli_utils import report_results
from dist_provisioner.core.config.settings import (
    ProvisionSettings,
    load_composer_settings,
    load_yaml_settings,
)
from dist_provisioner.core.provisioner import (
    ACCESS_FILE,
    ACCESS_TEMPLATE,
    ProvisionResult,
    Provisioner,
    parameters_destination,
)

DEFAULT_COMPOSER_FILE = "composer.json"


def _load_settings(
    app_dir: str | None,
    web_dir: str | None,
    composer_file: str | None,
    config_file: str | None,
) -> ProvisionSettings:
    """Build settings from config files, then apply explicit directories."""
    if config_file is not None:
        settings = load_yaml_settings(config_file)
    elif composer_file is not None:
        settings = load_composer_settings(composer_file)
    elif Path(DEFAULT_COMPOSER_FILE).exists():
        settings = load_composer_settings(DEFAULT_COMPOSER_FILE)
    else:
        settings = ProvisionSettings()
    return settings.with_overrides(app_dir=app_dir, web_dir=web_dir)


def provisioning_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Shared directory and config-file options."""
    options = [
        click.option(
            "--app-dir", default=None, help="Application directory (holds config/)"
        ),
        click.option(
            "--web-dir", default=None, help="Web directory (holds .dist.htaccess)"
        ),
        click.option(
            "--composer-file",
            type=click.Path(dir_okay=False),
            default=None,
            help="composer.json to read extra options from",
        ),
        click.option(
            "--config",
            "config_file",
            type=click.Path(dir_okay=False),
            default=None,
            help="YAML settings file (takes precedence over composer.json)",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _run(
    app_dir: str | None,
    web_dir: str | None,
    composer_file: str | None,
    config_file: str | None,
    action: Callable[[Provisioner], list[ProvisionResult]],
) -> None:
    try:
        settings = _load_settings(app_dir, web_dir, composer_file, config_file)
        results = action(settings.create_provisioner())
    except (ValueError, OSError, RuntimeError) as e:
        raise click.ClickException(str(e)) from e

    report_results(results)


@click.group()
@click.version_option(package_name="dist-provisioner")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """dist-provisioner - Copy distribution config templates into place."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )


@cli.command()
@provisioning_options
def parameters(
    app_dir: str | None,
    web_dir: str | None,
    composer_file: str | None,
    config_file: str | None,
) -> None:
    """Create config/parameters.* from its dist template if missing."""
    _run(
        app_dir,
        web_dir,
        composer_file,
        config_file,
        lambda provisioner: [provisioner.provision_parameters()],
    )


@cli.command()
@provisioning_options
def htaccess(
    app_dir: str | None,
    web_dir: str | None,
    composer_file: str | None,
    config_file: str | None,
) -> None:
    """Create .htaccess from .dist.htaccess if missing."""
    _run(
        app_dir,
        web_dir,
        composer_file,
        config_file,
        lambda provisioner: [provisioner.provision_access_file()],
    )


@cli.command()
@provisioning_options
def install(
    app_dir: str | None,
    web_dir: str | None,
    composer_file: str | None,
    config_file: str | None,
) -> None:
    """Provision both the parameters file and .htaccess."""
    _run(
        app_dir,
        web_dir,
        composer_file,
        config_file,
        lambda provisioner: provisioner.provision_all(),
    )


def _mark(path: Path | None) -> str:
    if path is not None and path.exists():
        return "[green]yes[/green]"
    return "[red]no[/red]"


@cli.command()
@provisioning_options
def status(
    app_dir: str | None,
    web_dir: str | None,
    composer_file: str | None,
    config_file: str | None,
) -> None:
    """Show which templates and live files exist, without writing anything."""
    try:
        settings = _load_settings(app_dir, web_dir, composer_file, config_file)
    except (ValueError, OSError) as e:
        raise click.ClickException(str(e)) from e

    provisioner = settings.create_provisioner()
    table = Table(title="Provisioning status")
    table.add_column("Template")
    table.add_column("Found")
    table.add_column("Live file")
    table.add_column("Present")

    try:
        template: Path | None = provisioner.resolve_parameters_template()
    except FileNotFoundError:
        template = None

    config_dir = settings.app_dir / "config"
    if template is not None:
        table.add_row(
            str(template),
            _mark(template),
            str(parameters_destination(template)),
            _mark(parameters_destination(template)),
        )
    else:
        live_files = [
            parameters_destination(config_dir / name)
            for name in settings.parameter_templates
        ]
        live = next((path for path in live_files if path.exists()), None)
        table.add_row(
            str(config_dir / settings.parameter_templates[0]),
            _mark(None),
            str(live or config_dir / "parameters.*"),
            _mark(live),
        )

    access_template = settings.web_dir / ACCESS_TEMPLATE
    access_file = settings.web_dir / ACCESS_FILE
    table.add_row(
        str(access_template),
        _mark(access_template),
        str(access_file),
        _mark(access_file),
    )

    Console().print(table)


if __name__ == "__main__":
    cli()
