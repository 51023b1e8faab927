"""Copy distribution templates into place when no live file exists."""

import logging
import os
import shutil
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import click

logger = logging.getLogger(__name__)

PARAMETER_TEMPLATES: tuple[str, ...] = (
    "parameters.dist.yml",
    "parameters.dist.xml",
    "parameters.dist.php",
)

ACCESS_TEMPLATE = ".dist.htaccess"
ACCESS_FILE = ".htaccess"


class ProvisionOutcome(Enum):
    """What a provisioning operation did."""

    SKIPPED = "skipped"
    COPIED = "copied"


@dataclass(frozen=True)
class ProvisionResult:
    """Outcome of one provisioning operation."""

    outcome: ProvisionOutcome
    source: Path | None
    destination: Path

    @property
    def copied(self) -> bool:
        """Whether a template was copied to the destination."""
        return self.outcome is ProvisionOutcome.COPIED


def _stdout_echo(message: str) -> None:
    click.echo(message, nl=False)


def validate_directory(path: object) -> Path:
    """Return *path* as a Path, rejecting anything but a non-empty path string.

    Raises:
        ValueError: If path is not a str/PathLike or is empty
    """
    if not isinstance(path, str | os.PathLike):
        raise ValueError(
            f"Expected a path string, got {type(path).__name__}: {path!r}"
        )
    if not os.fspath(path):
        raise ValueError("Expected a non-empty path string")
    return Path(path)


def resolve_parameters_template(
    app_dir: str | os.PathLike[str],
    candidates: Sequence[str] = PARAMETER_TEMPLATES,
) -> Path:
    """Find the first parameters template that exists under app_dir/config.

    Args:
        app_dir: Application directory
        candidates: Template file names in priority order

    Returns:
        Path of the first existing template

    Raises:
        ValueError: If app_dir is not a valid path
        FileNotFoundError: If none of the candidates exist
    """
    config_dir = validate_directory(app_dir) / "config"

    for name in candidates:
        template = config_dir / name
        if template.exists():
            logger.debug("Using parameters template %s", template)
            return template
        logger.debug("Parameters template %s not found", template)

    raise FileNotFoundError(f"Could not find parameters dist file in {config_dir}")


def parameters_destination(template: Path) -> Path:
    """Live parameters path matching the template's format."""
    return template.parent / f"parameters{template.suffix}"


class Provisioner:
    """Provisions the live parameters and .htaccess files from templates."""

    def __init__(
        self,
        app_dir: str | os.PathLike[str],
        web_dir: str | os.PathLike[str],
        parameter_templates: Sequence[str] = PARAMETER_TEMPLATES,
        echo: Callable[[str], None] | None = None,
    ) -> None:
        """Initialize provisioner.

        Args:
            app_dir: Application directory holding config/
            web_dir: Public web directory holding the .htaccess template
            parameter_templates: Parameters template names in priority order
            echo: Writer for progress text (default: standard output)
        """
        self.app_dir = validate_directory(app_dir)
        self.web_dir = validate_directory(web_dir)
        self.parameter_templates = tuple(parameter_templates)
        if not self.parameter_templates:
            raise ValueError("At least one parameters template name is required")
        self._echo = echo or _stdout_echo

    def resolve_parameters_template(self) -> Path:
        """Find the parameters template for this application directory."""
        return resolve_parameters_template(self.app_dir, self.parameter_templates)

    def provision_parameters(self) -> ProvisionResult:
        """Copy the parameters template to its live path unless one exists.

        Raises:
            FileNotFoundError: If no parameters template exists
            RuntimeError: If the copy fails
        """
        self._echo("Building Parameters File... ")
        template = self.resolve_parameters_template()
        destination = parameters_destination(template)
        return self._provision(
            template,
            destination,
            skip_message="Skipping. Parameters already exist",
            failure_message="Could not create parameters",
        )

    def provision_access_file(self) -> ProvisionResult:
        """Copy .dist.htaccess to .htaccess unless one exists.

        Raises:
            RuntimeError: If the copy fails, including a missing template
        """
        self._echo("Building .htaccess File... ")
        return self._provision(
            self.web_dir / ACCESS_TEMPLATE,
            self.web_dir / ACCESS_FILE,
            skip_message="Skipping. .htaccess already exists",
            failure_message="Could not create .htaccess",
        )

    def provision_all(self) -> list[ProvisionResult]:
        """Provision parameters, then the access file."""
        return [self.provision_parameters(), self.provision_access_file()]

    def _provision(
        self,
        source: Path,
        destination: Path,
        skip_message: str,
        failure_message: str,
    ) -> ProvisionResult:
        if destination.exists():
            logger.debug("%s exists, leaving it untouched", destination)
            self._echo(skip_message + os.linesep)
            return ProvisionResult(ProvisionOutcome.SKIPPED, None, destination)

        try:
            shutil.copyfile(source, destination)
        except OSError as e:
            raise RuntimeError(
                f"{failure_message}. File copy failed at: {destination}"
            ) from e

        logger.debug("Copied %s to %s", source, destination)
        self._echo("Success" + os.linesep)
        return ProvisionResult(ProvisionOutcome.COPIED, source, destination)
