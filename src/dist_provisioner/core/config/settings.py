"""Provisioning settings and install-tool option extraction."""

import json
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from dist_provisioner.core.provisioner import PARAMETER_TEMPLATES, Provisioner

APP_DIR_OPTION = "symfony-app-dir"
WEB_DIR_OPTION = "symfony-web-dir"

DEFAULT_OPTIONS: dict[str, Any] = {
    APP_DIR_OPTION: "app",
    WEB_DIR_OPTION: "web",
}


def get_options(extra: Mapping[str, Any] | None) -> dict[str, Any]:
    """Merge install-tool extra options over the defaults."""
    options = dict(DEFAULT_OPTIONS)
    if extra:
        options.update(extra)
    return options


def _resolve(path: Path, base_dir: Path | None) -> Path:
    if base_dir is None or path.is_absolute():
        return path
    return base_dir / path


class ProvisionSettings(BaseModel):
    """Directories and template names a Provisioner works with."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    app_dir: Path = Path("app")
    web_dir: Path = Path("web")
    parameter_templates: tuple[str, ...] = Field(default=PARAMETER_TEMPLATES)

    @field_validator("app_dir", "web_dir", mode="before")
    @classmethod
    def reject_empty_path(cls, value: Any) -> Any:
        """Refuse an empty string, which Path would turn into the cwd."""
        if isinstance(value, str) and not value:
            raise ValueError("directory must be a non-empty path string")
        return value

    @field_validator("parameter_templates")
    @classmethod
    def require_templates(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        """Require at least one parameters template name."""
        if not value:
            raise ValueError("at least one parameters template name is required")
        return value

    @classmethod
    def from_options(
        cls, options: Mapping[str, Any], base_dir: Path | None = None
    ) -> "ProvisionSettings":
        """Build settings from install-tool options.

        Args:
            options: Mapping with symfony-app-dir / symfony-web-dir keys
            base_dir: Directory that relative paths are resolved against
        """
        merged = get_options(options)
        settings = cls(
            app_dir=merged[APP_DIR_OPTION], web_dir=merged[WEB_DIR_OPTION]
        )
        return settings.relative_to(base_dir)

    def relative_to(self, base_dir: Path | None) -> "ProvisionSettings":
        """Return settings with relative directories anchored at base_dir."""
        return self.model_copy(
            update={
                "app_dir": _resolve(self.app_dir, base_dir),
                "web_dir": _resolve(self.web_dir, base_dir),
            }
        )

    def with_overrides(
        self, app_dir: str | None = None, web_dir: str | None = None
    ) -> "ProvisionSettings":
        """Return settings with explicitly given directories replaced."""
        update: dict[str, Any] = {}
        if app_dir is not None:
            update["app_dir"] = app_dir
        if web_dir is not None:
            update["web_dir"] = web_dir
        if not update:
            return self
        return type(self).model_validate({**self.model_dump(), **update})

    def create_provisioner(
        self, echo: Callable[[str], None] | None = None
    ) -> Provisioner:
        """Build a Provisioner for these directories."""
        return Provisioner(
            self.app_dir, self.web_dir, self.parameter_templates, echo=echo
        )


def load_composer_settings(composer_file: Path | str) -> ProvisionSettings:
    """Read settings from the extra section of a composer.json file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not valid JSON or extra is not an object
    """
    composer_path = Path(composer_file)
    if not composer_path.exists():
        raise FileNotFoundError(f"Composer file not found: {composer_path}")

    try:
        data = json.loads(composer_path.read_text())
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {composer_path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"{composer_path} must contain a JSON object")

    extra = data.get("extra", {})
    if not isinstance(extra, dict):
        raise ValueError(f"'extra' in {composer_path} must be an object")

    return ProvisionSettings.from_options(extra, base_dir=composer_path.parent)


def load_yaml_settings(config_file: Path | str) -> ProvisionSettings:
    """Read settings from a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the content is not a valid settings mapping
    """
    config_path = Path(config_file)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        data = yaml.safe_load(config_path.read_text()) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"{config_path} must contain a YAML mapping")

    # ValidationError subclasses ValueError
    settings = ProvisionSettings.model_validate(data)
    return settings.relative_to(config_path.parent)
