"""Install-tool hook entry points.

An install tool calls these after package installation with an event that
carries its ``extra`` options. The event may be:

- a mapping of the options themselves,
- a mapping or object with an ``extra`` mapping,
- an object with a ``get_extra()`` method.

Errors propagate to the caller so the tool can abort its lifecycle.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from dist_provisioner.core.config.settings import ProvisionSettings
from dist_provisioner.core.provisioner import ProvisionResult

logger = logging.getLogger(__name__)


def extract_extra(event: Any) -> Mapping[str, Any]:
    """Pull the extra options out of an install-tool event.

    Raises:
        ValueError: If the event carries no usable options mapping
    """
    get_extra = getattr(event, "get_extra", None)
    if callable(get_extra):
        extra = get_extra()
    elif isinstance(event, Mapping):
        extra = event.get("extra", event)
    else:
        extra = getattr(event, "extra", None)

    if extra is None:
        return {}
    if not isinstance(extra, Mapping):
        raise ValueError(
            f"Hook event extra options must be a mapping, got {type(extra).__name__}"
        )
    return extra


def _settings_for(event: Any, base_dir: Path | None) -> ProvisionSettings:
    settings = ProvisionSettings.from_options(extract_extra(event), base_dir=base_dir)
    logger.debug(
        "Hook settings: app_dir=%s web_dir=%s", settings.app_dir, settings.web_dir
    )
    return settings


def build_parameters(event: Any, base_dir: Path | None = None) -> ProvisionResult:
    """Provision the live parameters file from its template."""
    return _settings_for(event, base_dir).create_provisioner().provision_parameters()


def build_htaccess(event: Any, base_dir: Path | None = None) -> ProvisionResult:
    """Provision the live .htaccess file from its template."""
    return _settings_for(event, base_dir).create_provisioner().provision_access_file()
