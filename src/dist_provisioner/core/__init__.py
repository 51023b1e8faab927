"""Core provisioning logic."""

from dist_provisioner.core.provisioner import (
    PARAMETER_TEMPLATES,
    ProvisionOutcome,
    Provisioner,
    ProvisionResult,
    resolve_parameters_template,
)

__all__ = [
    "PARAMETER_TEMPLATES",
    "ProvisionOutcome",
    "ProvisionResult",
    "Provisioner",
    "resolve_parameters_template",
]
