"""Console reporting of provisioning results."""

import click

from dist_provisioner.core.provisioner import ProvisionOutcome, ProvisionResult


def describe_result(result: ProvisionResult) -> str:
    """One-line description of what happened to a live file."""
    if result.outcome is ProvisionOutcome.COPIED:
        return f"✅ Created {result.destination} from {result.source}"
    return f"ℹ️  Kept existing {result.destination}"


def report_results(results: list[ProvisionResult]) -> None:
    """Echo each provisioned destination, then a summary line.

    Args:
        results: Results in the order the operations ran
    """
    for result in results:
        click.echo(describe_result(result))

    copied = sum(1 for result in results if result.copied)
    if copied:
        click.echo(f"Provisioned {copied} file(s)")
    else:
        click.echo("All live files already exist")
