"""Command-line interface for bookrecon.

Provides CLI commands for edition reconciliation.
"""

import sys
from pathlib import Path

import click

from bookrecon.audit.helpers import get_package_version

__all__ = ["cli"]

__version__ = get_package_version()


@click.group()
@click.version_option(version=__version__, prog_name="bookrecon")
def cli() -> None:
    """Reconcile noisy book metadata into editions and bindings.

    Use 'bookrecon COMMAND --help' for command-specific help.
    """


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    required=True,
    help="Output JSON file path",
)
@click.option(
    "--corrections",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="JSON file with extra ISBN/author corrections (extends the bundled set)",
)
@click.option(
    "--audit-log",
    type=click.Path(dir_okay=False),
    default=None,
    help="Append JSONL audit events to this file",
)
@click.option(
    "--current-year",
    type=int,
    default=None,
    help="Reference year for publication-year checks (default: this year)",
)
@click.option(
    "--primary-book-id",
    type=str,
    default="",
    help="Work identifier written on every edition row",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
def reconcile(
    input_path: str,
    output: str,
    corrections: str | None,
    audit_log: str | None,
    current_year: int | None,
    primary_book_id: str,
    verbose: bool,
) -> None:
    """Group the book records in INPUT_PATH by edition.

    INPUT_PATH is a JSON array or JSONL file of provider records. The
    editions, newest first, are written to OUTPUT with their bindings.

    Examples
    --------
        bookrecon reconcile venture_deals.json -o editions.json
        bookrecon reconcile records.jsonl -o out.json --audit-log events.jsonl -v
    """
    from bookrecon import load_records, write_editions
    from bookrecon.audit import AuditLogger, generate_run_id
    from bookrecon.config import CorrectionTables, ReconcileConfig, load_default_corrections
    from bookrecon.editions import edition_display_name
    from bookrecon.engine import reconcile as run_reconcile

    logger: AuditLogger | None = None
    try:
        tables = load_default_corrections()
        if corrections:
            tables = tables.merged_with(CorrectionTables.load(corrections))
        config = ReconcileConfig(corrections=tables, current_year=current_year)

        if verbose:
            click.echo(f"Loading: {input_path}", err=True)
        records = load_records(input_path)

        if audit_log:
            logger = AuditLogger(generate_run_id(), Path(audit_log))

        result = run_reconcile(records, config=config, logger=logger)
        write_editions(result.groups, output, primary_book_id=primary_book_id)

        if verbose:
            click.echo("\nResults:", err=True)
            for name, value in result.counters.items():
                click.echo(f"  {name}: {value}", err=True)
            click.echo("\nEditions:", err=True)
            for group in result.groups:
                click.echo(
                    f"  {edition_display_name(group)}: {len(group.records)} binding(s)",
                    err=True,
                )

        click.secho(
            f"✓ Reconciled {len(records)} records into {len(result.groups)} edition(s) "
            f"({len(result.unassigned)} unassigned)",
            fg="green",
        )

    except Exception as e:
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        if verbose:
            import traceback

            click.echo(traceback.format_exc(), err=True)
        sys.exit(1)
    finally:
        if logger is not None:
            logger.close()


@cli.command()
@click.argument("text")
def binding(text: str) -> None:
    """Print the canonical binding for TEXT.

    Examples
    --------
        bookrecon binding "Kindle Edition"
        bookrecon binding "Electronic resource (unabridged)"
    """
    from bookrecon.normalize._fields import normalize_binding

    click.echo(normalize_binding(text))


if __name__ == "__main__":
    cli()
