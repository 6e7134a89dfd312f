"""Command-line interface for the block-cipher ACVP driver."""

from __future__ import annotations

import logging
import sys

import click

from . import __version__
from .algorithms import get_algorithm, list_algorithms
from .errors import AcvpError
from .golden import ReferenceOracle, validate_known_answers
from .interfaces import RunConfig
from .reporting import build_response_document, export_to_json, load_vector_set

logger = logging.getLogger(__name__)


def _fail(e: AcvpError) -> None:
    message = str(e)
    if e.location and e.location not in message:
        message = f"{e.location}: {message}"
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _configure_logging(verbose: int) -> None:
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@click.group()
@click.version_option(version=__version__, prog_name="acvp-block")
def main() -> None:
    """ACVP block-cipher test driver.

    Processes ACVP block-cipher vector sets (AES ECB, CBC and CTR),
    including the Monte Carlo Test, against an implementation under test.
    """
    pass


@main.command(name="list")
def list_cmd() -> None:
    """List supported ACVP algorithms."""
    click.echo("Supported algorithms:")
    click.echo("")
    for algo in list_algorithms():
        click.echo(f"  {algo['name']}")
        click.echo(f"    {algo['description']}")
        click.echo("")


@main.command()
@click.option(
    "--algorithm",
    type=str,
    default=None,
    help="ACVP algorithm name (default: taken from the vector set)",
)
@click.option(
    "--in",
    "input_path",
    type=click.Path(exists=True, dir_okay=False),
    required=True,
    help="Vector set JSON file",
)
@click.option(
    "--out",
    "output_path",
    type=click.Path(dir_okay=False),
    required=True,
    help="Response JSON file to write",
)
@click.option(
    "--indent",
    type=int,
    default=2,
    help="JSON indentation, 0 for compact output (default: 2)",
)
@click.option(
    "--no-envelope",
    is_flag=True,
    help="Write a bare response object instead of the ACVP envelope",
)
@click.option(
    "--verbose", "-v",
    count=True,
    help="Log progress (-v) or every group and MCT round (-vv)",
)
def run(
    algorithm: str | None,
    input_path: str,
    output_path: str,
    indent: int,
    no_envelope: bool,
    verbose: int,
) -> None:
    """Process a vector set using the PyCryptodome reference implementation."""
    _configure_logging(verbose)

    try:
        header, vector_set = load_vector_set(input_path)
    except AcvpError as e:
        _fail(e)

    name = algorithm or header.get("algorithm")
    if not name:
        click.echo("Error: no --algorithm given and the vector set names none", err=True)
        sys.exit(1)
    if not isinstance(name, str):
        click.echo(f"Error: vector set algorithm must be a string, got {name!r}", err=True)
        sys.exit(1)

    try:
        config = RunConfig(algorithm=name, indent=indent, wrap_envelope=not no_envelope)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    cipher = get_algorithm(config.algorithm)
    oracle = ReferenceOracle()

    try:
        groups = cipher.process(vector_set, oracle)
    except AcvpError as e:
        _fail(e)

    document = build_response_document(header, groups, wrap_envelope=config.wrap_envelope)
    path = export_to_json(document, output_path, indent=config.indent)

    logger.info("%d operations sent to the implementation", oracle.total_calls)
    click.echo(f"Processed {len(groups)} test groups with {config.algorithm}")
    click.echo(f"Response written to {path}")


@main.command()
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Show every vector, not only failures",
)
def selftest(verbose: bool) -> None:
    """Check the reference implementation against known-answer vectors."""
    oracle = ReferenceOracle()
    report = validate_known_answers(oracle)

    passed = 0
    for name, correct, detail in report:
        if correct:
            passed += 1
            if verbose:
                click.echo(f"  {name}: PASS")
        else:
            click.echo(f"  {name}: FAIL - {detail}")

    click.echo(f"Known-answer tests: {passed}/{len(report)} passed")
    sys.exit(0 if passed == len(report) else 1)


if __name__ == "__main__":
    main()
