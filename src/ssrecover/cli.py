"""
CLI application for threshold secret reconstruction.

Commands:
    solve      Reconstruct the secret of one or more share set files
    inspect    Show the shares a file would contribute, without solving
"""

import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import typer

from .config import (
    DEFAULT_CASE_FILES,
    DEFAULT_PRECISION,
    ReconstructionConfig,
    SelectionOrder,
)
from .core.decoder import decode, select_identifiers
from .crypto.encoding import format_decimal
from .core.loader import CaseStore, load_share_set
from .core.solver import solve_files
from .errors import ReconstructionError


app = typer.Typer(
    name="ssrecover",
    help="Recover a Shamir shared secret by exact Lagrange interpolation",
)

BANNER = "Shamir Secret Reconstruction"

LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


@app.callback()
def main(
    verbose: int = typer.Option(
        0, "--verbose", "-v", count=True, help="More logging (-v info, -vv debug)"
    ),
) -> None:
    """Reconstruct secrets from (k, n) threshold shares."""
    logging.basicConfig(
        level=LOG_LEVELS[min(verbose, len(LOG_LEVELS) - 1)],
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def resolve_paths(files: Optional[List[Path]], case_dir: Optional[Path]) -> List[Path]:
    """Files given explicitly, else every case in case_dir, else the defaults."""
    if files:
        return list(files)
    if case_dir is not None:
        return CaseStore(case_dir).list_cases()
    return [Path(name) for name in DEFAULT_CASE_FILES]


@app.command()
def solve(
    files: Optional[List[Path]] = typer.Argument(
        None, help="Share set JSON files (default: testcase1.json testcase2.json)"
    ),
    case_dir: Optional[Path] = typer.Option(
        None, "--dir", "-d", help="Solve every .json file in this directory"
    ),
    order: SelectionOrder = typer.Option(
        SelectionOrder.LEXICOGRAPHIC, "--order", "-o", help="Share selection order"
    ),
    keep_going: bool = typer.Option(
        False, "--keep-going", "-k", help="Continue after a failing file"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON"),
    precision: int = typer.Option(
        DEFAULT_PRECISION, "--precision", help="Digits shown for a non-integer result"
    ),
) -> None:
    """
    Reconstruct the secret of each share set file.

    Only the first k shares (by selection order) of each file are used.

    Example:
        ssrecover solve testcase1.json testcase2.json
        ssrecover solve --dir cases --keep-going --json
    """
    try:
        config = ReconstructionConfig(
            order=order, fail_fast=not keep_going, precision=precision
        )
        paths = resolve_paths(files, case_dir)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if not paths:
        typer.echo("Error: No share set files found.", err=True)
        raise typer.Exit(1)

    results = solve_files(paths, config)

    if as_json:
        typer.echo(json.dumps([r.to_dict() for r in results], indent=2))
    else:
        typer.echo(BANNER)
        typer.echo("=" * len(BANNER))
        for result in results:
            if result.ok:
                typer.echo(
                    f"Secret for {result.source}: {format_decimal(result.secret)}"
                )
            else:
                typer.echo(
                    f"Error processing {result.source}: {result.error}", err=True
                )

    if not all(r.ok for r in results):
        raise typer.Exit(1)


@app.command()
def inspect(
    file: Path = typer.Argument(..., help="Share set JSON file"),
    order: SelectionOrder = typer.Option(
        SelectionOrder.LEXICOGRAPHIC, "--order", "-o", help="Share selection order"
    ),
) -> None:
    """
    Show metadata and the decoded shares that would be interpolated.
    """
    try:
        share_set = load_share_set(file)
        selected = select_identifiers(share_set, order=order)
        shares = decode(share_set, order=order)
    except ReconstructionError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"File: {file}")
    typer.echo(f"n = {share_set.n}, k = {share_set.k}")
    typer.echo(f"Shares supplied: {len(share_set.identifiers())}")
    typer.echo("")

    typer.echo("Selected shares:")
    typer.echo("-" * 50)
    for identifier, share in zip(selected, shares):
        raw = share_set.raw_share(identifier)
        typer.echo(
            f"  {identifier}: base={raw.base} value={raw.value}"
            f" -> x={format_decimal(share.x)}, y={format_decimal(share.y)}"
        )

    skipped = [i for i in share_set.identifiers() if i not in selected]
    if skipped:
        typer.echo("")
        typer.echo(f"Unused: {', '.join(sorted(skipped))}")


if __name__ == "__main__":
    app()
