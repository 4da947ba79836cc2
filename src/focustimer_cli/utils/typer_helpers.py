"""Typer helper utilities."""

from difflib import get_close_matches

import click
import typer
from typer.core import TyperGroup

from focustimer_cli.utils.exit_codes import ERROR_INVALID_ARGS
from focustimer_cli.utils.ui.formatters import format_error, get_console


class SuggestingGroup(TyperGroup):
    """Command group that accepts unambiguous prefixes and suggests on typos.

    ``focustimer timer sk`` runs ``skip``; ``focustimer timer sta`` is
    ambiguous between ``start`` and ``status`` and lists both.
    """

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            if not args:
                raise
            attempted = args[0]
            names = sorted(self.commands)

            prefixed = [name for name in names if name.startswith(attempted)]
            if len(prefixed) == 1:
                return super().resolve_command(ctx, [prefixed[0], *args[1:]])

            candidates = prefixed or get_close_matches(attempted, names, n=3, cutoff=0.6)
            if not candidates:
                raise

            format_error(f'unknown command "{attempted}" for "{ctx.info_name}"')
            console = get_console()
            console.print("[yellow]Did you mean:[/yellow] " + ", ".join(candidates))
            raise typer.Exit(ERROR_INVALID_ARGS) from e
