"""Command class shared by passhash subcommands.

Each subcommand can carry sample invocations (tag guessing, bumping,
per-site length overrides) shown by ``passhash <cmd> --examples``; ``--help``
stays limited to the options themselves.
"""

from __future__ import annotations

from typing import Any

import click


class PassHashCommand(click.Command):
    """A click command with an optional eager ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(self.examples)
        ctx.exit(0)
