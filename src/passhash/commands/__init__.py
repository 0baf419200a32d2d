"""Subcommand modules for passhash.

Provides register_commands() which uses deferred imports to keep
``passhash --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from passhash.commands.bump import bump
    from passhash.commands.derive import fill, hash_cmd
    from passhash.commands.guess import guess
    from passhash.commands.tags import forget, tags

    cli.add_command(guess)
    cli.add_command(bump)
    cli.add_command(hash_cmd)
    cli.add_command(fill)
    cli.add_command(tags)
    cli.add_command(forget)
