"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides the suffix rules, session wiring, and
centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from functools import cached_property
from typing import TYPE_CHECKING

import click

from passhash.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from collections.abc import Callable

    from passhash.config.settings import PassHashSettings
    from passhash.domain.suffix import SuffixRules
    from passhash.infrastructure.configuration import StoredConfigurationLoader
    from passhash.services.result import ServiceResult
    from passhash.services.session import PopupSession


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: PassHashSettings) -> None:
        self.settings = settings

        from passhash.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @cached_property
    def rules(self) -> SuffixRules:
        """Suffix rules from the configured list file, else the built-in set."""
        from passhash.domain.suffix import SuffixRules

        path = self.settings.suffix_list
        if path is None:
            return SuffixRules.default()
        try:
            return SuffixRules.from_file(path)
        except OSError as exc:
            msg = f"Cannot read suffix list {path}: {exc}"
            raise click.ClickException(msg) from exc

    def open_session(
        self,
        url: str | None,
        write: Callable[[str], None],
    ) -> tuple[PopupSession, StoredConfigurationLoader]:
        """Wire a session to the file stores, *url* as target, and *write* for scripts."""
        from passhash.infrastructure.configuration import StoredConfigurationLoader
        from passhash.infrastructure.hashword import generate_hash_word
        from passhash.infrastructure.stores import FileKeyStore
        from passhash.infrastructure.targets import ScriptInjector, UrlTargetLookup
        from passhash.services.session import PopupSession

        loader = StoredConfigurationLoader(self.settings)
        session = PopupSession(
            key_store=FileKeyStore(self.settings.data_dir),
            config_loader=loader,
            targets=UrlTargetLookup(url),
            injector=ScriptInjector(write),
            hash_fn=generate_hash_word,
            rules=self.rules,
        )
        return session, loader

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
