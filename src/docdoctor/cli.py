"""Click CLI root and global flags for docdoctor."""

from __future__ import annotations

import json
import sys
from typing import NoReturn

import click

from docdoctor import __version__
from docdoctor.config import ENV_DB, DocDoctorConfig, find_project_dir, get_db_path
from docdoctor.log import setup_logging
from docdoctor.store import FAILURE, ProblemStore


class DocDoctorContext:
    """Shared context for all commands."""

    def __init__(self) -> None:
        self.project_dir: str | None = None
        self.db_path: str | None = None
        self.store: ProblemStore | None = None
        self.config: DocDoctorConfig | None = None
        self.json_output: bool = False
        self.verbose: bool = False
        self.quiet: bool = False

    def ensure_initialized(self) -> None:
        """Ensure the project directory and an open store are available."""
        if self.store is not None:
            return
        self.project_dir = find_project_dir()
        if self.project_dir is not None:
            self.config = DocDoctorConfig.load(self.project_dir)
            if not self.json_output:
                self.json_output = self.config.json_output
            if self.config.verbose and not self.verbose:
                self.verbose = True
                setup_logging(verbose=True)
        if self.db_path is None:
            if self.project_dir is None:
                click.echo("Error: not in a doc-doctor project (no .doc-doctor/ directory found)",
                           err=True)
                click.echo("Run 'docdoctor init' to create one, or pass --db", err=True)
                sys.exit(1)
            self.db_path = get_db_path(self.project_dir, self.config)

        store = ProblemStore()
        if store.open(self.db_path) == FAILURE:
            self.fail(f"cannot open database {self.db_path}: {store.last_error}")
        self.store = store

    def check(self, rc: int | str | None, what: str) -> None:
        """Exit with an error if a store call returned a failure sentinel."""
        if rc is None or rc == FAILURE:
            assert self.store is not None
            self.fail(f"{what}: {self.store.last_error}")

    def fail(self, message: str) -> NoReturn:
        click.echo(f"Error: {message}", err=True)
        sys.exit(1)

    def close(self) -> None:
        if self.store is not None:
            self.store.close()
            self.store = None

    def output(self, data: dict | list) -> None:
        """Output data as JSON."""
        click.echo(json.dumps(data, indent=2, ensure_ascii=False))


pass_ctx = click.make_pass_decorator(DocDoctorContext, ensure=True)


@click.group(invoke_without_command=True)
@click.option("--db", envvar=ENV_DB, help="Path to database file")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.option("--verbose", "-v", is_flag=True, help="Verbose diagnostics on stderr")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.version_option(__version__, prog_name="docdoctor")
@click.pass_context
def cli(ctx: click.Context, db: str | None, json_output: bool,
        verbose: bool, quiet: bool) -> None:
    """docdoctor - store and review function documentation problems"""
    dctx = ctx.ensure_object(DocDoctorContext)
    dctx.verbose = verbose
    dctx.quiet = quiet
    if json_output:
        dctx.json_output = True
    if db:
        dctx.db_path = db
    setup_logging(verbose=verbose)
    ctx.call_on_close(dctx.close)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# --- Register all commands ---

from docdoctor.commands.add import add
from docdoctor.commands.clear import clear
from docdoctor.commands.import_cmd import import_cmd
from docdoctor.commands.init_cmd import init_cmd
from docdoctor.commands.list_cmd import list_cmd
from docdoctor.commands.status import reopen, resolve

cli.add_command(init_cmd, "init")
cli.add_command(add, "add")
cli.add_command(import_cmd, "import")
cli.add_command(list_cmd, "list")
cli.add_command(resolve, "resolve")
cli.add_command(reopen, "reopen")
cli.add_command(clear, "clear")


def main() -> None:
    cli(auto_envvar_prefix="DOC_DOCTOR")
