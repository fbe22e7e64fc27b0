"""docdoctor clear - delete every stored problem."""

from __future__ import annotations

import click

from docdoctor.cli import DocDoctorContext, pass_ctx


@click.command("clear")
@click.confirmation_option(prompt="Delete all stored problems?")
@pass_ctx
def clear(ctx: DocDoctorContext) -> None:
    """Delete all problems."""
    ctx.ensure_initialized()
    assert ctx.store is not None

    ctx.check(ctx.store.clear_all(), "failed to clear problems")

    if ctx.json_output:
        ctx.output({"cleared": True})
    elif not ctx.quiet:
        click.echo("All problems cleared.")
