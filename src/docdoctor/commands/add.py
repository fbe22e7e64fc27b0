"""docdoctor add - store one problem document."""

from __future__ import annotations

import click

from docdoctor.cli import DocDoctorContext, pass_ctx
from docdoctor.utils import stamp_document


@click.command("add")
@click.argument("document", required=False)
@click.option("--no-stamp", is_flag=True,
              help="Do not fill in a missing check_timestamp")
@pass_ctx
def add(ctx: DocDoctorContext, document: str | None, no_stamp: bool) -> None:
    """Store one problem given as a JSON object (argument or stdin)."""
    if document is None:
        document = click.get_text_stream("stdin").read()
    ctx.ensure_initialized()
    assert ctx.store is not None

    if not no_stamp:
        document = stamp_document(document)

    problem_id = ctx.store.insert(document)
    ctx.check(problem_id, "failed to store problem")

    if ctx.json_output:
        ctx.output({"id": problem_id})
    elif ctx.quiet:
        click.echo(problem_id)
    else:
        click.echo(f"Stored problem {problem_id}")
