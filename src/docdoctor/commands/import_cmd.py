"""docdoctor import - replace all problems from a file."""

from __future__ import annotations

import sys

import click

from docdoctor.cli import DocDoctorContext, pass_ctx
from docdoctor.codec import split_documents
from docdoctor.errors import MalformedDocumentError
from docdoctor.utils import stamp_document


@click.command("import")
@click.argument("source", type=click.File("r", encoding="utf-8"))
@pass_ctx
def import_cmd(ctx: DocDoctorContext, source) -> None:
    """Replace every stored problem with those in SOURCE.

    SOURCE is a JSON array of problem objects or JSON-lines, one object per
    line. Use - for stdin.
    """
    try:
        documents = split_documents(source.read())
    except MalformedDocumentError as e:
        ctx.fail(str(e))

    ctx.ensure_initialized()
    assert ctx.store is not None

    result = ctx.store.replace_all(stamp_document(d) for d in documents)

    if ctx.json_output:
        ctx.output({"inserted": result.inserted, "failed": result.failed})
    elif not ctx.quiet:
        msg = f"Stored {result.inserted} problem(s)"
        if result.failed:
            msg += f", {result.failed} failed"
        click.echo(msg)

    if not result.ok:
        sys.exit(1)
