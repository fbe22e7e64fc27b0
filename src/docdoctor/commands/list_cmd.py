"""docdoctor list - list stored problems."""

from __future__ import annotations

import click

from docdoctor.cli import DocDoctorContext, pass_ctx
from docdoctor.codec import decode_listing
from docdoctor.models import ProblemStatus
from docdoctor.utils import format_problem_row


@click.command("list")
@click.option("--open", "only_open", is_flag=True, help="Only open problems")
@click.option("--resolved", "only_resolved", is_flag=True, help="Only resolved problems")
@click.option("--long", "-L", "long_format", is_flag=True, help="Show function signatures")
@pass_ctx
def list_cmd(ctx: DocDoctorContext, only_open: bool, only_resolved: bool,
             long_format: bool) -> None:
    """List problems, open first, newest first."""
    ctx.ensure_initialized()
    assert ctx.store is not None

    listing = ctx.store.list_all()
    ctx.check(listing, "failed to load problems")
    assert listing is not None

    if ctx.json_output and not (only_open or only_resolved):
        click.echo(listing)
        return

    problems = decode_listing(listing)
    if only_open:
        problems = [p for p in problems if p.status == ProblemStatus.OPEN]
    if only_resolved:
        problems = [p for p in problems if p.status == ProblemStatus.RESOLVED]

    if ctx.json_output:
        ctx.output([p.to_dict() for p in problems])
        return

    if not problems:
        click.echo("No problems found.")
        return

    for problem in problems:
        click.echo(format_problem_row(problem, long_format=long_format))

    if not ctx.quiet:
        open_count = sum(1 for p in problems if p.is_open)
        click.echo(f"\n{len(problems)} problem(s), {open_count} open")
