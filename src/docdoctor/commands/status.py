"""docdoctor resolve / reopen - change problem status."""

from __future__ import annotations

import sys

import click

from docdoctor.cli import DocDoctorContext, pass_ctx
from docdoctor.models import ProblemStatus
from docdoctor.store import FAILURE


def _set_status(ctx: DocDoctorContext, problem_ids: tuple[int, ...],
                status: int, verb: str) -> None:
    ctx.ensure_initialized()
    assert ctx.store is not None

    changed = []
    for problem_id in problem_ids:
        if ctx.store.update_status(problem_id, status) == FAILURE:
            click.echo(f"Warning: could not update problem {problem_id}: "
                       f"{ctx.store.last_error}", err=True)
            continue
        changed.append(problem_id)
        if not ctx.quiet and not ctx.json_output:
            click.echo(f"{verb} {problem_id}")

    if ctx.json_output:
        ctx.output({verb.lower(): changed})

    if len(changed) < len(problem_ids):
        sys.exit(1)


@click.command("resolve")
@click.argument("problem_ids", nargs=-1, required=True, type=int)
@pass_ctx
def resolve(ctx: DocDoctorContext, problem_ids: tuple[int, ...]) -> None:
    """Mark problems as resolved."""
    _set_status(ctx, problem_ids, ProblemStatus.RESOLVED, "Resolved")


@click.command("reopen")
@click.argument("problem_ids", nargs=-1, required=True, type=int)
@pass_ctx
def reopen(ctx: DocDoctorContext, problem_ids: tuple[int, ...]) -> None:
    """Mark resolved problems as open again."""
    _set_status(ctx, problem_ids, ProblemStatus.OPEN, "Reopened")
