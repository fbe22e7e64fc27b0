"""docdoctor init - initialize a new .doc-doctor/ directory."""

from __future__ import annotations

import os

import click

from docdoctor.cli import DocDoctorContext, pass_ctx
from docdoctor.config import PROJECT_DIR, DocDoctorConfig, get_db_path
from docdoctor.store import FAILURE, ProblemStore


@click.command("init")
@click.option("--db", "db_name", default=None, help="Database file name inside .doc-doctor/")
@pass_ctx
def init_cmd(ctx: DocDoctorContext, db_name: str | None) -> None:
    """Initialize a doc-doctor project in the current directory."""
    project_dir = os.path.join(os.getcwd(), PROJECT_DIR)

    if os.path.exists(project_dir):
        click.echo(f"doc-doctor already initialized at {project_dir}")
        return

    os.makedirs(project_dir, exist_ok=True)

    config = DocDoctorConfig()
    if db_name:
        config.db = db_name
    config.save(project_dir)

    gitignore_path = os.path.join(project_dir, ".gitignore")
    with open(gitignore_path, "w") as f:
        f.write("# doc-doctor local files\n")
        f.write("*.db\n")
        f.write("*.db-journal\n")

    db_path = get_db_path(project_dir, config)
    with ProblemStore() as store:
        if store.open(db_path) == FAILURE:
            ctx.fail(f"cannot create database {db_path}: {store.last_error}")

    click.echo(f"Initialized doc-doctor in {project_dir}")
    click.echo(f"  Database: {db_path}")
