"""
Resume Studio command line.

Commands:
    serve  - Run the HTTP server
    seed   - Create the demo account and sample résumé
    export - Write a résumé's printable page to a file

Examples:

    resume-studio serve --port 8000

    resume-studio seed

    resume-studio export 1 --username demo --out exports/
"""

from __future__ import annotations

from pathlib import Path

import typer
import uvicorn
from loguru import logger
from typing_extensions import Annotated

from resume_studio.auth import IdentityService
from resume_studio.config import settings
from resume_studio.editor.export import ExportTrigger
from resume_studio.errors import ResumeStudioError
from resume_studio.logger import setup_logger
from resume_studio.persistence import ResumeService
from resume_studio.seed import seed_demo_data
from resume_studio.store import open_storage

app = typer.Typer(
    help="Résumé editor server and maintenance commands",
    add_completion=False,
    invoke_without_command=True,
)


def _setup_logging() -> None:
    setup_logger(
        level=settings.log_level,
        log_dir=Path(settings.log_dir) if settings.log_dir else None,
        extra_provenance={
            "Environment": settings.environment,
            "Database": settings.database_path,
            "Generator": f"{settings.generator_framework}/{settings.default_model}",
        },
    )


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Bind address")] = "127.0.0.1",
    port: Annotated[int, typer.Option(help="Port")] = 8000,
    reload: Annotated[bool, typer.Option(help="Reload on code changes")] = False,
):
    """Run the HTTP server."""
    _setup_logging()
    uvicorn.run("resume_studio.main:create_app", factory=True, host=host, port=port, reload=reload)


@app.command()
def seed():
    """Create the demo account and sample résumé if missing."""
    _setup_logging()
    storage = open_storage(settings.database_path)
    try:
        created = seed_demo_data(IdentityService(storage, rounds=settings.password_rounds), ResumeService(storage))
    finally:
        storage.close()
    typer.echo("Seeded demo data" if created else "Demo data already present")


@app.command()
def export(
    resume_id: Annotated[int, typer.Argument(help="Résumé id")],
    username: Annotated[str, typer.Option(help="Owner of the résumé")],
    out: Annotated[Path, typer.Option(help="Output directory")] = Path("."),
):
    """Write the printable page of a résumé owned by USERNAME."""
    _setup_logging()
    storage = open_storage(settings.database_path)
    try:
        record = storage.get_user_by_username(username)
        if record is None:
            typer.echo(f"Unknown user: {username}", err=True)
            raise typer.Exit(code=1)
        try:
            resume = ResumeService(storage).load(record.public(), resume_id)
        except ResumeStudioError as e:
            typer.echo(f"Cannot export resume {resume_id}: {e.message}", err=True)
            raise typer.Exit(code=1)
        artifact = ExportTrigger().export(resume.content, resume.title)
    finally:
        storage.close()

    out.mkdir(parents=True, exist_ok=True)
    path = out / artifact.filename
    path.write_bytes(artifact.content)
    logger.success(f"Wrote {path}")
    typer.echo(str(path))


if __name__ == "__main__":
    app()
