"""CLI commands using Typer."""

import asyncio
import mimetypes
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from src.applications.models import (
    ALLOWED_CONTENT_TYPES,
    JOB_POSITIONS,
    LOCATION_EMAILS,
    DocumentKind,
    UploadedFile,
)
from src.client.api_client import ApplicationClient, submit_form
from src.client.form import EditField, FormState, FormStatus, SelectFile, reduce

app = typer.Typer(
    name="job-application-mailer",
    help="Submit job applications and run the application mailer API",
    add_completion=False,
)

console = Console()

_CONTENT_TYPES_BY_EXTENSION = {ext: ctype for ctype, ext in ALLOWED_CONTENT_TYPES.items()}


def load_document(path: Path) -> UploadedFile:
    """Read a document from disk, guessing its media type from the extension."""
    if not path.is_file():
        raise typer.BadParameter(f"File not found: {path}")

    extension = path.suffix.lower().lstrip(".")
    content_type = _CONTENT_TYPES_BY_EXTENSION.get(extension) or mimetypes.guess_type(path.name)[0]

    return UploadedFile(
        filename=path.name,
        content=path.read_bytes(),
        content_type=content_type,
    )


def _check_choice(value: str, choices: tuple[str, ...] | list[str], option: str) -> str:
    if value not in choices:
        raise typer.BadParameter(f"{value!r} is not one of: {', '.join(choices)}", param_hint=option)
    return value


@app.command()
def apply(
    full_name: Annotated[str, typer.Option("--name", "-n", help="Applicant full name")],
    email: Annotated[str, typer.Option("--email", "-e", help="Applicant email")],
    position: Annotated[str, typer.Option("--position", "-p", help="Job position")],
    location: Annotated[str, typer.Option("--location", "-l", help="Office location")],
    resume: Annotated[Path, typer.Option("--resume", help="Resume/CV (PDF, DOC, DOCX)")],
    degree: Annotated[Path, typer.Option("--degree", help="Degree certificate")],
    id_proof: Annotated[Path, typer.Option("--id-proof", help="ID proof")],
    phone: Annotated[str, typer.Option("--phone", help="Phone number")] = "",
    experience: Annotated[
        Path | None, typer.Option("--experience", help="Experience certificates")
    ] = None,
    certification1: Annotated[
        Path | None, typer.Option("--certification1", help="First certification")
    ] = None,
    certification2: Annotated[
        Path | None, typer.Option("--certification2", help="Second certification")
    ] = None,
    other: Annotated[Path | None, typer.Option("--other", help="Any other document")] = None,
    api_url: Annotated[
        str | None, typer.Option("--api-url", envvar="API_URL", help="Mailer API base URL")
    ] = None,
):
    """
    Submit a job application with its documents.

    Example:
        job-application-mailer apply -n "Jane Doe" -e jane@example.com \\
            -p "Registered Behavior Technician (RBT)" -l "Bala Cynwyd Office" \\
            --resume cv.pdf --degree degree.pdf --id-proof id.pdf
    """
    _check_choice(position, JOB_POSITIONS, "--position")
    _check_choice(location, list(LOCATION_EMAILS), "--location")

    state = FormState()
    for name, value in (
        ("fullName", full_name),
        ("email", email),
        ("phone", phone),
        ("position", position),
        ("location", location),
    ):
        state = reduce(state, EditField(name, value))

    paths = {
        DocumentKind.RESUME: resume,
        DocumentKind.DEGREE: degree,
        DocumentKind.ID_PROOF: id_proof,
        DocumentKind.EXPERIENCE: experience,
        DocumentKind.CERTIFICATION_1: certification1,
        DocumentKind.CERTIFICATION_2: certification2,
        DocumentKind.OTHER: other,
    }
    for kind, path in paths.items():
        if path is None:
            continue
        state = reduce(state, SelectFile(kind, load_document(path)))
        if state.status == FormStatus.ERROR:
            console.print(f"[red]Error:[/red] {state.error}")
            raise typer.Exit(1)

    console.print(
        Panel(
            f"[bold]Submitting application for:[/bold] {position}\n"
            f"[dim]Location:[/dim] {location}\n"
            f"[dim]Documents:[/dim] {', '.join(kind.label for kind, _ in state.selected_files())}",
            title="Job Application",
        )
    )

    async def run_submission():
        async with ApplicationClient(base_url=api_url) as client:
            return await submit_form(client, state)

    result = asyncio.run(run_submission())

    if result.status != FormStatus.SUCCESS:
        console.print(f"[red]Error:[/red] {result.error}")
        if result.detail:
            console.print(f"[dim]{escape(result.detail)}[/dim]")
        raise typer.Exit(1)

    console.print(
        Panel(
            "[bold green]Thank you for your application![/bold green]\n"
            "Our HR team will review your documents and contact you through the "
            "email you provided if they wish to proceed with your candidacy.",
        )
    )


@app.command()
def options():
    """
    List the locations, positions and documents an application can use.
    """
    locations = Table(title="Locations")
    locations.add_column("Location")
    locations.add_column("Recipient", style="dim")
    for location, recipient in LOCATION_EMAILS.items():
        locations.add_row(location, recipient)
    console.print(locations)

    positions = Table(title="Positions")
    positions.add_column("Position")
    for position in JOB_POSITIONS:
        positions.add_row(position)
    console.print(positions)

    documents = Table(title="Documents")
    documents.add_column("Field")
    documents.add_column("Document")
    documents.add_column("Required")
    for kind in DocumentKind:
        documents.add_row(kind.value, kind.label, "[green]yes[/green]" if kind.required else "no")
    console.print(documents)


@app.command()
def serve(
    host: Annotated[str, typer.Option("--host", help="Bind address")] = "127.0.0.1",
    port: Annotated[int, typer.Option("--port", "-p", help="Port for the API")] = 8000,
    reload: Annotated[bool, typer.Option("--reload", help="Reload on code changes")] = False,
):
    """
    Start the application mailer API.

    Example:
        job-application-mailer serve --port 8000
    """
    import uvicorn

    console.print(
        Panel(
            f"[bold]Starting Application Mailer API[/bold]\n\n"
            f"Address: http://{host}:{port}\n\n"
            f"Press Ctrl+C to stop",
            title="Job Application Mailer",
        )
    )

    uvicorn.run(
        "src.main:app",
        host=host,
        port=port,
        reload=reload,
    )


if __name__ == "__main__":
    app()
