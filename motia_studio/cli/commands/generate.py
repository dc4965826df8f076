from typing import Optional

from rich.table import Table
import typer

from motia_studio.cli.output import console, echo_json, run
from motia_studio.projects import DEFAULT_USER_ID
from motia_studio.studio import Studio


def generate(
    description: str = typer.Argument(..., help="What the backend should do"),
    language: str = typer.Option(
        "typescript", "--language", "-l", help="typescript, python or go"
    ),
    features: Optional[list[str]] = typer.Option(
        None, "--feature", "-f", help="Feature to include (repeatable)"
    ),
    user_id: str = typer.Option(DEFAULT_USER_ID, "--user", "-u", help="Owner of the project"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Generate a project from a natural-language description."""

    async def _generate(studio: Studio):
        return await studio.projects.generate_project(
            description, language=language, features=features, user_id=user_id
        )

    project = run(_generate)

    if json_output:
        echo_json(project)
        return

    console.print("[bold green]✓ Project generated![/bold green]")
    console.print(f"ID: [cyan]{project.id}[/cyan]")
    console.print(f"Name: [magenta]{project.name}[/magenta]")

    table = Table(title="Files")
    table.add_column("Path", style="cyan")
    table.add_column("Language", style="green")
    table.add_column("Lines", justify="right")
    for f in project.files:
        table.add_row(f.path, f.language, str(len(f.content.splitlines())))
    console.print(table)
    console.print(f"\nDeploy with: [yellow]motia-studio deploy {project.id}[/yellow]")
