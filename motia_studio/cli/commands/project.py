from rich.syntax import Syntax
from rich.table import Table
import typer

from motia_studio.cli.commands.deploy import STATUS_COLORS
from motia_studio.cli.output import console, echo_json, fail, run
from motia_studio.models import ProjectStatus
from motia_studio.projects import DEFAULT_USER_ID
from motia_studio.studio import Studio

app = typer.Typer()

PROJECT_COLORS = {
    ProjectStatus.GENERATING: "yellow",
    ProjectStatus.READY: "green",
    ProjectStatus.ERROR: "red",
}


@app.command("list")
def list_projects(
    user_id: str = typer.Option(DEFAULT_USER_ID, "--user", "-u", help="Owner of the projects"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """List projects of a user, newest first."""

    async def _list(studio: Studio):
        return await studio.store.list_projects(user_id)

    projects = run(_list)

    if json_output:
        echo_json(projects)
        return

    table = Table(title="Projects")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="magenta")
    table.add_column("Status")
    table.add_column("Language")
    table.add_column("Files", justify="right")

    for p in projects:
        color = PROJECT_COLORS[p.status]
        table.add_row(
            p.id,
            p.name,
            f"[{color}]{p.status.value}[/{color}]",
            p.language.value,
            str(len(p.files)),
        )

    console.print(table)


@app.command()
def show(
    project_id: str = typer.Argument(..., help="Project to show"),
    files: bool = typer.Option(False, "--files", help="Print file contents"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Show a project with its deployments."""

    async def _show(studio: Studio):
        project = await studio.store.get_project(project_id)
        if project is None:
            fail(f"Project not found: {project_id}")
        return project, await studio.store.list_deployments(project_id)

    project, deployments = run(_show)

    if json_output:
        data = project.model_dump(mode="json", by_alias=True, exclude_none=True)
        data["deployments"] = [
            d.model_dump(mode="json", by_alias=True, exclude_none=True) for d in deployments
        ]
        echo_json(data)
        return

    color = PROJECT_COLORS[project.status]
    console.print(f"[bold]Project: {project.name} ({project.id})[/bold]")
    console.print(f"Status: [{color}]{project.status.value}[/{color}]")
    console.print(f"Language: {project.language.value}")
    if project.template_id:
        console.print(f"Template: {project.template_id}")
    if project.error:
        console.print(f"Error: [red]{project.error}[/red]")
    console.print(f"Description: {project.description}")

    for f in project.files:
        console.print(f"\n[cyan]{f.path}[/cyan]")
        if files:
            console.print(Syntax(f.content, f.language, line_numbers=True))

    if deployments:
        table = Table(title="Deployments")
        table.add_column("ID", style="cyan")
        table.add_column("Status")
        table.add_column("URL")
        for d in deployments:
            dcolor = STATUS_COLORS[d.status]
            table.add_row(d.id, f"[{dcolor}]{d.status.value}[/{dcolor}]", d.url or "")
        console.print(table)


@app.command()
def delete(
    project_id: str = typer.Argument(..., help="Project to delete"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Delete a project. Its deployments are kept."""
    if not yes:
        typer.confirm(f"Delete project {project_id}?", abort=True)

    async def _delete(studio: Studio):
        return await studio.store.delete_project(project_id)

    if not run(_delete):
        fail(f"Project not found: {project_id}")
    console.print(f"[green]✓[/green] Project {project_id} deleted")
