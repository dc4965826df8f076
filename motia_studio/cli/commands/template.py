from rich.table import Table
import typer

from motia_studio.cli.output import console, echo_json, fail, run
from motia_studio.projects import DEFAULT_USER_ID
from motia_studio.studio import Studio
from motia_studio.templates import seed_templates

app = typer.Typer()


@app.command("list")
def list_templates(json_output: bool = typer.Option(False, "--json", help="Output as JSON")):
    """List available project templates."""

    async def _list(studio: Studio):
        await seed_templates(studio.store)
        return await studio.store.list_templates()

    templates = run(_list)

    if json_output:
        echo_json(templates)
        return

    table = Table(title="Templates")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="magenta")
    table.add_column("Category")
    table.add_column("Difficulty")
    table.add_column("Deploy time", justify="right")

    for t in templates:
        table.add_row(t.id, t.name, t.category, t.difficulty.value, t.deploy_time)

    console.print(table)


@app.command()
def use(
    template_id: str = typer.Argument(..., help="Template to instantiate"),
    user_id: str = typer.Option(DEFAULT_USER_ID, "--user", "-u", help="Owner of the project"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Create a ready project from a template."""

    async def _use(studio: Studio):
        await seed_templates(studio.store)
        project = await studio.projects.create_from_template(template_id, user_id=user_id)
        if project is None:
            fail(f"Template not found: {template_id}")
        return project

    project = run(_use)

    if json_output:
        echo_json(project)
        return

    console.print("[bold green]✓ Project created from template![/bold green]")
    console.print(f"ID: [cyan]{project.id}[/cyan]")
    console.print(f"Name: [magenta]{project.name}[/magenta]")
    console.print(f"\nDeploy with: [yellow]motia-studio deploy {project.id}[/yellow]")
