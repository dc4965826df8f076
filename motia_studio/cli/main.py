import sys

import typer

from motia_studio.cli.commands import project, template
from motia_studio.cli.commands.deploy import deploy, status
from motia_studio.cli.commands.generate import generate
from motia_studio.logging import setup_logging

app = typer.Typer(
    name="motia-studio",
    help="Generate Motia backends from a description and deploy them",
    add_completion=False,
)
app.add_typer(project.app, name="projects", help="Manage projects")
app.add_typer(template.app, name="templates", help="Browse and use project templates")

app.command()(generate)
app.command()(deploy)
app.command()(status)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show log output"),
):
    """Motia Studio command line."""
    setup_logging(log_level=None if verbose else "ERROR", stream=sys.stderr)


if __name__ == "__main__":
    app()
