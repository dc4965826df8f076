from rich.table import Table
import typer

from motia_studio.cli.output import console, echo_json, fail, run
from motia_studio.models import Deployment, DeploymentStatus
from motia_studio.studio import Studio

STATUS_COLORS = {
    DeploymentStatus.DEPLOYING: "yellow",
    DeploymentStatus.LIVE: "green",
    DeploymentStatus.FAILED: "red",
}


def print_deployment(deployment: Deployment) -> None:
    table = Table(title=f"Deployment {deployment.id}")
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    color = STATUS_COLORS[deployment.status]
    table.add_row("Status", f"[{color}]{deployment.status.value}[/{color}]")
    table.add_row("Project ID", deployment.project_id)
    table.add_row("Deployed", deployment.deployed_at.isoformat())
    table.add_row("Memory", deployment.config.memory)
    table.add_row("Timeout", f"{deployment.config.timeout}s")
    if deployment.url:
        table.add_row("URL", deployment.url)
    if deployment.error:
        table.add_row("Error", deployment.error)
    if deployment.metrics:
        m = deployment.metrics
        table.add_row("Requests", str(m.requests))
        table.add_row("Avg latency", m.avg_latency)
        table.add_row("Error rate", m.error_rate)
        table.add_row("Uptime", m.uptime)

    console.print(table)


def deploy(
    project_id: str = typer.Argument(..., help="Project to deploy"),
    wait: bool = typer.Option(
        True, "--wait/--no-wait", help="Wait until the deployment is live or failed"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Deploy a ready project."""

    async def _deploy(studio: Studio):
        deployment_id = await studio.lifecycle.deploy_project(project_id)
        if not wait:
            # Closing the studio still drains the advancement task.
            return await studio.lifecycle.get_deployment_status(deployment_id)
        return await studio.lifecycle.wait_for_deployment(deployment_id, poll_interval=0.1)

    deployment = run(_deploy)

    if json_output:
        echo_json(deployment)
        return

    if deployment.status is DeploymentStatus.DEPLOYING:
        console.print("[green]✓[/green] Deployment started")
        console.print(f"Deployment ID: [cyan]{deployment.id}[/cyan]")
        console.print(
            f"\nMonitor with: [yellow]motia-studio status {deployment.id}[/yellow]"
        )
        return

    print_deployment(deployment)
    if deployment.status is DeploymentStatus.FAILED:
        raise typer.Exit(code=1)


def status(
    deployment_id: str = typer.Argument(..., help="Deployment to inspect"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Show the status of a deployment."""

    async def _status(studio: Studio):
        deployment = await studio.lifecycle.get_deployment_status(deployment_id)
        if deployment is None:
            fail(f"Deployment not found: {deployment_id}")
        return deployment

    deployment = run(_status)

    if json_output:
        echo_json(deployment)
        return
    print_deployment(deployment)
