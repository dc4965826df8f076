"""Helpers shared by the CLI commands."""

import asyncio
from collections.abc import Awaitable, Callable
import json as json_lib
from typing import TypeVar

from pydantic import BaseModel
from rich.console import Console
import typer

from motia_studio.errors import StudioError
from motia_studio.studio import Studio, create_studio

T = TypeVar("T")

console = Console()


def run(command: Callable[[Studio], Awaitable[T]]) -> T:
    """Run ``command`` against a fresh studio and close it afterwards.

    Studio errors are printed and turned into exit code 1.
    """

    async def _main() -> T:
        async with create_studio() as studio:
            return await command(studio)

    try:
        return asyncio.run(_main())
    except StudioError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1) from e


def echo_json(data: BaseModel | list[BaseModel] | dict) -> None:
    """Print records as camelCase JSON."""
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json", by_alias=True, exclude_none=True)
    elif isinstance(data, list):
        data = [d.model_dump(mode="json", by_alias=True, exclude_none=True) for d in data]
    typer.echo(json_lib.dumps(data, indent=2))


def fail(message: str) -> None:
    console.print(f"[bold red]Error:[/bold red] {message}")
    raise typer.Exit(code=1)
