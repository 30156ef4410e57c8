"""Main entry point for todoboard."""

import asyncio

import httpx
import typer

from todoboard import __version__
from todoboard.api.client import get_client
from todoboard.commands import config, tasks
from todoboard.utils.ui.console import get_console

app = typer.Typer(
    name="todoboard",
    help="Track to-do items, due dates and priorities on a remote task service",
    no_args_is_help=True,
)

console = get_console()

app.add_typer(config.app, name="config", help="Configuration management")

app.command("board")(tasks.board)
app.command("list")(tasks.list_tasks)
app.command("add")(tasks.add_task)
app.command("edit")(tasks.edit_task)
app.command("delete")(tasks.delete_task)


@app.command()
def version(
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Show version information and task service health."""
    console.print(f"[bold]todoboard[/bold] version [cyan]{__version__}[/cyan]")

    async def check_health() -> None:
        client = get_client(profile)
        try:
            response = await client.request("GET", "/", check_status=False)
            if response.is_success:
                console.print(f"[green]✓ Task service is reachable[/green] ({client.base_url})")
            else:
                console.print(
                    f"[yellow]⚠ Task service returned status {response.status_code}[/yellow]"
                )
        except httpx.HTTPError as e:
            console.print(f"[red]✗ Task service health check failed: {e}[/red]")
        finally:
            await client.close()

    asyncio.run(check_health())


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
