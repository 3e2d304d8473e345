"""
Leitstand UI CLI Main Entry Point

Inspect module descriptors, the main menu and loaded contributions, and run
the API server.
"""

import json
import sys
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from leitstand_ui import __version__
from leitstand_ui.config import get_settings
from leitstand_ui.exceptions import LeitstandError
from leitstand_ui.logging import LoggingSettings, setup_logging
from leitstand_ui.model import Contributions, ModuleDescriptorLoader
from leitstand_ui.services import MainMenuService, ModuleDescriptorService

console = Console()


class _Context:
    """Lazily built services shared by all commands of one invocation."""

    def __init__(self):
        self.settings = get_settings()
        self.loader = ModuleDescriptorLoader(self.settings.modules_dir)
        self.contributions = Contributions(self.settings.contributions_dir)
        self.modules = ModuleDescriptorService(self.loader, self.contributions)
        self.main_menu = MainMenuService(self.loader, self.contributions)


pass_context = click.make_pass_decorator(_Context, ensure=True)


@click.group()
@click.version_option(version=__version__, prog_name="leitstand-ui")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """
    Leitstand UI - navigation metadata backend

    Merges UI module descriptors with contributions and serves them over REST.
    """
    settings = get_settings()
    logging_settings = LoggingSettings.from_settings(settings)
    if verbose:
        logging_settings.level = "DEBUG"
    setup_logging(logging_settings)


@cli.command()
@click.option("--host", default=None, help="Bind address (default: LEITSTAND_HOST)")
@click.option("--port", type=int, default=None, help="Port (default: LEITSTAND_PORT)")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Run the API server."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "leitstand_ui.api.app:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_config=None,
    )


@cli.group()
def modules():
    """Inspect UI module descriptors."""


@modules.command(name="list")
@pass_context
def list_modules(ctx: _Context):
    """List all modules, including modules added by contributions."""
    try:
        names = ctx.modules.list_modules()
    except LeitstandError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    if not names:
        console.print("No modules found.")
        return
    for name in names:
        console.print(name)


@modules.command(name="show")
@click.argument("module")
@pass_context
def show_module(ctx: _Context, module: str):
    """Print the merged descriptor of MODULE as JSON."""
    try:
        descriptor = ctx.modules.get_module_descriptor(module)
    except LeitstandError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    if descriptor is None:
        console.print(f"[red]Unknown UI module: {module}[/red]")
        sys.exit(1)
    click.echo(json.dumps(descriptor.to_json(), indent=2))


@cli.group()
def menu():
    """Inspect the main menu."""


@menu.command(name="show")
@pass_context
def show_menu(ctx: _Context):
    """Print the merged main menu."""
    try:
        main_menu = ctx.main_menu.get_main_menu()
    except LeitstandError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    welcome = main_menu.find_welcome_page_module()

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Module", style="cyan")
    table.add_column("Label", style="green")
    table.add_column("Path", style="white")
    table.add_column("Welcome", style="blue")

    for item in main_menu.items:
        table.add_row(item.module, item.label, item.path, "yes" if item is welcome else "")

    console.print(table)


@cli.group()
def contributions():
    """Inspect loaded contributions."""


@contributions.command(name="list")
@pass_context
def list_contributions(ctx: _Context):
    """List all contributions found in the contributions directory."""
    loaded = ctx.contributions.load()
    if not loaded:
        console.print("No contributions found.")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Name", style="cyan")
    table.add_column("Provider", style="green")
    table.add_column("Base URI", style="white")
    table.add_column("Extensions", style="yellow")

    for contribution in loaded:
        table.add_row(
            contribution.key,
            contribution.provider or "",
            contribution.base_uri or "",
            str(len(contribution.extensions)),
        )

    console.print(table)


def main():
    cli()


if __name__ == "__main__":
    main()
