"""Portfolio CLI - view and edit an owner's portfolio projects.

Usage:
    portfolio show --owner alice
    portfolio add --owner alice --title Site --description "My site" --technologies "React, TypeScript"
    portfolio delete --owner alice 2
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.prompt import Confirm

from portfolio.app.config import LOG_LEVELS, PortfolioConfig, set_config
from portfolio.core.models.profile import OwnerProfile
from portfolio.core.models.project import PortfolioProject
from portfolio.domain.manager import ConfirmPrompt, PortfolioManager
from portfolio.infrastructure.repository.mock_repository import MockProjectRepository
from portfolio.presentation.renderer import print_portfolio
from portfolio.utils.logging import setup_logging

app = typer.Typer(
    name="portfolio",
    help="Portfolio project manager",
    add_completion=False,
)

console = Console()
logger = logging.getLogger(__name__)

OwnerOption = Annotated[Optional[str], typer.Option("--owner", "-o", help="Owner profile id")]
ConfigOption = Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to configuration file")]
DelayOption = Annotated[Optional[float], typer.Option("--delay", help="Simulated load delay in seconds")]
LogLevelOption = Annotated[Optional[str], typer.Option("--log-level", "-l", help="Logging level")]


def setup_environment(
    config_path: Path | None,
    delay: float | None,
    log_level: str | None,
) -> PortfolioConfig:
    """Load configuration, apply command line overrides and set up logging."""
    config = PortfolioConfig.load(config_path)

    if delay is not None:
        if delay < 0:
            raise typer.BadParameter("delay must not be negative", param_hint="--delay")
        config.loader.mock_delay_seconds = delay
    if log_level:
        level = log_level.upper()
        if level not in LOG_LEVELS:
            raise typer.BadParameter(f"choose from {', '.join(LOG_LEVELS)}", param_hint="--log-level")
        config.log_level = level

    setup_logging(level=config.log_level, log_dir=config.log_dir, file_output=False)
    logger.debug(f"Configuration: {config.to_dict()}")
    set_config(config)
    return config


def confirm_delete(project: PortfolioProject) -> bool:
    return Confirm.ask(f"Are you sure you want to delete '{project.title}'?", console=console)


def build_manager(config: PortfolioConfig, confirm: ConfirmPrompt = confirm_delete) -> PortfolioManager:
    repository = MockProjectRepository(delay_seconds=config.loader.mock_delay_seconds)
    return PortfolioManager(
        repository,
        confirm,
        preview_limit=config.views.technology_preview_limit,
    )


def _profile(owner: str | None) -> OwnerProfile | None:
    return OwnerProfile(id=owner) if owner else None


async def _load(manager: PortfolioManager, owner: str | None) -> None:
    with console.status("Loading projects..."):
        await manager.mount(_profile(owner))


@app.command("show")
def show(
    owner: OwnerOption = None,
    config: ConfigOption = None,
    delay: DelayOption = None,
    log_level: LogLevelOption = None,
) -> None:
    """Show the featured and all-projects views for an owner."""
    settings = setup_environment(config, delay, log_level)
    manager = build_manager(settings)
    asyncio.run(_load(manager, owner))
    print_portfolio(manager, console)


@app.command("add")
def add(
    title: Annotated[str, typer.Option("--title", "-t", help="Project title")],
    description: Annotated[str, typer.Option("--description", "-d", help="Project description")],
    technologies: Annotated[str, typer.Option("--technologies", help="Comma-separated technologies")],
    owner: OwnerOption = None,
    repository_url: Annotated[str, typer.Option("--repo-url", help="Repository URL")] = "",
    demo_url: Annotated[str, typer.Option("--demo-url", help="Live demo URL")] = "",
    thumbnail_url: Annotated[str, typer.Option("--thumbnail-url", help="Thumbnail image URL")] = "",
    images: Annotated[str, typer.Option("--images", help="Comma-separated image URLs")] = "",
    featured: Annotated[bool, typer.Option("--featured/--not-featured", help="Feature the project")] = False,
    config: ConfigOption = None,
    delay: DelayOption = None,
    log_level: LogLevelOption = None,
) -> None:
    """Add a project through the form and show the result."""
    settings = setup_environment(config, delay, log_level)
    manager = build_manager(settings)
    asyncio.run(_load(manager, owner))

    if not manager.open_create():
        print_portfolio(manager, console)
        raise typer.Exit(1)

    for name, value in (
        ("title", title),
        ("description", description),
        ("technologies", technologies),
        ("repository_url", repository_url),
        ("demo_url", demo_url),
        ("thumbnail_url", thumbnail_url),
        ("images", images),
        ("featured", featured),
    ):
        manager.change_field(name, value)

    project = manager.submit_form()
    print_portfolio(manager, console)
    if project is None:
        raise typer.Exit(1)
    console.print(f"[green]Added project[/green] {project.id}")


@app.command("delete")
def delete(
    project_id: Annotated[str, typer.Argument(help="Id of the project to delete")],
    owner: OwnerOption = None,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip the confirmation prompt")] = False,
    config: ConfigOption = None,
    delay: DelayOption = None,
    log_level: LogLevelOption = None,
) -> None:
    """Delete a project after confirmation and show the result."""
    settings = setup_environment(config, delay, log_level)
    manager = build_manager(settings, (lambda project: True) if yes else confirm_delete)
    asyncio.run(_load(manager, owner))

    if project_id not in manager.store:
        print_portfolio(manager, console)
        console.print(f"[yellow]No project with id {project_id}[/yellow]")
        raise typer.Exit(1)

    removed = manager.delete_project(project_id)
    print_portfolio(manager, console)
    if removed:
        console.print(f"[green]Deleted project[/green] {project_id}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
