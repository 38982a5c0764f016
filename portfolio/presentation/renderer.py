"""Console rendering of a portfolio manager with rich."""

from __future__ import annotations

from rich.console import Console, Group, RenderableType
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from portfolio.core.models.project import PortfolioProject
from portfolio.domain.form import FormController
from portfolio.domain.manager import ManagerStatus, PortfolioManager
from portfolio.domain.views import ProjectCard

HEADING = "Portfolio Projects"
PROFILE_PROMPT = "Please complete your profile to manage your portfolio projects."
EMPTY_MESSAGE = "You haven't added any projects yet."


def _links(project: PortfolioProject) -> str:
    links = []
    if project.repository_url:
        links.append(f"[link={project.repository_url}]Code[/link]")
    if project.demo_url:
        links.append(f"[link={project.demo_url}]Demo[/link]")
    return " | ".join(links)


def featured_table(projects: list[PortfolioProject]) -> Table:
    table = Table(title="Featured Projects", title_justify="left", expand=True)
    table.add_column("Title", style="bold")
    table.add_column("Technologies")
    table.add_column("Links")
    table.add_column("Completed")
    for project in projects:
        table.add_row(
            escape(project.title),
            escape(", ".join(project.technologies)),
            _links(project),
            f"Completed on {project.completed_at:%Y-%m-%d}",
        )
    return table


def all_projects_table(cards: list[ProjectCard]) -> Table:
    table = Table(title="All Projects", title_justify="left", expand=True)
    table.add_column("ID", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Description")
    table.add_column("Technologies")
    for card in cards:
        title = Text(card.project.title)
        if card.project.featured:
            title.append(" ★ Featured", style="yellow")
        technologies = ", ".join(card.visible_technologies)
        if card.overflow_label:
            technologies = f"{technologies} {card.overflow_label}"
        table.add_row(
            escape(card.project.id), title, escape(card.project.description), escape(technologies)
        )
    return table


def form_panel(form: FormController) -> Panel:
    draft = form.draft
    lines = [
        f"[bold]Project Title*:[/bold] {escape(draft.title)}",
        f"[bold]Description*:[/bold] {escape(draft.description)}",
        f"[bold]Technologies*:[/bold] {escape(form.technologies_text)}",
        f"[bold]Repository URL:[/bold] {escape(draft.repository_url)}",
        f"[bold]Demo URL:[/bold] {escape(draft.demo_url)}",
        f"[bold]Thumbnail URL:[/bold] {escape(draft.thumbnail_url)}",
        f"[bold]Images:[/bold] {escape(form.images_text)}",
        f"[bold]Featured:[/bold] {'yes' if draft.featured else 'no'}",
    ]
    return Panel("\n".join(lines), title=form.title_text, subtitle=form.submit_label)


def render_portfolio(manager: PortfolioManager) -> RenderableType:
    """Build the renderable for the manager's current state."""
    status = manager.status
    if status is ManagerStatus.NO_PROFILE:
        return Panel(PROFILE_PROMPT, title=HEADING, border_style="yellow")
    if status is ManagerStatus.LOADING:
        return Panel("Loading projects...", title=HEADING, border_style="blue")

    parts: list[RenderableType] = []
    if manager.form_error is not None:
        parts.append(Text(str(manager.form_error), style="red"))
    if manager.form.is_open:
        parts.append(form_panel(manager.form))

    views = manager.views
    if not views.cards:
        parts.append(Text(EMPTY_MESSAGE, style="dim"))
    else:
        if views.has_featured:
            parts.append(featured_table(views.featured))
        parts.append(all_projects_table(views.cards))

    return Panel(Group(*parts), title=HEADING, border_style="cyan")


def print_portfolio(manager: PortfolioManager, console: Console | None = None) -> None:
    (console or Console()).print(render_portfolio(manager))
