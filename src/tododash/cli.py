"""CLI interface for TodoDash."""

import asyncio
from contextlib import asynccontextmanager
from datetime import date
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from tododash.config import configure_logging, get_settings
from tododash.context import AppContext
from tododash.database import Database
from tododash.models.todo import Priority
from tododash.schemas.category import CATEGORY_COLORS
from tododash.schemas.tag import TAG_COLORS
from tododash.schemas.todo import TodoCreate, TodoFilters
from tododash.services import actions
from tododash.services.todo_service import CategoryService, TagService, TodoService

app = typer.Typer(
    name="todo",
    help="TodoDash - todos with priorities, categories and tags.",
    no_args_is_help=True,
)
console = Console()

PRIORITY_STYLES = {
    Priority.HIGH: "red",
    Priority.MEDIUM: "yellow",
    Priority.LOW: "green",
}

UserOption = typer.Option(
    "local",
    "--user",
    "-u",
    envvar="TODODASH_CLI_USER",
    help="Owner whose todos are used",
)


def run_async(coro):
    """Run async function in sync context."""
    return asyncio.run(coro)


@asynccontextmanager
async def open_database():
    """Database for one CLI invocation, with tables created."""
    settings = get_settings()
    configure_logging(settings)
    database = Database(settings.database_url, echo=settings.debug)
    await database.create_all()
    try:
        yield database
    finally:
        await database.dispose()


async def find_todo(service: TodoService, todo_id: str):
    """Resolve a full or partial (prefix) todo ID."""
    todo = await service.get_by_id(todo_id)
    if todo:
        return todo
    for candidate in await service.get_all():
        if candidate.id.startswith(todo_id):
            return candidate
    return None


@app.command()
def add(
    content: str = typer.Argument(..., help="What needs doing"),
    priority: Priority = typer.Option(Priority.MEDIUM, "--priority", "-p", help="Priority"),
    due: Optional[str] = typer.Option(None, "--due", help="Due date (YYYY-MM-DD)"),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Category name"),
    tags: Optional[str] = typer.Option(None, "--tags", "-t", help="Comma-separated tags"),
    user: str = UserOption,
):
    """Add a new todo."""

    async def _add():
        due_date = None
        if due:
            try:
                due_date = date.fromisoformat(due)
            except ValueError:
                console.print(f"[red]Invalid date format: {due}[/red]")
                console.print("Use format: YYYY-MM-DD")
                raise typer.Exit(1)

        async with open_database() as database:
            async with database.session() as session:
                # Resolve category, creating it with the next palette color
                category_id = None
                if category:
                    cat_service = CategoryService(session, user)
                    categories = await cat_service.get_all()
                    for c in categories:
                        if c.name.lower() == category.lower():
                            category_id = c.id
                            break
                    if not category_id:
                        color = CATEGORY_COLORS[len(categories) % len(CATEGORY_COLORS)]
                        new_cat = await cat_service.create(name=category, color=color)
                        category_id = new_cat.id

                # Resolve tags
                tag_ids = []
                if tags:
                    tag_service = TagService(session, user)
                    existing_tags = await tag_service.get_all()
                    tag_map = {t.name.lower(): t.id for t in existing_tags}

                    for tag_name in tags.split(","):
                        tag_name = tag_name.strip()
                        if not tag_name:
                            continue
                        if tag_name.lower() in tag_map:
                            tag_ids.append(tag_map[tag_name.lower()])
                        else:
                            color = TAG_COLORS[len(tag_map) % len(TAG_COLORS)]
                            new_tag = await tag_service.create(name=tag_name, color=color)
                            tag_map[tag_name.lower()] = new_tag.id
                            tag_ids.append(new_tag.id)

            result = await actions.create_todo(
                database,
                user,
                TodoCreate(
                    content=content,
                    priority=priority,
                    due_date=due_date,
                    category_id=category_id,
                    tag_ids=tag_ids,
                ),
            )

        if result.error:
            console.print(f"[red]{result.error}[/red]")
            raise typer.Exit(1)

        console.print(Panel(
            f"[green]Created:[/green] {result.data.content}\n"
            f"[dim]ID: {result.data.id}[/dim]",
            title="Todo Added",
        ))

    run_async(_add())


@app.command("list")
def list_todos(
    all_todos: bool = typer.Option(False, "--all", "-a", help="Show completed todos too"),
    priority: Optional[Priority] = typer.Option(None, "--priority", "-p", help="Filter by priority"),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Filter by category"),
    tag: Optional[list[str]] = typer.Option(None, "--tag", "-t", help="Filter by tag (repeatable)"),
    user: str = UserOption,
):
    """List todos."""

    async def _list():
        async with open_database() as database:
            async with database.session() as session:
                # Names to IDs; unknown names match nothing
                category_id = None
                if category:
                    category_id = "missing"
                    for c in await CategoryService(session, user).get_all():
                        if c.name.lower() == category.lower():
                            category_id = c.id
                            break

                tag_ids = None
                if tag:
                    wanted = {name.lower() for name in tag}
                    tag_ids = [
                        t.id for t in await TagService(session, user).get_all()
                        if t.name.lower() in wanted
                    ] or ["missing"]

            result = await actions.list_todos(
                database,
                user,
                TodoFilters(
                    completed=None if all_todos else False,
                    priority=priority,
                    category_id=category_id,
                    tag_ids=tag_ids,
                ),
            )

        if result.error:
            console.print(f"[red]{result.error}[/red]")
            raise typer.Exit(1)

        todos = result.data
        if not todos:
            console.print("[dim]No todos found.[/dim]")
            return

        table = Table(title=f"Todos ({len(todos)})")
        table.add_column("ID", style="dim", width=8)
        table.add_column("Priority", justify="center")
        table.add_column("Todo", style="bold")
        table.add_column("Due", width=10)
        table.add_column("Category", style="cyan")
        table.add_column("Tags", style="magenta")

        for todo in todos:
            color = PRIORITY_STYLES[todo.priority]
            text = todo.content
            if todo.completed:
                text = f"[strike dim]{text}[/strike dim]"

            table.add_row(
                todo.id[:8],
                f"[{color}]{todo.priority.value}[/{color}]",
                text,
                todo.due_date.isoformat() if todo.due_date else "",
                todo.category.name if todo.category else "",
                ", ".join(t.name for t in todo.tags),
            )

        console.print(table)

    run_async(_list())


@app.command()
def done(
    todo_id: str = typer.Argument(..., help="Todo ID (or partial ID)"),
    user: str = UserOption,
):
    """Toggle a todo between done and not done."""

    async def _done():
        async with open_database() as database:
            async with database.session() as session:
                found = await find_todo(TodoService(session, user), todo_id)

            if not found:
                console.print(f"[red]Todo not found: {todo_id}[/red]")
                raise typer.Exit(1)

            result = await actions.toggle_todo(database, user, found.id)

        if result.error:
            console.print(f"[red]{result.error}[/red]")
            raise typer.Exit(1)

        if result.data.completed:
            console.print(f"[green]Completed:[/green] {result.data.content}")
        else:
            console.print(f"[yellow]Reopened:[/yellow] {result.data.content}")

    run_async(_done())


@app.command()
def delete(
    todo_id: str = typer.Argument(..., help="Todo ID (or partial ID)"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
    user: str = UserOption,
):
    """Delete a todo."""

    async def _delete():
        async with open_database() as database:
            async with database.session() as session:
                todo = await find_todo(TodoService(session, user), todo_id)

            if not todo:
                console.print(f"[red]Todo not found: {todo_id}[/red]")
                raise typer.Exit(1)

            if not force:
                confirm = typer.confirm(f"Delete '{todo.content}'?")
                if not confirm:
                    raise typer.Abort()

            result = await actions.delete_todo(database, user, todo.id)

        if result.error:
            console.print(f"[red]{result.error}[/red]")
            raise typer.Exit(1)

        console.print(f"[red]Deleted:[/red] {todo.content}")

    run_async(_delete())


@app.command()
def categories(user: str = UserOption):
    """List all categories."""

    async def _categories():
        async with open_database() as database:
            result = await actions.list_categories(database, user)

        if not result.data:
            console.print("[dim]No categories found.[/dim]")
            return

        table = Table(title="Categories")
        table.add_column("ID", style="dim", width=8)
        table.add_column("Name", style="bold")
        table.add_column("Color")

        for cat in result.data:
            table.add_row(cat.id[:8], cat.name, f"[{cat.color}]{cat.color}[/]")

        console.print(table)

    run_async(_categories())


@app.command()
def tags(user: str = UserOption):
    """List all tags."""

    async def _tags():
        async with open_database() as database:
            result = await actions.list_tags(database, user)

        if not result.data:
            console.print("[dim]No tags found.[/dim]")
            return

        table = Table(title="Tags")
        table.add_column("ID", style="dim", width=8)
        table.add_column("Name", style="bold")
        table.add_column("Color")

        for tag in result.data:
            table.add_row(tag.id[:8], tag.name, f"[{tag.color}]{tag.color}[/]")

        console.print(table)

    run_async(_tags())


@app.command()
def suggest(goal: str = typer.Argument(..., help="What you want to get done")):
    """Ask the completion provider for todo suggestions."""

    async def _suggest():
        settings = get_settings()
        configure_logging(settings)
        context = AppContext.from_settings(settings)
        try:
            result = await actions.suggest_todos(context.completion, settings.locale, goal)
        finally:
            await context.aclose()

        if result.error:
            console.print(f"[red]{result.error}[/red]")
            raise typer.Exit(1)

        for index, suggestion in enumerate(result.data, start=1):
            console.print(f"[bold]{index}.[/bold] {suggestion}")

    run_async(_suggest())


@app.command()
def server(
    host: str = typer.Option("0.0.0.0", "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to bind to"),
):
    """Start the API server."""
    import uvicorn

    configure_logging(get_settings())
    console.print(f"[green]Starting TodoDash server at http://{host}:{port}[/green]")
    console.print("[dim]Press Ctrl+C to stop[/dim]")

    uvicorn.run(
        "tododash.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=False,
    )


if __name__ == "__main__":
    app()
