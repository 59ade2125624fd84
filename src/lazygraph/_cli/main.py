import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

import lazygraph as lg
from lazygraph._traverse import build_tree
from lazygraph._utils import round_to

from .config import ConfigError, get_config
from .render import render_tree

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Lazygraph CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def parse_assignments(assignments: list[str]) -> dict[str, float]:
    """Parse NAME=VALUE strings into a mapping.

    Raises:
        typer.BadParameter: If an assignment is malformed.

    """
    values: dict[str, float] = {}
    for assignment in assignments:
        name, sep, raw = assignment.partition("=")
        name = name.strip()
        if not sep or not name:
            msg = f"Expected NAME=VALUE, got '{assignment}'"
            raise typer.BadParameter(msg, param_hint="--set")
        try:
            values[name] = float(raw)
        except ValueError:
            msg = f"Value for '{name}' is not a number: '{raw}'"
            raise typer.BadParameter(msg, param_hint="--set") from None
    return values


def build_demo_graph() -> tuple[dict[str, lg.InputHandle], lg.Handle]:
    """Build x1 + x2 * sin(x2 + x3 ** 3)."""
    inputs = {name: lg.create_input(name) for name in ("x1", "x2", "x3")}
    x1, x2, x3 = inputs["x1"], inputs["x2"], inputs["x3"]
    graph = lg.add(x1, lg.mul(x2, lg.sin(lg.add(x2, lg.pow(x3, 3.0)))))
    return inputs, graph


@app.command()
def demo(
    *,
    assignments: Annotated[
        list[str] | None,
        typer.Option("--set", "-s", help="Input value as NAME=VALUE (repeatable)"),
    ] = None,
    tree: Annotated[
        bool,
        typer.Option("--tree/--no-tree", help="Show the cache state of every node"),
    ] = False,
) -> None:
    """Evaluate x1 + x2 * sin(x2 + x3 ** 3) for the given inputs."""
    try:
        config = get_config()
    except ConfigError as e:
        err_console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=2) from e

    values = dict(config.inputs)
    values.update(parse_assignments(assignments or []))

    inputs, graph = build_demo_graph()
    unknown = sorted(set(values) - set(inputs))
    if unknown:
        err_console.print(f"[red]✗ Unknown input(s): {', '.join(unknown)}[/red]")
        raise typer.Exit(code=2)

    for name, value in values.items():
        logger.debug("Setting %s = %s", name, value)
        inputs[name].set(value)

    if tree:
        err_console.print("[cyan]Before compute:[/cyan]")
        render_tree(build_tree(graph), err_console, precision=config.precision)

    result = graph.compute()

    if tree:
        err_console.print("[cyan]After compute:[/cyan]")
        render_tree(build_tree(graph), err_console, precision=config.precision)

    out_console.print(round_to(result, config.precision))


@app.command(name="config")
def show_config() -> None:
    """Show the resolved configuration."""
    try:
        config = get_config()
    except ConfigError as e:
        err_console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=2) from e

    table = Table(show_header=True, header_style="bold cyan", box=None)
    table.add_column("Key", style="dim")
    table.add_column("Value")
    table.add_row("project_root", str(config.project_root) if config.project_root else "-")
    table.add_row("precision", str(config.precision))
    for name, value in sorted(config.inputs.items()):
        table.add_row(f"inputs.{name}", str(value))
    out_console.print(table)


if __name__ == "__main__":
    app()
