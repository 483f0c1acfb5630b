"""CLI entrypoint for graph-canvas."""

from __future__ import annotations

from pathlib import Path

import typer

from ui.cli import commands

app = typer.Typer(help="In-memory graph editing backend")
generate_app = typer.Typer(help="Graph generators")
config_app = typer.Typer(help="Configuration commands")

ConfigOption = typer.Option(None, "--config", help="Extra YAML file merged over the defaults")


@app.command("shell")
def shell_cmd(
    config: Path | None = ConfigOption,
    seed: int | None = typer.Option(None, help="Seed for random placement"),
    watch: bool = typer.Option(False, "--watch", help="Print the graph after every change"),
) -> None:
    """Interactive graph session."""
    commands.shell(config_path=config, seed=seed, watch=watch)


@app.command("commands")
def commands_cmd(config: Path | None = ConfigOption) -> None:
    """List available graph commands."""
    commands.commands_list(config_path=config)


@generate_app.command("complete")
def generate_complete_cmd(
    num_nodes: int = typer.Argument(..., min=0, help="Number of nodes"),
    align: bool = typer.Option(False, "--align", help="Lay nodes out on a circle"),
    config: Path | None = ConfigOption,
) -> None:
    """Generate a complete graph and print it."""
    commands.generate_complete(num_nodes=num_nodes, align=align, config_path=config)


@generate_app.command("random")
def generate_random_cmd(
    num_nodes: int = typer.Argument(..., min=0, help="Number of nodes"),
    align: bool = typer.Option(False, "--align", help="Lay nodes out on a circle"),
    seed: int | None = typer.Option(None, help="Seed for reproducible graphs"),
    config: Path | None = ConfigOption,
) -> None:
    """Generate a random graph and print it."""
    commands.generate_random(num_nodes=num_nodes, align=align, seed=seed, config_path=config)


@config_app.command("show")
def config_show_cmd(config: Path | None = ConfigOption) -> None:
    """Show effective configuration."""
    commands.config_show(config_path=config)


app.add_typer(generate_app, name="generate")
app.add_typer(config_app, name="config")


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
