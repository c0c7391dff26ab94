"""Configuration management commands."""

from pathlib import Path
from typing import Annotated

import click
import typer

from marquee.cli.console import console, create_table, error, success


def register(app: typer.Typer) -> None:
    """Register the config command."""

    @app.command()
    def config(
        action: Annotated[
            str | None,
            typer.Argument(help="Action: show, validate"),
        ] = None,
        path: Annotated[
            Path | None,
            typer.Option(
                "--path",
                "-p",
                help="Path to config file (default: $MARQUEE_HOME/config.toml)",
            ),
        ] = None,
    ) -> None:
        """Inspect configuration."""
        if action is None:
            ctx = click.get_current_context()
            click.echo(ctx.get_help())
            raise typer.Exit(0)

        from pydantic import ValidationError
        from rich.syntax import Syntax

        from marquee.config import load_config
        from marquee.config.paths import get_config_path

        expanded_path = path.expanduser() if path else get_config_path()

        if action == "show":
            if not expanded_path.exists():
                error(f"Config file not found: {expanded_path}")
                raise typer.Exit(1)

            content = expanded_path.read_text()
            syntax = Syntax(content, "toml", theme="monokai", line_numbers=True)
            console.print(f"[bold]Config file: {expanded_path}[/bold]\n")
            console.print(syntax)

        elif action == "validate":
            try:
                config_obj = load_config(expanded_path)
            except FileNotFoundError as e:
                error(f"File not found: {e}")
                raise typer.Exit(1) from None
            except ValidationError as e:
                error("Configuration validation failed:")
                console.print()
                for err in e.errors():
                    loc = ".".join(str(x) for x in err["loc"])
                    console.print(f"  [yellow]{loc}[/yellow]: {err['msg']}")
                raise typer.Exit(1) from None
            except Exception as e:
                error(f"Error loading config: {e}")
                raise typer.Exit(1) from None

            table = create_table(
                "Configuration Summary", [("Setting", "cyan"), ("Value", "green")]
            )
            irc = config_obj.irc
            showtimes = config_obj.showtimes
            table.add_row("Server", irc.server)
            table.add_row("Nick", irc.nick)
            table.add_row("Channel", irc.channel)
            table.add_row(
                "NickServ",
                "configured" if irc.nickserv_password else "[dim]not configured[/dim]",
            )
            table.add_row("Authorized nicks", ", ".join(irc.authorized_nicks) or "-")
            table.add_row("Backend", showtimes.backend)
            if showtimes.backend == "sqlite":
                table.add_row("Database", str(showtimes.database_path))
            table.add_row(
                "Recency policy",
                f"{showtimes.recency_policy.value} "
                f"({showtimes.current_window_hours:g}h window)",
            )
            table.add_row(
                "Health server", f"{config_obj.server.host}:{config_obj.server.port}"
            )

            success("Configuration is valid!")
            console.print()
            console.print(table)

        else:
            error(f"Unknown action: {action}")
            console.print("Valid actions: show, validate")
            raise typer.Exit(1)
