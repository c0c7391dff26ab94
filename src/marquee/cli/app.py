"""Main CLI application."""

import typer

from marquee.cli.commands import config, serve, tokenize

app = typer.Typer(
    name="marquee",
    help="Marquee - IRC showtime bot",
    no_args_is_help=True,
)

serve.register(app)
config.register(app)
tokenize.register(app)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
