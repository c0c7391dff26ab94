"""Tokenizer debugging command."""

from typing import Annotated

import typer

from marquee.cli.console import console, dim


def register(app: typer.Typer) -> None:
    """Register the tokenize command."""

    @app.command()
    def tokenize(
        text: Annotated[str, typer.Argument(help="Chat line to split")],
    ) -> None:
        """Show how a chat line is split into command tokens."""
        from marquee.tokenizer import tokenize as split_line

        tokens = split_line(text)
        if not tokens:
            dim("(no tokens)")
            return
        for i, token in enumerate(tokens):
            console.print(f"{i}: {token!r}", markup=False)
