"""CLI command modules."""

from marquee.cli.commands import config, serve, tokenize

__all__ = [
    "config",
    "serve",
    "tokenize",
]
