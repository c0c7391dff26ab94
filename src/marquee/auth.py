"""Sender authorization for showtime management."""

from collections.abc import Collection


def is_authorized(nick: str, host: str, authorized_nicks: Collection[str]) -> bool:
    """Check whether an IRC sender may manage showtimes.

    The nick must be listed and the host must be the services cloak for
    that same nick (``user/<nick>``), which only an identified user gets.
    """
    return nick in authorized_nicks and host == f"user/{nick}"
