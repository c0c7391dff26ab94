"""Bot server command."""

from pathlib import Path
from typing import Annotated

import typer

from marquee.cli.console import console, error


def register(app: typer.Typer) -> None:
    """Register the serve command."""

    @app.command()
    def serve(
        config: Annotated[
            Path | None,
            typer.Option(
                "--config",
                "-c",
                help="Path to configuration file",
            ),
        ] = None,
        log_level: Annotated[
            str | None,
            typer.Option(
                "--log-level",
                "-l",
                help="Log level (default: MARQUEE_LOG_LEVEL or INFO)",
            ),
        ] = None,
    ) -> None:
        """Connect to IRC and serve showtime commands."""
        import asyncio

        from marquee.config import load_config
        from marquee.logging import configure_logging

        configure_logging(level=log_level, use_rich=True)

        try:
            marquee_config = load_config(config)
        except Exception as e:
            error(f"Error loading config: {e}")
            raise typer.Exit(1) from None

        try:
            asyncio.run(run_server(marquee_config))
        except KeyboardInterrupt:
            console.print("\n[bold yellow]Server stopped[/bold yellow]")


async def run_server(config) -> None:
    """Run the bot and the health-check server until either exits."""
    import asyncio
    import logging
    import signal

    import uvicorn

    from marquee.runtime import create_bot, create_store
    from marquee.server import create_app

    logger = logging.getLogger(__name__)

    console.print("[bold]Opening showtime store...[/bold]")
    store = await create_store(config)
    bot = create_bot(config, store)

    server: uvicorn.Server | None = None
    tasks: list[asyncio.Task] = [asyncio.create_task(bot.run())]
    if config.server.enabled:
        uvicorn_config = uvicorn.Config(
            create_app(),
            host=config.server.host,
            port=config.server.port,
            log_level="info",
            log_config=None,  # Use our logging config, not uvicorn's
        )
        server = uvicorn.Server(uvicorn_config)
        tasks.append(asyncio.create_task(server.serve()))
        console.print(
            f"[dim]Health check on http://{config.server.host}:{config.server.port}/health[/dim]"
        )

    loop = asyncio.get_running_loop()

    def handle_signal() -> None:
        if server:
            server.should_exit = True
        for task in tasks:
            task.cancel()

    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, handle_signal)

    console.print(
        f"[bold green]Connecting to {config.irc.server} as {config.irc.nick} "
        f"({config.irc.channel})[/bold green]"
    )
    try:
        # Either task finishing ends the process
        done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        for task in done:
            if not task.cancelled() and task.exception():
                logger.error("task_failed", exc_info=task.exception())
    finally:
        if server:
            server.should_exit = True
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        try:
            await bot.stop()
        except Exception as e:
            logger.warning(f"Error stopping bot: {e}")
        await store.close()
