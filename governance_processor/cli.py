"""Command line entry point for the governance event processor.

Commands:
    poll        Process new events on a cron schedule
    subscribe   Process new events as notifications arrive
    usage       List the configuration environment variables
"""

import asyncio
import signal

import typer
from dotenv import load_dotenv
from rich.console import Console

from governance_processor import __version__
from governance_processor.bootstrap.database import close_database_engine
from governance_processor.bootstrap.processor import (
    ProcessorComponents,
    build_processor,
    build_scheduler,
)
from governance_processor.config.processor_config import ProcessorConfig, usage
from governance_processor.infrastructure.adapters.messaging import (
    PostgresNotificationSubscriber,
)
from governance_processor.infrastructure.observability import configure_structlog
from governance_processor.infrastructure.stubs import NotificationSubscriberStub
from governance_processor.workers.notification_worker import run_notification_worker

app = typer.Typer(
    name="governance-processor",
    help="Fold token-curated registry contract events into governance aggregates.",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"governance-processor version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Governance event processor."""
    load_dotenv()


def _invalid_configuration(error: ValueError) -> typer.Exit:
    console.print(f"[red]Invalid configuration:[/red] {error}")
    console.print(usage(), markup=False)
    return typer.Exit(code=2)


def _load_components() -> ProcessorComponents:
    try:
        config = ProcessorConfig.from_environment()
    except ValueError as e:
        raise _invalid_configuration(e) from None
    configure_structlog(config.environment)
    try:
        return build_processor(config)
    except ValueError as e:
        raise _invalid_configuration(e) from None


async def _run_polling(components: ProcessorComponents) -> None:
    scheduler = build_scheduler(components)
    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop.set)

    await scheduler.start()
    try:
        await stop.wait()
    finally:
        await scheduler.stop()
        await close_database_engine()


async def _run_once(components: ProcessorComponents) -> None:
    try:
        result = await components.cycle.run()
    finally:
        await close_database_engine()
    console.print(
        f"fetched={result.fetched} handled={result.dispatch.handled} "
        f"skipped={result.dispatch.skipped} "
        f"dead_lettered={result.dispatch.dead_lettered} "
        f"watermark_advanced={result.watermark_advanced}"
    )


async def _run_subscriber(components: ProcessorComponents) -> None:
    config = components.config
    if config.uses_postgresql:
        subscriber = PostgresNotificationSubscriber(
            config.database_url, config.notify_channel, config.queue_maxsize
        )
    else:
        subscriber = NotificationSubscriberStub(config.queue_maxsize)
    try:
        await run_notification_worker(
            subscriber, components.cycle, components.error_reporter
        )
    finally:
        await close_database_engine()


@app.command()
def poll(
    once: bool = typer.Option(
        False, "--once", help="Run a single cycle and exit."
    ),
) -> None:
    """Process new events on the PROCESSOR_CRON_CONFIG schedule."""
    components = _load_components()
    if once:
        asyncio.run(_run_once(components))
    else:
        asyncio.run(_run_polling(components))


@app.command()
def subscribe() -> None:
    """Process new events whenever a notification arrives."""
    components = _load_components()
    asyncio.run(_run_subscriber(components))


@app.command(name="usage")
def show_usage() -> None:
    """List configuration environment variables."""
    console.print(usage(), markup=False)


if __name__ == "__main__":
    app()
