"""CLI commands for text2slack."""

import asyncio

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from text2slack import __logo__, __version__

app = typer.Typer(
    name="text2slack-mcp",
    help=f"{__logo__} text2slack - send text messages to Slack over MCP",
)

# stdout belongs to the MCP stdio transport.
console = Console(stderr=True)


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} text2slack-mcp v{__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True
    ),
):
    """text2slack - send text messages to Slack over MCP.

    Without a command, starts the MCP server on stdio.
    """
    if ctx.invoked_subcommand is None:
        serve(verbose=False)


def _load_validated_config():
    """Load config and check the webhook URL, exiting with diagnostics on failure."""
    from text2slack.config.loader import load_config
    from text2slack.delivery.errors import ConfigError
    from text2slack.delivery.validation import validate_webhook_url

    config = load_config()

    if not config.webhook_configured:
        console.print("[red]Error: SLACK_WEBHOOK_URL environment variable is not set[/red]")
        console.print("")
        console.print("Please set the webhook URL for your messaging service:")
        console.print("  - Slack: https://hooks.slack.com/services/...")
        console.print("  - Discord: https://discord.com/api/webhooks/...")
        console.print("  - Mattermost: https://your-server.com/hooks/...")
        raise typer.Exit(1)

    try:
        validate_webhook_url(config.webhook_url)
    except ConfigError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    return config


def _create_client(config):
    from text2slack.delivery.client import SlackClient
    from text2slack.delivery.errors import ConfigError

    try:
        return SlackClient(
            config.webhook_url,
            timeout_ms=config.timeout_ms,
            retry=config.retry.to_retry_config(),
            max_message_length=config.max_message_length,
        )
    except ConfigError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)


def _setup_logging(config, verbose: bool = False) -> None:
    from text2slack.logging import setup_logging

    if verbose:
        setup_logging(enabled=True, level="DEBUG")
    elif config.debug_enabled:
        setup_logging(enabled=True, level=config.log_level or None)
    else:
        setup_logging(level=config.log_level or None)


# ============================================================================
# MCP Server
# ============================================================================


@app.command()
def serve(
    verbose: bool = typer.Option(False, "--verbose", help="Log at DEBUG level"),
):
    """Start the MCP server on stdio."""
    from text2slack.logging import shutdown_logging
    from text2slack.server.mcp_server import (
        create_mcp_server,
        register_send_to_slack_tool,
        start_server,
    )

    config = _load_validated_config()
    _setup_logging(config, verbose)
    client = _create_client(config)

    server = create_mcp_server()
    register_send_to_slack_tool(server, client)

    try:
        exit_code = asyncio.run(start_server(server))
    except Exception as e:
        console.print(f"[red]Server error: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    finally:
        shutdown_logging()

    if exit_code:
        raise typer.Exit(exit_code)


# ============================================================================
# One-off delivery
# ============================================================================


@app.command()
def send(
    message: str = typer.Argument(..., help="Message text to send"),
    verbose: bool = typer.Option(False, "--verbose", help="Log at DEBUG level"),
):
    """Send a single message to the configured webhook."""
    from text2slack.delivery.errors import Text2SlackError
    from text2slack.logging import shutdown_logging

    config = _load_validated_config()
    _setup_logging(config, verbose)
    client = _create_client(config)

    try:
        result = asyncio.run(client.send_message(message))
    except Text2SlackError as e:
        console.print(f"[red]Error sending to Slack: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    finally:
        shutdown_logging()

    console.print(f"[green]✓[/green] Successfully posted to Slack: {escape(result.message)}")


@app.command()
def check():
    """Validate configuration without sending anything."""
    config = _load_validated_config()
    client = _create_client(config)

    table = Table(title="text2slack configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    retry = client.retry_config
    table.add_row("Webhook", _redact_url(config.webhook_url))
    table.add_row("Timeout", f"{client.timeout_ms}ms")
    table.add_row("Max message length", str(client.max_message_length))
    if retry is False:
        table.add_row("Retries", "[dim]disabled[/dim]")
    else:
        table.add_row(
            "Retries",
            f"{retry.max_retries} (base {retry.base_delay_ms}ms, cap {retry.max_delay_ms}ms)",
        )

    console.print(table)
    console.print(f"[green]✓[/green] Configuration OK")


def _redact_url(url: str) -> str:
    """Hide the webhook secret path, keeping scheme and host."""
    from urllib.parse import urlparse

    parsed = urlparse(url)
    if parsed.path and parsed.path != "/":
        return f"{parsed.scheme}://{parsed.netloc}/…"
    return f"{parsed.scheme}://{parsed.netloc}"


def run():
    """Console script entry point."""
    app()


if __name__ == "__main__":
    run()
