"""Main entry point for the MCP demo."""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from .config import DemoConfig, configure_logging
from .exceptions import SetupError

logger = logging.getLogger(__name__)


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Configuration file path"
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    default=None,
    help="Logging level"
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    help="Log file path"
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[Path], log_level: Optional[str], log_file: Optional[Path]) -> None:
    """MCP demo - a tool server, a menu client and an LLM chat client."""

    try:
        if config:
            demo_config = DemoConfig.from_file(config)
        else:
            demo_config = DemoConfig.from_env()
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        click.echo(f"✗ Setup error: invalid configuration: {e}", err=True)
        sys.exit(1)

    if log_level:
        demo_config.logging.log_level = log_level
    if log_file:
        demo_config.logging.log_file = str(log_file)

    ctx.ensure_object(dict)
    ctx.obj["config"] = demo_config


def run_session(session) -> None:
    """Run a client coroutine, exiting with status 1 on setup errors."""
    try:
        asyncio.run(session)
    except SetupError as e:
        logger.error(f"Setup error: {e}")
        click.echo(f"✗ Setup error: {e}", err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Stopped by user")


@cli.command()
@click.pass_context
def serve(ctx: click.Context) -> None:
    """Start the demo tool server on stdio."""
    from .server import run

    config: DemoConfig = ctx.obj["config"]
    try:
        run(config)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")


@cli.command()
@click.pass_context
def tools(ctx: click.Context) -> None:
    """List the tools exposed by the server."""
    from .dispatcher import load_tools
    from .menu import print_tools
    from .registry import ToolRegistry

    config: DemoConfig = ctx.obj["config"]
    configure_logging(config.logging)
    console = Console()

    async def list_tools():
        async with ToolRegistry.from_config(config.server) as registry:
            descriptors = await load_tools(registry)
        console.print(f"Found {len(descriptors)} tools:")
        print_tools(console, descriptors)

    run_session(list_tools())


@cli.command()
@click.pass_context
def client(ctx: click.Context) -> None:
    """Interactive menu client for calling tools directly."""
    from .menu import MenuClient
    from .registry import ToolRegistry

    config: DemoConfig = ctx.obj["config"]
    configure_logging(config.logging)
    console = Console()

    async def run_menu():
        console.print("Connecting to MCP server...", style="yellow")
        async with ToolRegistry.from_config(config.server) as registry:
            console.print("Connected to server successfully!", style="green")
            await MenuClient(registry, console).run()
        console.print("Client disposed. Exiting...")

    run_session(run_menu())


@cli.command()
@click.option("--model", "-m", default=None, help="Chat model to use (default from config: qwen3)")
@click.option("--host", "-h", default=None, help="Chat model host URL (default: http://localhost:11434)")
@click.pass_context
def chat(ctx: click.Context, model: Optional[str], host: Optional[str]) -> None:
    """Chat with a model that can call the server's tools."""
    from .chat import OllamaChatModel
    from .conversation import ConversationLoop
    from .registry import ToolRegistry

    config: DemoConfig = ctx.obj["config"]
    configure_logging(config.logging)
    if model:
        config.chat.model = model
    if host:
        config.chat.host = host
    console = Console()

    async def run_chat():
        chat_model = OllamaChatModel(config.chat)
        console.print("🔌 Connecting to MCP server...", style="yellow")
        try:
            async with ToolRegistry.from_config(config.server) as registry:
                loop = ConversationLoop(config.chat, registry, chat_model, console)
                await loop.run()
        finally:
            await chat_model.close()

    run_session(run_chat())


@cli.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    help="Output file path for configuration"
)
@click.pass_context
def config_template(ctx: click.Context, output: Optional[Path]) -> None:
    """Generate a configuration template."""
    config: DemoConfig = ctx.obj["config"]

    if output:
        config.save_to_file(output)
        click.echo(f"Configuration template saved to: {output}")
    else:
        click.echo(json.dumps(config.to_dict(), indent=2))


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
