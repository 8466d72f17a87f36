#!/usr/bin/env python3
"""
Demo MCP server exposing three tools over stdio: Echo, Add and GetDateTime.

Run it directly with ``python -m mcp_demo.server`` or through ``mcp-demo serve``.
stdout carries the protocol, so logging always goes to stderr or a file.
"""

import logging
from datetime import datetime
from typing import Annotated, Optional, Union

from fastmcp import FastMCP
from pydantic import Field

from .config import DemoConfig, ServerConfig, configure_logging

logger = logging.getLogger(__name__)


def format_full_datetime(moment: datetime) -> str:
    """Full date and time, e.g. ``Friday, October 16, 2026 3:04:05 PM``."""
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return (
        f"{moment:%A}, {moment:%B} {moment.day}, {moment.year} "
        f"{hour}:{moment:%M}:{moment:%S} {meridiem}"
    )


def echo(
    message: Annotated[str, Field(description="Message to echo back")]
) -> str:
    """Echoes the message back to the client."""
    logger.info(f"Echo called with message: {message!r}")
    return f"hello {message}"


def add(
    a: Annotated[float, Field(description="First number to add")],
    b: Annotated[float, Field(description="Second number to add")],
) -> Union[int, float]:
    """Adds two numbers together and returns the result."""
    total = a + b
    logger.info(f"Add called: {a} + {b} = {total}")
    # 42 + 17 renders as "59", not "59.0"
    if float(total).is_integer():
        return int(total)
    return total


def get_date_time() -> str:
    """Returns the current date and time."""
    return format_full_datetime(datetime.now())


def create_app(config: Optional[ServerConfig] = None) -> FastMCP:
    """Build the FastMCP app with the demo tools registered."""
    config = config or ServerConfig()
    app = FastMCP(name=config.name)

    app.tool(name="Echo", description="Echoes the message back to the client.")(echo)
    app.tool(name="Add", description="Adds two numbers together and returns the result.")(add)
    app.tool(name="GetDateTime", description="Returns the current date and time.")(get_date_time)

    return app


def run(config: Optional[DemoConfig] = None) -> None:
    """Serve the demo tools over stdio until the client disconnects."""
    config = config or DemoConfig.from_env()
    configure_logging(config.logging)

    app = create_app(config.server)
    logger.info(f"Starting {config.server.name} v{config.server.version} on stdio")
    try:
        app.run(transport="stdio")
    finally:
        logger.info(f"{config.server.name} stopped")


if __name__ == "__main__":
    run()
