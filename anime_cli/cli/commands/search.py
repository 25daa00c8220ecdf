"""Search command."""

import asyncio
import sys

import cyclopts
from pydantic import ValidationError

from anime_cli.cli.console import get_console
from anime_cli.client import CatalogClient, create_http_client
from anime_cli.config import ApiConfig, Config, configure_logging
from anime_cli.errors import (
    ConfigurationError,
    DecodeError,
    InvalidQueryError,
    ServiceError,
    TransportError,
)
from anime_cli.models import CatalogEntry
from anime_cli.viewer import run_viewer

app = cyclopts.App(name="search", help="Search the anime catalog")


async def fetch(query: str, api: ApiConfig) -> list[CatalogEntry]:
    """Run one catalog search with a short-lived HTTP client."""
    async with create_http_client(api) as http_client:
        return await CatalogClient(http_client, api).search(query)


def load_config() -> Config:
    """Load configuration, exiting with a message when it is invalid."""
    try:
        return Config()
    except (ConfigurationError, ValidationError) as e:
        message = e.message if isinstance(e, ConfigurationError) else str(e)
        get_console().error(
            f"Invalid configuration: {message}",
            hint="Check ANIME_CLI_* environment variables and ANIME_CLI_CONFIG_FILE",
        )
        sys.exit(1)


@app.default
def search(
    query: str,
    /,
    *,
    interactive: bool = False,
) -> None:
    """Search Kitsu for anime matching a query.

    Args:
        query: Search text (e.g., 'cowboy bebop')
        interactive: Browse results in a tabbed terminal viewer
    """
    console = get_console()
    config = load_config()
    configure_logging(config.logging, allow_stderr=not interactive)

    if interactive:
        run_viewer(config.api, query)
        return

    terminal = console.terminal_info(config.display)
    console.searching(query)

    try:
        with console.status("Searching Kitsu..."):
            entries = asyncio.run(fetch(query, config.api))
    except TransportError as e:
        console.error(e.message, hint=f"Is {config.api.base_url} reachable?")
        sys.exit(1)
    except ServiceError as e:
        console.error(e.message, hint="The catalog rejected the request; try again later")
        sys.exit(1)
    except DecodeError as e:
        console.error(e.message, hint="The catalog response did not match the expected format")
        sys.exit(1)
    except InvalidQueryError as e:
        console.error(e.message, hint="Check the query for invalid characters or excessive length")
        sys.exit(1)

    console.search_results(entries, terminal, max_width=config.display.max_width)
