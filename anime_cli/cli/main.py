"""Main CLI application using Cyclopts.

The CLI is a thin HTTP client: every command talks to the Kitsu API directly.
"""

import cyclopts

from anime_cli import __version__
from anime_cli.cli.commands import search

app = cyclopts.App(
    name="anime-cli",
    help="Search the Kitsu anime catalog from the terminal",
    version=__version__,
)

app.command(search.app, name="search")
