"""Search the Kitsu anime catalog from the terminal."""

__version__ = "0.1.0"
