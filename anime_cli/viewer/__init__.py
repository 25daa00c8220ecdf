"""Two-tab interactive terminal viewer (result list + details)."""

from anime_cli.viewer.app import ViewerApp, run_viewer
from anime_cli.viewer.state import InputMode, Tab, ViewerState

__all__ = [
    "InputMode",
    "Tab",
    "ViewerApp",
    "ViewerState",
    "run_viewer",
]
