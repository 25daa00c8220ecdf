"""Global test fixtures."""

from collections.abc import Callable
from typing import Any

import pytest

from anime_cli.models import CatalogEntry

EntryFactory = Callable[..., CatalogEntry]


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep the developer's ANIME_CLI_* settings and .env out of tests."""
    monkeypatch.delenv("ANIME_CLI_CONFIG_FILE", raising=False)
    monkeypatch.delenv("ANIME_CLI_LOG_FILE", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def bebop_payload() -> dict[str, Any]:
    """One search result as the catalog returns it."""
    return {
        "id": "1",
        "type": "anime",
        "links": {"self": "https://kitsu.io/api/edge/anime/1"},
        "attributes": {
            "canonicalTitle": "Cowboy Bebop",
            "synopsis": "In the year 2071, humanity has colonized several of the planets.",
            "averageRating": "82.4",
            "startDate": "1998-04-03",
            "endDate": "1999-04-24",
            "status": "finished",
            "episodeCount": 26,
            "ageRating": "R",
        },
    }


@pytest.fixture
def make_entry() -> EntryFactory:
    """Build a CatalogEntry from wire-format attribute names."""

    def factory(entry_id: str = "1", title: str = "Cowboy Bebop", **attributes: Any) -> CatalogEntry:
        return CatalogEntry.model_validate(
            {"id": entry_id, "attributes": {"canonicalTitle": title, **attributes}}
        )

    return factory
