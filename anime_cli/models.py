"""Pydantic models for Kitsu search responses.

The catalog speaks JSON:API. Only the fields the CLI displays are modelled;
anything else in the payload is ignored.
"""

from pydantic import BaseModel, Field


class EntryAttributes(BaseModel):
    """Display attributes of a catalog entry."""

    title: str = Field(alias="canonicalTitle")
    synopsis: str | None = None
    average_rating: str | None = Field(default=None, alias="averageRating")  # opaque, e.g. "82.4"
    start_date: str | None = Field(default=None, alias="startDate")
    end_date: str | None = Field(default=None, alias="endDate")  # None while still airing
    status: str | None = None  # finished, current, upcoming, ...
    episode_count: int | None = Field(default=None, alias="episodeCount", ge=0)

    model_config = {"frozen": True, "populate_by_name": True, "extra": "ignore"}


class CatalogEntry(BaseModel):
    """A single search result."""

    id: str
    attributes: EntryAttributes

    model_config = {"frozen": True, "extra": "ignore"}

    @property
    def title(self) -> str:
        return self.attributes.title

    @property
    def synopsis(self) -> str | None:
        return self.attributes.synopsis

    @property
    def average_rating(self) -> str | None:
        return self.attributes.average_rating

    @property
    def start_date(self) -> str | None:
        return self.attributes.start_date

    @property
    def end_date(self) -> str | None:
        return self.attributes.end_date

    @property
    def status(self) -> str | None:
        return self.attributes.status

    @property
    def episode_count(self) -> int | None:
        return self.attributes.episode_count

    @property
    def aired(self) -> str | None:
        """Aired range, e.g. '1998-04-03 to 1999-04-24' or '2020-01-01 to present'."""
        if self.start_date is None:
            return None
        end = "present" if self.end_date is None else self.end_date
        return f"{self.start_date} to {end}"


class SearchResponse(BaseModel):
    """Top-level search response document."""

    data: list[CatalogEntry]

    model_config = {"extra": "ignore"}
