"""
Data models for Noko time entries.

Entries are validated once when the JSON snapshots are loaded, so the
classifier and the capacity analysis can rely on every field being present.
"""

from datetime import date

from pydantic import BaseModel, Field, field_validator


class EntryUser(BaseModel):
    """Author of a time entry."""

    id: int
    first_name: str = ""
    last_name: str = ""
    email: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def short_name(self) -> str:
        """First name and last initial, e.g. 'Jane D.'."""
        if not self.last_name:
            return self.first_name
        return f"{self.first_name} {self.last_name[0]}."


class EntryProject(BaseModel):
    """Project (bucket) an entry was logged against."""

    id: int
    name: str = ""


class EntryTag(BaseModel):
    """Label attached to an entry."""

    name: str


class TimeEntry(BaseModel):
    """One logged time interval."""

    id: int
    date: date
    minutes: int = Field(ge=0)
    description: str = ""
    user: EntryUser
    project: EntryProject | None = None
    tags: list[EntryTag] = Field(default_factory=list)

    @field_validator("description", mode="before")
    @classmethod
    def _none_description(cls, value):
        return "" if value is None else value

    @field_validator("tags", mode="before")
    @classmethod
    def _none_tags(cls, value):
        return [] if value is None else value

    @property
    def hours(self) -> float:
        return self.minutes / 60

    @property
    def month_key(self) -> str:
        return self.date.strftime("%Y-%m")

    def tag_names(self) -> list[str]:
        return [tag.name for tag in self.tags]
