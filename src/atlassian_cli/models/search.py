"""Search result container shared by Jira and Confluence searches."""

from typing import Any

from pydantic import BaseModel, Field


class SearchResult(BaseModel):
    """Collected search items.

    ``total`` counts the items seen so far; once collection finishes it is
    the full count.
    """

    items: list[Any] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)

    def to_simplified_dict(self) -> dict[str, Any]:
        return {"items": self.items, "total": self.total}
