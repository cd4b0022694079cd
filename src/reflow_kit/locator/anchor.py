from pydantic import BaseModel, Field, model_validator


class Anchor(BaseModel):
    """Stored reference to a reading position (bookmark, note, progress).

    Owned by the persistence layer; only ever read here. ``offset`` is
    preferred. ``snippet`` is the fallback for records saved without one.
    """

    offset: int | None = Field(default=None, ge=0)
    snippet: str | None = None

    class Config:
        extra = "forbid"
        frozen = True

    @model_validator(mode="after")
    def _require_position(self) -> "Anchor":
        if self.offset is None and not self.snippet:
            raise ValueError("Anchor needs an offset or a snippet")
        return self
