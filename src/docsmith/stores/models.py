"""Side-channel registrations produced while rendering values."""

from pydantic import BaseModel, Field


class MediaEntry(BaseModel):
    """An image blob registered with the media store."""

    rel_id: str  # Relationship id referenced by a:blip/@r:embed
    filename: str
    size: int  # Payload size in bytes


class FragmentEntry(BaseModel):
    """An HTML blob registered with the alternate-content store."""

    rel_id: str  # Relationship id referenced by w:altChunk/@r:id
    partname: str
    size: int


class Registrations(BaseModel):
    """Every blob the package layer must persist on save."""

    media: list[MediaEntry] = Field(default_factory=list)
    fragments: list[FragmentEntry] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.media) + len(self.fragments)
