"""Binding value models: the closed set of things a token can be replaced with."""

import io
from enum import Enum
from pathlib import Path
from typing import Annotated, Literal, Optional, Union

from PIL import Image
from pydantic import BaseModel, Field


class ValueKind(str, Enum):
    """Kind of binding value."""

    TEXT = "text"  # Literal text, rendered as one run
    IMAGE = "image"  # Raster image, rendered as an inline drawing
    FRAGMENT = "fragment"  # HTML markup, rendered as an altChunk replacing the paragraph


class TextValue(BaseModel):
    """Literal replacement text."""

    kind: Literal["text"] = "text"
    text: str = ""


class ImageValue(BaseModel):
    """An image payload with its intrinsic pixel size."""

    kind: Literal["image"] = "image"
    data: bytes = Field(repr=False)
    width: int  # Intrinsic width in pixels
    height: int  # Intrinsic height in pixels
    target_width: Optional[int] = None  # Resize to this width when no :width modifier is given
    filename: str = "image.png"

    @classmethod
    def from_bytes(
        cls, data: bytes, filename: Optional[str] = None, target_width: Optional[int] = None
    ) -> "ImageValue":
        """Build an ImageValue, reading the pixel size with Pillow."""
        with Image.open(io.BytesIO(data)) as img:
            width, height = img.size
            fmt = (img.format or "PNG").lower()
        return cls(
            data=data,
            width=width,
            height=height,
            target_width=target_width,
            filename=filename or f"image.{fmt}",
        )

    @classmethod
    def from_file(cls, path: Union[str, Path], target_width: Optional[int] = None) -> "ImageValue":
        path = Path(path)
        with open(path, "rb") as fh:
            data = fh.read()
        return cls.from_bytes(data, filename=path.name, target_width=target_width)

    def open(self) -> io.BytesIO:
        """Open the payload as a stream; use it in a ``with`` block."""
        return io.BytesIO(self.data)

    def resized(self, width: int) -> "ImageValue":
        """
        Return a copy resampled to ``width`` pixels, keeping the aspect ratio.

        The bitmap is re-encoded in its original format so the stored media
        matches the geometry written into the document.
        """
        if width == self.width:
            return self
        height = max(1, round(self.height * width / self.width))
        with self.open() as source, Image.open(source) as img:
            fmt = img.format or "PNG"
            scaled = img.resize((width, height), Image.Resampling.LANCZOS)
            buffer = io.BytesIO()
            scaled.save(buffer, format=fmt)
        return self.model_copy(
            update={
                "data": buffer.getvalue(),
                "width": width,
                "height": height,
                "target_width": None,
            }
        )


class FragmentValue(BaseModel):
    """HTML markup embedded as an opaque altChunk."""

    kind: Literal["fragment"] = "fragment"
    markup: str = ""


Value = Annotated[Union[TextValue, ImageValue, FragmentValue], Field(discriminator="kind")]
