"""Build binding maps from plain (JSON-style) data."""

import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from pydantic import TypeAdapter

from ..errors import UnsupportedValueKindError
from .models import FragmentValue, ImageValue, TextValue, Value

logger = logging.getLogger(__name__)

_value_adapter = TypeAdapter(Value)


def coerce_value(obj: Any):
    """
    Convert a plain binding into a Value.

    Strings and numbers become text, ``None`` becomes empty text and Value
    instances pass through. Dicts are validated against the Value union.
    """
    if isinstance(obj, (TextValue, ImageValue, FragmentValue)):
        return obj
    if obj is None:
        return TextValue(text="")
    if isinstance(obj, bool):
        return TextValue(text=str(obj))
    if isinstance(obj, (str, int, float)):
        return TextValue(text=str(obj))
    if isinstance(obj, dict):
        return _value_adapter.validate_python(obj)
    raise UnsupportedValueKindError(type(obj).__name__)


def coerce_bindings(bindings: Mapping[str, Any]) -> dict:
    return {name: coerce_value(value) for name, value in bindings.items()}


def _load_one(value: Any, base_dir: Path):
    if isinstance(value, dict):
        if "image" in value:
            path = Path(value["image"])
            if not path.is_absolute():
                path = base_dir / path
            return ImageValue.from_file(path, target_width=value.get("width"))
        if "html" in value:
            return FragmentValue(markup=value["html"])
    return coerce_value(value)


def load_bindings(data: Mapping[str, Any], base_dir: Optional[Path] = None) -> dict:
    """
    Build a token binding map from JSON-style data.

    Supported shapes per token:
    - ``"text"`` or a number: literal text
    - ``{"image": "logo.png", "width": 120}``: image file, relative to base_dir
    - ``{"html": "<p>...</p>"}``: HTML fragment
    - ``{"kind": "text", "text": "..."}``: an explicit Value

    Args:
        data: Mapping of token name to plain value
        base_dir: Directory image paths are resolved against

    Returns:
        Dict of token name to Value
    """
    base_dir = base_dir or Path.cwd()
    bindings = {name: _load_one(value, base_dir) for name, value in data.items()}
    logger.info(f"Loaded {len(bindings)} bindings")
    return bindings
