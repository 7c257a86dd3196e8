"""Style name to style id lookups."""

import logging

from ..errors import StyleNotFoundError

logger = logging.getLogger(__name__)


class StyleCache:
    """Memoize style-name to style-id lookups against a document's style catalog."""

    def __init__(self, styles_element):
        self._styles = styles_element  # w:styles (CT_Styles)
        self._cache: dict[str, str] = {}

    def style_id(self, name: str) -> str:
        """
        Resolve a style name to its id.

        Raises:
            StyleNotFoundError: If no style carries that name
        """
        style_id = self._cache.get(name)
        if style_id is None:
            style = self._styles.get_by_name(name)
            if style is None:
                raise StyleNotFoundError(name)
            style_id = style.styleId
            self._cache[name] = style_id
            logger.debug(f"Resolved style '{name}' to id '{style_id}'")
        return style_id

    def invalidate(self):
        """Forget cached lookups, e.g. after styles were added."""
        self._cache.clear()

    def size(self) -> int:
        return len(self._cache)
