"""Exceptions raised by the substitution engine."""


class DocsmithError(Exception):
    """Base class for docsmith errors."""

    pass


class UnsupportedValueKindError(DocsmithError):
    """Exception raised when a binding value is not text, image or fragment."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Value of kind '{kind}' is not valid for substitution")


class MissingTemplateRowError(DocsmithError):
    """Exception raised when a composite table fill finds no template row."""

    pass


class StyleNotFoundError(DocsmithError):
    """Exception raised when a style name is not in the style catalog."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No style named '{name}' in the document")
