"""Exceptions raised while generating documentation."""


class MarkdocError(Exception):
    """Base exception for pymarkdoc failures."""
    pass


class ConfigError(MarkdocError):
    """Raised when the run is misconfigured, before any package is loaded."""
    pass


class LoadError(MarkdocError):
    """Raised when a package cannot be located or parsed."""

    def __init__(self, message: str, import_path: str = ""):
        super().__init__(message)
        self.import_path = import_path


class RenderError(MarkdocError):
    """Raised when a template fails while rendering a file."""
    pass


class OutputError(MarkdocError):
    """Raised when an output file cannot be read or written."""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path


class DriftError(MarkdocError):
    """Raised in check mode when the documentation on disk is out of date."""

    def __init__(self, path: str = ""):
        super().__init__("output does not match current files. Did you forget to run pymarkdoc?")
        self.path = path
