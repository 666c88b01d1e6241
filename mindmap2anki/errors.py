from __future__ import annotations


class Mindmap2AnkiError(Exception):
    pass


class InputNotFound(Mindmap2AnkiError, FileNotFoundError):
    """Input mind-map export does not exist."""


class StructuralError(Mindmap2AnkiError):
    """The outline is missing a node the conversion depends on.

    Fatal when the document root label is missing. For a single flag marker
    the converter skips the marker and reports a warning instead.
    """
