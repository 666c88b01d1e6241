"""Freemind mind map -> Anki flashcard converter.

Nodes flagged with the pencil icon become questions, the nested list below a
flagged node becomes the answer, and parent nodes become the card's title:

- parse the XHTML export into an outline tree (outline.py)
- turn flagged nodes into flashcard records (transform.py)
- write an Anki CSV import file or an .apkg deck (exporter.py, exporters/)

Import the CSV in Anki with "Fields separated by: Comma" and HTML enabled.
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
