"""
Artifact renderers.

Importing this package registers one renderer per artifact kind.
"""

from .markup import MarkupRenderer
from .logic import LogicRenderer
from .dialog import DialogRenderer
from .style import StyleRenderer
from .docs import DocsRenderer

__all__ = [
    "MarkupRenderer",
    "LogicRenderer",
    "DialogRenderer",
    "StyleRenderer",
    "DocsRenderer",
]
