"""
Java language adapter for tree-sitter.
"""
import logging
import os
import threading
from typing import Any, List, Optional, Tuple, Union

import tree_sitter

from .errors import ParseError
from .position import SourceText

logger = logging.getLogger(__name__)

SKIP_DIRS = {'build', 'target', 'out', 'node_modules'}


class JavaAdapter:
    """Tree-sitter adapter for the Java language."""

    def __init__(self):
        """Initialize the adapter; the parser itself is created on first use."""
        self._language = None
        self._local = threading.local()

    @property
    def language_id(self) -> str:
        """Return the language identifier."""
        return "java"

    @property
    def file_extensions(self) -> Tuple[str, ...]:
        """Return supported file extensions."""
        return (".java",)

    def _get_language(self):
        if self._language is None:
            try:
                from tree_sitter_java import language
            except ImportError as e:
                raise ParseError(f"tree-sitter-java not available: {e}") from e
            self._language = tree_sitter.Language(language())
        return self._language

    def _get_parser(self):
        """Get or create the tree-sitter parser for the calling thread."""
        parser = getattr(self._local, 'parser', None)
        if parser is None:
            try:
                parser = tree_sitter.Parser()
                parser.language = self._get_language()
            except ParseError:
                raise
            except Exception as e:
                raise ParseError(f"could not initialize Java parser: {e}") from e
            self._local.parser = parser
            logger.debug("Java parser initialized")
        return parser

    def is_available(self) -> bool:
        """Check whether the Java grammar can be loaded."""
        try:
            self._get_parser()
        except ParseError as e:
            logger.debug("%s", e)
            return False
        return True

    def parse(self, text: Union[SourceText, str, bytes]) -> Any:
        """Parse text and return a tree-sitter tree."""
        source = SourceText.coerce(text)
        tree = self._get_parser().parse(source.data)
        if tree is None:
            raise ParseError("parser returned no tree")
        return tree

    def handles(self, path: str) -> bool:
        return path.endswith(self.file_extensions)

    def list_files(self, paths: List[str]) -> List[str]:
        """List all Java files in the given paths, keeping the given order."""
        java_files = []

        for path in paths:
            if os.path.isfile(path):
                if self.handles(path):
                    java_files.append(path)
            elif os.path.isdir(path):
                for root, dirs, files in os.walk(path):
                    # Skip hidden and build output directories
                    dirs[:] = sorted(d for d in dirs if not d.startswith('.') and d not in SKIP_DIRS)

                    for file in sorted(files):
                        if self.handles(file):
                            java_files.append(os.path.join(root, file))

        return java_files


# Create default instance
default_java_adapter = JavaAdapter()


def get_parse_error(tree) -> Optional[Tuple[int, int]]:
    """Return the byte span of the first error node in the tree, if any."""
    root = getattr(tree, 'root_node', None)
    if root is None or not getattr(root, 'has_error', False):
        return None
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == 'ERROR' or getattr(node, 'is_missing', False):
            return (node.start_byte, node.end_byte)
        stack.extend(reversed(node.children))
    return None
