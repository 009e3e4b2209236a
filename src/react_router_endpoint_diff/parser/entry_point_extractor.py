"""
Route module entry point extractor using tree-sitter.

This module parses TypeScript/JavaScript route modules into tree-sitter
syntax trees and locates the exported `loader` and `action` declarations,
together with their line ranges and the request parameter expressions
they contain. Nothing is imported or executed.
"""

import logging
from pathlib import Path
from typing import Iterator, Optional, Union

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

from react_router_endpoint_diff.models.entry_point import (
    EntryPointDescriptor,
    EntryPointKind,
)

logger = logging.getLogger(__name__)


class EntryPointExtractor:
    """
    Extract `loader` and `action` entry points from route modules.

    Parsing is lenient: tree-sitter recovers from syntax it does not
    understand, so the only file level failure is a missing file.
    """

    ENTRY_POINT_NAMES = frozenset(kind.value for kind in EntryPointKind)

    # Substrings marking a member expression as a request parameter access
    PARAMETER_ACCESS_PATTERNS = (
        "params.",
        "request.json",
        "request.formData",
        "request.text",
        "searchParams",
    )

    VARIABLE_DECLARATION_TYPES = frozenset({"lexical_declaration", "variable_declaration"})
    FUNCTION_DECLARATION_TYPES = frozenset({"function_declaration", "generator_function_declaration"})
    DESTRUCTURING_PATTERN_TYPES = frozenset({"object_pattern", "array_pattern"})

    def __init__(self) -> None:
        self._parsers: dict[str, Parser] = {}

    def _get_parser(self, grammar: str) -> Parser:
        """
        Get the parser for a grammar, creating it on first use.

        Args:
            grammar: "typescript" or "tsx".

        Returns:
            A tree-sitter Parser for the grammar.
        """
        if grammar not in self._parsers:
            if grammar == "typescript":
                language = Language(tree_sitter_typescript.language_typescript())
            else:
                language = Language(tree_sitter_typescript.language_tsx())
            self._parsers[grammar] = Parser(language)
        return self._parsers[grammar]

    @staticmethod
    def _grammar_for(file_name: str) -> str:
        # The TSX grammar also covers .js and .jsx sources.
        # Plain .ts needs its own grammar because of `<T>expr` casts.
        return "typescript" if Path(file_name).suffix == ".ts" else "tsx"

    def parse_file(self, path: Union[str, Path]) -> Tree:
        """
        Read and parse a source file.

        Args:
            path: Path to the route module.

        Returns:
            The tree-sitter syntax tree.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        file_path = Path(path)
        if not file_path.is_file():
            raise FileNotFoundError(f"File not found: {file_path}")

        source = file_path.read_text(encoding="utf-8")
        return self.parse_source(source, str(file_path))

    def parse_source(self, source: str, file_name: str = "route.tsx") -> Tree:
        """
        Parse source text.

        Args:
            source: The module's source code.
            file_name: Name used to pick the grammar.

        Returns:
            The tree-sitter syntax tree.
        """
        tree = self._get_parser(self._grammar_for(file_name)).parse(source.encode("utf-8"))
        if tree.root_node.has_error:
            logger.debug("Recovered from syntax errors while parsing %s", file_name)
        return tree

    def extract(self, path: Union[str, Path]) -> list[EntryPointDescriptor]:
        """Parse a file and return its entry points."""
        return self.find_entry_points(self.parse_file(path))

    def find_entry_points(self, tree: Tree) -> list[EntryPointDescriptor]:
        """
        Find all `loader` and `action` entry points in a syntax tree.

        Recognizes exported variable declarations, exported function
        declarations, and named export clauses that re-export a local
        declaration.

        Args:
            tree: A tree produced by parse_file or parse_source.

        Returns:
            Descriptors in source traversal order.
        """
        results: list[EntryPointDescriptor] = []

        for node in _walk(tree.root_node):
            if node.type != "export_statement":
                continue

            declaration = node.child_by_field_name("declaration")
            if declaration is not None:
                if declaration.type in self.VARIABLE_DECLARATION_TYPES:
                    # export const loader = ...
                    for declarator in declaration.named_children:
                        if declarator.type != "variable_declarator":
                            continue
                        name = _identifier_text(declarator.child_by_field_name("name"))
                        if name in self.ENTRY_POINT_NAMES:
                            results.append(self._describe(node, name))
                elif declaration.type in self.FUNCTION_DECLARATION_TYPES:
                    # export function loader() {}
                    name = _identifier_text(declaration.child_by_field_name("name"))
                    if name in self.ENTRY_POINT_NAMES:
                        results.append(self._describe(node, name))

            # export { loader, action }
            for clause in node.named_children:
                if clause.type != "export_clause":
                    continue
                for specifier in clause.named_children:
                    if specifier.type != "export_specifier":
                        continue
                    name = _exported_name(specifier)
                    if name not in self.ENTRY_POINT_NAMES:
                        continue
                    original = self.find_declaration(tree, name)
                    if original is None:
                        logger.debug("No local declaration for re-exported %s", name)
                        continue
                    results.append(self._describe(original, name))

        return results

    def find_declaration(self, tree: Tree, name: str) -> Optional[Node]:
        """
        Find the first variable or function declaration of an identifier.

        Args:
            tree: The syntax tree to search.
            name: Identifier to look for.

        Returns:
            The declaring statement (including its `export` keyword, if any),
            or None when the identifier is not declared in the file.
        """
        for node in _walk(tree.root_node):
            if node.type == "variable_declarator":
                if _identifier_text(node.child_by_field_name("name")) == name:
                    return _enclosing_statement(node.parent or node)
            elif node.type in self.FUNCTION_DECLARATION_TYPES:
                if _identifier_text(node.child_by_field_name("name")) == name:
                    return _enclosing_statement(node)
        return None

    def _describe(self, node: Node, name: str) -> EntryPointDescriptor:
        """Build the descriptor for a matched declaration statement."""
        return EntryPointDescriptor(
            kind=EntryPointKind(name),
            name=name,
            start_line=node.start_point[0] + 1,
            end_line=node.end_point[0] + 1,
            is_exported=True,
            parameter_expressions=self.extract_parameter_expressions(node),
        )

    def extract_parameter_expressions(self, node: Node) -> list[str]:
        """
        Collect request parameter accesses and destructuring patterns.

        Args:
            node: Root of the subtree to scan.

        Returns:
            Distinct expression texts in first-seen order.
        """
        found: dict[str, None] = {}

        for child in _walk(node):
            if child.type == "member_expression":
                text = _node_text(child)
                if any(pattern in text for pattern in self.PARAMETER_ACCESS_PATTERNS):
                    found.setdefault(text)
            elif child.type in self.DESTRUCTURING_PATTERN_TYPES:
                found.setdefault(_node_text(child))

        return list(found)


def _walk(root: Node) -> Iterator[Node]:
    """Yield every node of a subtree in depth-first preorder."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def _node_text(node: Node) -> str:
    return node.text.decode("utf-8") if node.text is not None else ""


def _identifier_text(node: Optional[Node]) -> Optional[str]:
    if node is None or node.type != "identifier":
        return None
    return _node_text(node)


def _exported_name(specifier: Node) -> str:
    """Name a specifier is exported as: the alias in `x as loader`."""
    name_node = specifier.child_by_field_name("alias") or specifier.child_by_field_name("name")
    if name_node is None:
        return ""
    return _node_text(name_node).strip("'\"")


def _enclosing_statement(node: Node) -> Node:
    """Widen a declaration to its `export` statement when it has one."""
    if node.parent is not None and node.parent.type == "export_statement":
        return node.parent
    return node
