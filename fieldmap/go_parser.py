"""Parse Go source with tree-sitter and walk the resulting syntax tree.

tree-sitter recovers from errors instead of failing, so parse_file checks
the tree afterwards and raises GoSyntaxError for the first problem found:

  - ERROR and MISSING nodes left by error recovery
  - a missing package clause, statements at the top level, imports after
    other declarations (the grammar accepts these for snippets)
  - string and rune literals whose escapes do not decode
"""

from __future__ import annotations

import dataclasses
from typing import Callable

import tree_sitter_go
from tree_sitter import Language, Node, Parser, Tree

from . import tags
from .errors import GoSyntaxError

GO_LANGUAGE = Language(tree_sitter_go.language())

KEYWORDS = frozenset({
    "break", "case", "chan", "const", "continue", "default", "defer",
    "else", "fallthrough", "for", "func", "go", "goto", "if", "import",
    "interface", "map", "package", "range", "return", "select", "struct",
    "switch", "type", "var",
})

DECLARATIONS = frozenset({
    "const_declaration",
    "function_declaration",
    "method_declaration",
    "type_declaration",
    "var_declaration",
})

# Literals the grammar accepts with any escape after the backslash
_CHECKED_LITERALS = frozenset({"interpreted_string_literal", "rune_literal"})

# [P *C] and [P (C)] read as array lengths when C is a plain type name
_AMBIGUOUS_TERMS = frozenset({"pointer_type", "parenthesized_type"})
_PLAIN_TYPES = frozenset({"type_identifier", "qualified_type"})


@dataclasses.dataclass(frozen=True)
class SourceFile:
    tree: Tree
    filename: str

    @property
    def root(self) -> Node:
        return self.tree.root_node

    @property
    def package(self) -> str:
        clause = find_child_by_type(self.root, "package_clause")
        return node_text(find_child_by_type(clause, "package_identifier"))


def node_text(node: Node) -> str:
    return node.text.decode("utf-8")


def position(node: Node) -> tuple[int, int]:
    """Return the 1-based line and byte column where ``node`` starts."""
    row, column = node.start_point
    return row + 1, column + 1


def find_child_by_type(node: Node, type_name: str) -> Node | None:
    """Find first child node of given type."""
    for child in node.children:
        if child.type == type_name:
            return child
    return None


def find_children_by_type(node: Node, type_name: str) -> list[Node]:
    """Find all children of given type."""
    return [child for child in node.children if child.type == type_name]


def inspect(node: Node, visit: Callable[[Node], bool]) -> None:
    """Walk named nodes depth-first in source order.

    ``visit`` is called on each node before its children; returning False
    skips the children of that node.
    """
    stack = [node]
    while stack:
        current = stack.pop()
        if visit(current):
            stack.extend(reversed(current.named_children))


def struct_fields(struct: Node) -> list[Node]:
    """Return the field_declaration nodes of a struct_type, in order."""
    body = find_child_by_type(struct, "field_declaration_list")
    if body is None:
        return []
    return find_children_by_type(body, "field_declaration")


def declares_type_params(spec: Node) -> bool:
    """Report whether a type spec's brackets hold type parameters.

    ``type A [P *C]T`` and ``type A [P (C)]T`` are also valid array
    declarations with an expression as length. Go reads them as arrays
    unless a comma follows or the constraint is more than a type name.
    """
    params = spec.child_by_field_name("type_parameters")
    if params is None:
        return False
    if find_child_by_type(params, ",") is not None:
        return True
    decls = [c for c in params.named_children if c.type != "comment"]
    if len(decls) != 1 or len(decls[0].children_by_field_name("name")) != 1:
        return True
    constraint = decls[0].child_by_field_name("type")
    if constraint is None:
        return True
    terms = [c for c in constraint.named_children if c.type != "comment"]
    if not terms or terms[0].type not in _AMBIGUOUS_TERMS:
        return True
    inner = [c for c in terms[0].named_children if c.type != "comment"]
    if len(inner) != 1 or inner[0].type not in _PLAIN_TYPES:
        return True
    return any(term.type not in _PLAIN_TYPES for term in terms[1:])


def _syntax_error(node: Node, message: str, filename: str) -> GoSyntaxError:
    line, col = position(node)
    return GoSyntaxError(message, filename, line, col)


def _first_error(root: Node) -> Node | None:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_error or node.is_missing:
            return node
        if node.has_error:
            stack.extend(reversed(node.children))
    return None


def _describe_error(node: Node) -> str:
    if node.is_missing:
        return f"expected {node.type}" if node.is_named else f"expected {node.type!r}"
    leaf = node
    while leaf.child_count:
        leaf = leaf.children[0]
    text = node_text(leaf).split("\n", 1)[0][:20]
    return f"syntax error near {text!r}" if text else "syntax error"


def _check_top_level(root: Node, filename: str) -> None:
    seen_package = False
    seen_decl = False
    for child in root.named_children:
        if child.type == "comment":
            continue
        if not seen_package:
            if child.type != "package_clause":
                raise _syntax_error(child, "expected 'package'", filename)
            seen_package = True
        elif child.type == "import_declaration":
            if seen_decl:
                raise _syntax_error(child, "imports must appear before other declarations", filename)
        elif child.type in DECLARATIONS:
            seen_decl = True
        else:
            raise _syntax_error(child, "expected declaration", filename)
    if not seen_package:
        raise _syntax_error(root, "expected 'package', found EOF", filename)


def _check_literals(root: Node, filename: str) -> None:
    def visit(node: Node) -> bool:
        if node.type not in _CHECKED_LITERALS:
            return True
        try:
            tags.unquote(node_text(node))
        except ValueError as e:
            raise _syntax_error(node, str(e), filename) from e
        return False

    inspect(root, visit)


def parse_file(text: str, filename: str = "<source>") -> SourceFile:
    """Parse one Go source text, raising GoSyntaxError if it is not valid."""
    if text.startswith("\ufeff"):
        text = text[1:]
    tree = Parser(GO_LANGUAGE).parse(text.encode("utf-8"))
    root = tree.root_node

    if root.has_error:
        node = _first_error(root)
        if node is None:
            raise _syntax_error(root, "syntax error", filename)
        raise _syntax_error(node, _describe_error(node), filename)
    _check_top_level(root, filename)
    _check_literals(root, filename)
    return SourceFile(tree, filename)
