"""Collect struct field tags from Go sources into one mapping.

Walks each parsed file, and for every struct type declaration records
lowercased-field-name -> tag value for fields whose tag carries the
requested key. The first value seen for a key is kept for the whole run.
"""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Iterable

from tree_sitter import Node

from . import tags
from .go_parser import (
    SourceFile,
    declares_type_params,
    inspect,
    node_text,
    parse_file,
    position,
    struct_fields,
)
from .loader import read_source

DEFAULT_TAG_KEY = "json"

# type X struct{...} and type X = struct{...}
_TYPE_SPECS = frozenset({"type_spec", "type_alias"})


@dataclasses.dataclass(frozen=True)
class FieldRecord:
    name: str
    tag: str
    line: int = 0

    @property
    def key(self) -> str:
        return tags.lower_first(self.name)


def _struct_of(spec: Node) -> Node | None:
    struct = spec.child_by_field_name("type")
    if struct is None or struct.type != "struct_type":
        return None
    if spec.child_by_field_name("type_parameters") is not None and not declares_type_params(spec):
        # [N]struct{...} spelled like a type parameter list
        return None
    return struct


def extract_records(source: SourceFile, tag_key: str = DEFAULT_TAG_KEY) -> list[FieldRecord]:
    """Return one record per tagged field identifier, in source order.

    Only fields listed directly in a struct type declaration are
    considered; struct types nested inside them are not descended into.
    """
    records: list[FieldRecord] = []

    def visit(node: Node) -> bool:
        if node.type not in _TYPE_SPECS:
            return True
        struct = _struct_of(node)
        if struct is None:
            return True
        for field in struct_fields(struct):
            tag = field.child_by_field_name("tag")
            if tag is None:
                continue
            value = tags.get(tags.unquote(node_text(tag)), tag_key)
            if not value:
                continue
            for name in field.children_by_field_name("name"):
                records.append(FieldRecord(node_text(name), value, position(name)[0]))
        return False

    inspect(source.root, visit)
    return records


def merge_records(records: Iterable[FieldRecord], mappings: dict[str, str]) -> int:
    """Insert records whose key is not mapped yet; return how many were added."""
    added = 0
    for record in records:
        if record.key not in mappings:
            mappings[record.key] = record.tag
            added += 1
    return added


def process_source(
    text: str,
    mappings: dict[str, str],
    filename: str = "<source>",
    tag_key: str = DEFAULT_TAG_KEY,
) -> int:
    """Parse Go source text and fold its tagged fields into ``mappings``."""
    source = parse_file(text, filename)
    return merge_records(extract_records(source, tag_key), mappings)


def process_file(path: Path, mappings: dict[str, str], tag_key: str = DEFAULT_TAG_KEY) -> int:
    """Read and process one Go file."""
    return process_source(read_source(path), mappings, str(path), tag_key)


def build_mappings(paths: Iterable[Path], tag_key: str = DEFAULT_TAG_KEY) -> dict[str, str]:
    """Process every path in order into a single mapping.

    The first read or parse error propagates; later paths are not read.
    """
    mappings: dict[str, str] = {}
    for path in paths:
        process_file(path, mappings, tag_key)
    return mappings
