"""Tree-sitter powered class extractor."""

from __future__ import annotations

from typing import Callable, Dict, Iterator, List, Optional

import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from .base import StructuralExtractor, StructuralSummary
from ..models import MethodInfo, SourceFile
from ..repo_scanner import detect_syntax

_GRAMMARS: Dict[str, Callable[[], object]] = {
    "javascript": tree_sitter_javascript.language,
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
}

_CLASS_NODES = {"class_declaration", "abstract_class_declaration"}
_METHOD_NODES = {"method_definition", "method_signature", "abstract_method_signature"}
_ACCESSOR_TOKENS = {"get", "set"}


class TreeSitterExtractor(StructuralExtractor):
    """Reads the first class declaration of a file from its syntax tree."""

    def __init__(self) -> None:
        self._parsers: Dict[str, Parser] = {}

    def supports(self, source: SourceFile) -> bool:
        return detect_syntax(source.path) in _GRAMMARS

    def extract(self, source: SourceFile) -> Optional[StructuralSummary]:
        syntax = detect_syntax(source.path)
        if syntax is None:
            return None
        source_bytes = source.text.encode("utf-8")
        # tree-sitter recovers from syntax errors with ERROR nodes instead of raising.
        tree = self._get_parser(syntax).parse(source_bytes)
        class_node = next(self._iter_classes(tree.root_node), None)
        if class_node is None:
            return None
        return self._summarise(class_node, source_bytes)

    def _get_parser(self, syntax: str) -> Parser:
        parser = self._parsers.get(syntax)
        if parser is None:
            parser = Parser(Language(_GRAMMARS[syntax]()))
            self._parsers[syntax] = parser
        return parser

    @staticmethod
    def _iter_classes(root: Node) -> Iterator[Node]:
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type in _CLASS_NODES and node.child_by_field_name("name") is not None:
                yield node
            stack.extend(reversed(node.children))

    def _summarise(self, class_node: Node, source_bytes: bytes) -> StructuralSummary:
        name_node = class_node.child_by_field_name("name")
        summary = StructuralSummary(class_name=self._node_text(name_node, source_bytes))

        for child in class_node.children:
            if child.type == "class_heritage":
                summary.extends, summary.implements = self._read_heritage(child, source_bytes)

        body = class_node.child_by_field_name("body")
        if body is not None:
            summary.methods = self._read_methods(body, source_bytes)
        return summary

    def _read_heritage(self, heritage: Node, source_bytes: bytes) -> tuple[List[str], List[str]]:
        extends: List[str] = []
        implements: List[str] = []
        for child in heritage.named_children:
            if child.type == "extends_clause":
                value = child.child_by_field_name("value")
                if value is None and child.named_children:
                    value = child.named_children[0]
                if value is not None and not extends:
                    extends.append(self._type_name(value, source_bytes))
            elif child.type == "implements_clause":
                implements.extend(
                    self._type_name(item, source_bytes)
                    for item in child.named_children
                    if item.type != "comment"
                )
            elif child.type != "comment" and not extends:
                # JavaScript grammar: `class_heritage` holds the parent expression directly.
                extends.append(self._type_name(child, source_bytes))
        return [name for name in extends if name], [name for name in implements if name]

    def _read_methods(self, body: Node, source_bytes: bytes) -> List[MethodInfo]:
        methods: List[MethodInfo] = []
        for member in body.named_children:
            if member.type not in _METHOD_NODES:
                continue
            if any(not token.is_named and token.type in _ACCESSOR_TOKENS for token in member.children):
                continue
            name_node = member.child_by_field_name("name")
            if name_node is None:
                continue
            name = self._node_text(name_node, source_bytes)
            if name and name != "constructor":
                methods.append(MethodInfo(name=name))
        return methods

    @classmethod
    def _type_name(cls, node: Node, source_bytes: bytes) -> str:
        text = cls._node_text(node, source_bytes)
        return text.split("<", 1)[0].strip()

    @staticmethod
    def _node_text(node: Optional[Node], source_bytes: bytes) -> str:
        if node is None:
            return ""
        return source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")


__all__ = ["TreeSitterExtractor"]
