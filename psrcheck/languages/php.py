"""PHP declaration analysers.

Two analysers share one contract. ``PhpAnalyser`` matches ``namespace`` and
``use`` statements anchored at the start of a line, so indented trait and
closure ``use`` clauses are never picked up. ``PhpTreeSitterAnalyser`` reads
the same statements from top-level tree-sitter nodes, which keeps comments,
strings and heredocs from producing false matches.
"""

from __future__ import annotations

import logging
import re

import tree_sitter
import tree_sitter_php as ts_php

from psrcheck.config import ImportKind, ImportStatement, ParserMode

logger = logging.getLogger(__name__)

NS_SEP = "\\"

_NAMESPACE_RE = re.compile(r"^namespace\s+([^;]+);", re.MULTILINE)
_USE_RE = re.compile(r"^use\s+([^;]+);", re.MULTILINE)
_USE_NODE_RE = re.compile(r"^use\s+([^;]+);?", re.IGNORECASE | re.DOTALL)
_ALIAS_RE = re.compile(r"\s+as\s+", re.IGNORECASE)
_KIND_RE = re.compile(r"^(function|const)\s+", re.IGNORECASE)


def _split_kind(text: str, default: ImportKind) -> tuple[ImportKind, str]:
    m = _KIND_RE.match(text)
    if m:
        return ImportKind(m.group(1).lower()), text[m.end():]
    return default, text


def _split_alias(clause: str) -> tuple[str, str | None]:
    parts = _ALIAS_RE.split(clause.strip(), maxsplit=1)
    if len(parts) == 2:
        return parts[0].strip(), parts[1].strip()
    return parts[0].strip(), None


def parse_use_body(body: str) -> list[ImportStatement]:
    """Turn the text between ``use`` and ``;`` into import statements.

    Handles aliases (``Foo\\Bar as Baz``), ``use function``/``use const``,
    comma lists and group uses (``App\\{A, B as C}``). Every statement
    produced from one ``use`` carries that statement's raw text.
    """
    raw = " ".join(body.split())
    kind, text = _split_kind(raw, ImportKind.CLASS)

    # (kind, qualified clause) pairs
    clauses: list[tuple[ImportKind, str]] = []
    if "{" in text:
        head, _, rest = text.partition("{")
        group_prefix = head.strip().rstrip(NS_SEP).strip()
        members = rest.rsplit("}", 1)[0]
        for member in members.split(","):
            member = member.strip()
            if not member:
                continue
            member_kind, member = _split_kind(member, kind)
            clauses.append((member_kind, f"{group_prefix}{NS_SEP}{member}"))
    else:
        for clause in text.split(","):
            if clause.strip():
                clauses.append((kind, clause))

    imports: list[ImportStatement] = []
    for clause_kind, clause in clauses:
        name, alias = _split_alias(clause)
        name = name.lstrip(NS_SEP)
        if not name:
            continue
        imports.append(ImportStatement(
            fully_qualified_name=name,
            local_alias=alias or name.rsplit(NS_SEP, 1)[-1],
            raw_text=raw,
            kind=clause_kind,
        ))
    return imports


class PhpAnalyser:
    extensions = [".php"]
    language_name = "php"
    parser_mode = ParserMode.LINE

    def extract_namespace(self, text: str) -> str | None:
        m = _NAMESPACE_RE.search(text)
        if m:
            return m.group(1).strip()
        return None

    def extract_imports(self, text: str) -> list[ImportStatement]:
        imports: list[ImportStatement] = []
        for m in _USE_RE.finditer(text):
            imports.extend(parse_use_body(m.group(1)))
        return imports

    def builtin_types(self) -> set[str]:
        return {
            # Core errors and exceptions
            "Exception", "Error", "TypeError", "ArgumentCountError", "ArithmeticError",
            "DivisionByZeroError", "ParseError", "AssertionError", "CompileError",
            "ValueError", "UnhandledMatchError", "FiberError", "ErrorException",
            # SPL exceptions
            "LogicException", "BadFunctionCallException", "BadMethodCallException",
            "DomainException", "InvalidArgumentException", "LengthException",
            "OutOfRangeException", "RuntimeException", "OutOfBoundsException",
            "OverflowException", "RangeException", "UnderflowException",
            "UnexpectedValueException",
            # SPL data structures and iterators
            "ArrayObject", "ArrayIterator", "RecursiveArrayIterator", "DirectoryIterator",
            "FilesystemIterator", "RecursiveDirectoryIterator", "RecursiveIteratorIterator",
            "GlobIterator", "IteratorIterator", "SplFileInfo", "SplFileObject",
            "SplTempFileObject", "SplDoublyLinkedList", "SplStack", "SplQueue",
            "SplHeap", "SplMinHeap", "SplMaxHeap", "SplPriorityQueue",
            "SplFixedArray", "SplObjectStorage",
            # Date/time
            "DateTime", "DateTimeImmutable", "DateTimeInterface", "DateTimeZone",
            "DateInterval", "DatePeriod",
            # Reflection
            "ReflectionClass", "ReflectionMethod", "ReflectionProperty",
            "ReflectionFunction", "ReflectionParameter", "ReflectionType",
            "ReflectionNamedType", "ReflectionObject", "ReflectionEnum",
            "ReflectionException",
            # Language-level types and interfaces
            "stdClass", "Closure", "Generator", "Fiber", "WeakReference", "WeakMap",
            "Attribute", "Stringable", "Traversable", "Iterator", "IteratorAggregate",
            "Throwable", "Countable", "Serializable", "JsonSerializable", "ArrayAccess",
            "UnitEnum", "BackedEnum",
            # Extensions
            "PDO", "PDOStatement", "PDOException", "JsonException",
            "IntlException", "IntlDateFormatter", "NumberFormatter", "Locale",
            "SimpleXMLElement", "DOMDocument", "DOMElement", "DOMNode", "DOMException",
            "XMLReader", "XMLWriter", "Phar", "PharException", "ZipArchive",
            "CurlHandle", "CurlMultiHandle", "CurlShareHandle",
            "finfo", "mysqli", "mysqli_result", "mysqli_stmt",
        }


class PhpTreeSitterAnalyser(PhpAnalyser):
    parser_mode = ParserMode.TREE_SITTER

    def __init__(self) -> None:
        self._parser: tree_sitter.Parser | None = None

    def get_language(self) -> tree_sitter.Language:
        return tree_sitter.Language(ts_php.language_php())

    def _parse(self, text: str) -> tree_sitter.Tree:
        if self._parser is None:
            self._parser = tree_sitter.Parser(self.get_language())
        return self._parser.parse(text.encode("utf-8"))

    def _top_level_nodes(self, root: tree_sitter.Node):
        """Yield program children, descending into bracketed namespace bodies."""
        for child in root.children:
            yield child
            if child.type == "namespace_definition":
                body = child.child_by_field_name("body")
                if body is not None:
                    yield from body.children

    def extract_namespace(self, text: str) -> str | None:
        tree = self._parse(text)
        for node in tree.root_node.children:
            if node.type != "namespace_definition":
                continue
            name_node = node.child_by_field_name("name")
            if name_node is None:
                for c in node.children:
                    if c.type == "namespace_name":
                        name_node = c
                        break
            if name_node is not None:
                return name_node.text.decode("utf-8").strip()
        return None

    def extract_imports(self, text: str) -> list[ImportStatement]:
        tree = self._parse(text)
        imports: list[ImportStatement] = []
        for node in self._top_level_nodes(tree.root_node):
            if node.type != "namespace_use_declaration":
                continue
            statement = node.text.decode("utf-8").strip()
            m = _USE_NODE_RE.match(statement)
            if m is None:
                logger.debug(f"Skipping unrecognised use declaration: {statement!r}")
                continue
            imports.extend(parse_use_body(m.group(1)))
        return imports
