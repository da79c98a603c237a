"""
Symbol graph types consumed by the extraction engine.

A symbol provider (a source indexer, a dump loader, a test fixture) builds
these objects; the engine only reads them. The shapes mirror what a code
model exposes for one compilation unit: namespaces containing classes and
enums, classes containing properties, and attributes with ordered
arguments on every symbol.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union


class SymbolAccessError(RuntimeError):
    """Raised when a provider cannot answer a query for a symbol."""


class SymbolKind(Enum):
    NAMESPACE = "namespace"
    CLASS = "class"
    ENUM = "enum"
    PROPERTY = "property"
    OTHER = "other"


class InfoLocation(Enum):
    """Where a symbol is defined relative to the project being extracted."""

    PROJECT = "project"
    EXTERNAL = "external"


class Access(Enum):
    PUBLIC = "public"
    PROTECTED = "protected"
    INTERNAL = "internal"
    PRIVATE = "private"


class TypeKind(Enum):
    """Classification of a type reference.

    ``CODE_TYPE`` is a named reference to a class/struct/enum/interface,
    ``ARRAY`` wraps an element type, ``OTHER`` is anything the provider
    could not classify. The remaining members are built-in value kinds.
    """

    CODE_TYPE = "code_type"
    ARRAY = "array"
    OTHER = "other"
    STRING = "string"
    BOOL = "bool"
    CHAR = "char"
    BYTE = "byte"
    SHORT = "short"
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    DECIMAL = "decimal"
    OBJECT = "object"
    VOID = "void"


@dataclass(frozen=True)
class AttributeArgument:
    """One attribute argument; ``name`` is empty for positional arguments.

    ``value`` is the raw argument text, so string literals keep their quotes.
    """

    name: str
    value: Optional[str]


@dataclass
class CodeAttribute:
    name: str
    arguments: List[AttributeArgument] = field(default_factory=list)


@dataclass(frozen=True)
class Getter:
    access: Access = Access.PUBLIC
    is_static: bool = False


@dataclass
class _Symbol:
    """Fields shared by every named symbol."""

    name: str
    full_name: str
    info_location: InfoLocation = InfoLocation.PROJECT
    attributes: List[CodeAttribute] = field(default_factory=list)
    doc_text: Optional[str] = field(default=None, repr=False)

    kind = SymbolKind.OTHER

    @property
    def doc_comment(self) -> Optional[str]:
        """Raw documentation comment text.

        External symbols have no readable comment; asking for one fails the
        same way a live code model does.
        """
        if self.info_location is not InfoLocation.PROJECT:
            raise SymbolAccessError(
                f"Documentation comment is not available for external symbol {self.full_name}"
            )
        return self.doc_text


@dataclass
class CodeTypeRef:
    """A declared type as seen from the member that uses it."""

    kind: TypeKind
    as_string: str
    element_type: Optional["CodeTypeRef"] = None
    code_type: Optional[Union["CodeClass", "CodeEnum"]] = field(
        default=None, repr=False, compare=False
    )


@dataclass
class CodeProperty(_Symbol):
    type: Optional[CodeTypeRef] = None
    getter: Optional[Getter] = None

    kind = SymbolKind.PROPERTY


@dataclass
class CodeElement(_Symbol):
    """A symbol of a kind the engine does not process (interface, delegate, ...)."""

    kind = SymbolKind.OTHER


@dataclass
class CodeEnumMember(_Symbol):
    kind = SymbolKind.OTHER


@dataclass
class CodeClass(_Symbol):
    members: List[_Symbol] = field(default_factory=list)
    file_names: List[str] = field(default_factory=list)

    kind = SymbolKind.CLASS


@dataclass
class CodeEnum(_Symbol):
    members: List[_Symbol] = field(default_factory=list)
    file_names: List[str] = field(default_factory=list)

    kind = SymbolKind.ENUM


@dataclass
class CodeNamespace(_Symbol):
    members: List[_Symbol] = field(default_factory=list)

    kind = SymbolKind.NAMESPACE


Symbol = Union[CodeNamespace, CodeClass, CodeEnum, CodeProperty, CodeEnumMember, CodeElement]


@dataclass
class CompilationUnit:
    """One source file's symbol model.

    ``code_elements`` is ``None`` when the file has no code model at all
    (a resource, a markup file), which is different from an empty list.
    """

    path: str
    code_elements: Optional[List[Symbol]] = None
