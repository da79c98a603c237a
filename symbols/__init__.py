"""
Symbol provider boundary.

In-memory symbol graph types (namespaces, classes, enums, properties,
attributes) and a loader for symbol dumps written by a source indexer.
"""

from symbols.model import (
    Access,
    AttributeArgument,
    CodeAttribute,
    CodeClass,
    CodeElement,
    CodeEnum,
    CodeEnumMember,
    CodeNamespace,
    CodeProperty,
    CodeTypeRef,
    CompilationUnit,
    Getter,
    InfoLocation,
    SymbolAccessError,
    SymbolKind,
    TypeKind,
)
from symbols.loader import (
    SymbolGraph,
    SymbolGraphError,
    load_symbol_graph,
    parse_type_string,
)

__all__ = [
    # Symbol model
    "Access",
    "AttributeArgument",
    "CodeAttribute",
    "CodeClass",
    "CodeElement",
    "CodeEnum",
    "CodeEnumMember",
    "CodeNamespace",
    "CodeProperty",
    "CodeTypeRef",
    "CompilationUnit",
    "Getter",
    "InfoLocation",
    "SymbolAccessError",
    "SymbolKind",
    "TypeKind",
    # Dump loading
    "SymbolGraph",
    "SymbolGraphError",
    "load_symbol_graph",
    "parse_type_string",
]
