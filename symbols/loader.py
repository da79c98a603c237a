"""
Symbol graph dump loader.

Reads the YAML/JSON symbol dump written by a source indexer and rebuilds
the in-memory symbol model from it. Type references are bound to their
class/enum symbols in a second pass, so forward and cyclic references
between types (and between compilation units) resolve.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

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
    Symbol,
    TypeKind,
)

logger = logging.getLogger(__name__)

ARRAY_SUFFIX = "[]"

_BUILTIN_TYPE_KINDS: Dict[str, TypeKind] = {
    "System.String": TypeKind.STRING,
    "System.Boolean": TypeKind.BOOL,
    "System.Char": TypeKind.CHAR,
    "System.Byte": TypeKind.BYTE,
    "System.SByte": TypeKind.BYTE,
    "System.Int16": TypeKind.SHORT,
    "System.UInt16": TypeKind.SHORT,
    "System.Int32": TypeKind.INT,
    "System.UInt32": TypeKind.INT,
    "System.Int64": TypeKind.LONG,
    "System.UInt64": TypeKind.LONG,
    "System.Single": TypeKind.FLOAT,
    "System.Double": TypeKind.DOUBLE,
    "System.Decimal": TypeKind.DECIMAL,
    "System.Object": TypeKind.OBJECT,
    "System.Void": TypeKind.VOID,
}

# C# keyword aliases, normalized to the framework names a code model reports
_TYPE_ALIASES: Dict[str, str] = {
    "string": "System.String",
    "bool": "System.Boolean",
    "char": "System.Char",
    "byte": "System.Byte",
    "sbyte": "System.SByte",
    "short": "System.Int16",
    "ushort": "System.UInt16",
    "int": "System.Int32",
    "uint": "System.UInt32",
    "long": "System.Int64",
    "ulong": "System.UInt64",
    "float": "System.Single",
    "double": "System.Double",
    "decimal": "System.Decimal",
    "object": "System.Object",
    "void": "System.Void",
}


class SymbolGraphError(ValueError):
    """Raised when a symbol dump is structurally invalid."""


TypeSymbol = Union[CodeClass, CodeEnum]


@dataclass
class SymbolGraph:
    """All compilation units of one project plus the types they can reference."""

    project: str
    root: str
    units: List[CompilationUnit]
    types: Dict[str, TypeSymbol] = field(default_factory=dict)

    def find_type(self, full_name: str) -> Optional[TypeSymbol]:
        return self.types.get(full_name)


@dataclass
class _PendingRef:
    ref: CodeTypeRef
    namespace: str


def _expect_dict(payload: Any, ctx: str) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise SymbolGraphError(f"{ctx} must be an object")
    return payload


def _expect_list(payload: Any, ctx: str) -> List[Any]:
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise SymbolGraphError(f"{ctx} must be a list")
    return payload


def _load_dump_payload(path: str) -> Dict[str, Any]:
    dump_path = Path(path)
    if not dump_path.is_file():
        raise FileNotFoundError(f"Symbol dump not found: {dump_path}")

    text = dump_path.read_text(encoding="utf-8")
    try:
        if dump_path.suffix.lower() == ".json":
            payload = json.loads(text)
        else:
            payload = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise SymbolGraphError(f"Failed to parse symbol dump {dump_path}: {exc}") from exc
    return _expect_dict(payload, "symbol dump")


def _qualify(namespace: str, name: str) -> str:
    return f"{namespace}.{name}" if namespace else name


def candidate_type_names(namespace: str, name: str) -> List[str]:
    """Qualified names a type reference may denote, innermost namespace first.

    >>> candidate_type_names("Acme.Models", "Shared.Money")
    ['Acme.Models.Shared.Money', 'Acme.Shared.Money', 'Shared.Money']
    """
    candidates: List[str] = []
    parts = namespace.split(".") if namespace else []
    for end in range(len(parts), 0, -1):
        candidates.append(_qualify(".".join(parts[:end]), name))
    candidates.append(name)
    return candidates


def parse_type_string(text: str) -> CodeTypeRef:
    """Build an unbound type reference from its declared spelling.

    ``Foo[]`` becomes an array of ``Foo``; built-in names and C# aliases
    become their value kinds; every other name is a ``CODE_TYPE`` whose
    symbol is bound later (or never, for opaque types such as generic
    parameters and framework types outside the dump).
    """
    text = text.strip()
    if not text:
        raise SymbolGraphError("type name must not be empty")

    if text.endswith(ARRAY_SUFFIX):
        element = parse_type_string(text[: -len(ARRAY_SUFFIX)])
        return CodeTypeRef(
            kind=TypeKind.ARRAY,
            as_string=element.as_string + ARRAY_SUFFIX,
            element_type=element,
        )

    full_name = _TYPE_ALIASES.get(text, text)
    builtin = _BUILTIN_TYPE_KINDS.get(full_name)
    if builtin is not None:
        return CodeTypeRef(kind=builtin, as_string=full_name)
    return CodeTypeRef(kind=TypeKind.CODE_TYPE, as_string=full_name)


def _parse_attributes(raw: Any, ctx: str) -> List[CodeAttribute]:
    attributes: List[CodeAttribute] = []
    for item in _expect_list(raw, f"{ctx}.attributes"):
        if isinstance(item, str):
            attributes.append(CodeAttribute(name=item.strip()))
            continue
        attr_payload = _expect_dict(item, f"{ctx}.attributes entry")
        name = str(attr_payload.get("name", "")).strip()
        if not name:
            raise SymbolGraphError(f"{ctx}: attribute name is required")

        arguments: List[AttributeArgument] = []
        for arg in _expect_list(attr_payload.get("arguments"), f"{ctx}.{name}.arguments"):
            if isinstance(arg, dict):
                value = arg.get("value")
                arguments.append(
                    AttributeArgument(
                        name=str(arg.get("name") or ""),
                        value=None if value is None else str(value),
                    )
                )
            else:
                arguments.append(AttributeArgument(name="", value=str(arg)))
        attributes.append(CodeAttribute(name=name, arguments=arguments))
    return attributes


def _parse_getter(prop_payload: Dict[str, Any], ctx: str) -> Optional[Getter]:
    if "getter" not in prop_payload:
        return Getter()
    raw = prop_payload["getter"]
    if raw is None:
        return None
    getter_payload = _expect_dict(raw, f"{ctx}.getter")
    access_raw = str(getter_payload.get("access", "public")).strip().lower()
    try:
        access = Access(access_raw)
    except ValueError as exc:
        raise SymbolGraphError(f"{ctx}: unknown getter access '{access_raw}'") from exc
    return Getter(access=access, is_static=bool(getter_payload.get("static", False)))


class _GraphBuilder:
    """Accumulates symbols and unbound type references while parsing a dump."""

    def __init__(self, root: str) -> None:
        self.root = root
        self.types: Dict[str, TypeSymbol] = {}
        self.pending: List[_PendingRef] = []

    def _track(self, ref: CodeTypeRef, namespace: str) -> None:
        while ref is not None:
            if ref.kind is TypeKind.CODE_TYPE:
                self.pending.append(_PendingRef(ref=ref, namespace=namespace))
            ref = ref.element_type

    def _register(self, symbol: TypeSymbol) -> None:
        if symbol.full_name in self.types:
            raise SymbolGraphError(f"Duplicate type in symbol dump: {symbol.full_name}")
        self.types[symbol.full_name] = symbol

    def parse_property(
        self,
        raw: Any,
        namespace: str,
        owner: str,
        location: InfoLocation,
    ) -> Symbol:
        payload = _expect_dict(raw, f"{owner} member")
        name = str(payload.get("name", "")).strip()
        if not name:
            raise SymbolGraphError(f"{owner}: member name is required")
        ctx = f"{owner}.{name}"
        common = dict(
            name=name,
            full_name=_qualify(owner, name),
            info_location=location,
            attributes=_parse_attributes(payload.get("attributes"), ctx),
            doc_text=payload.get("doc"),
        )

        kind = str(payload.get("kind", "property")).strip().lower()
        if kind != "property":
            return CodeElement(**common)

        type_raw = payload.get("type")
        if not isinstance(type_raw, str):
            raise SymbolGraphError(f"{ctx}: property type must be a string")
        type_ref = parse_type_string(type_raw)
        self._track(type_ref, namespace)
        return CodeProperty(type=type_ref, getter=_parse_getter(payload, ctx), **common)

    def parse_element(
        self,
        raw: Any,
        namespace: str,
        file_names: List[str],
        location: InfoLocation = InfoLocation.PROJECT,
    ) -> Symbol:
        payload = _expect_dict(raw, "element")
        kind = str(payload.get("kind", "")).strip().lower()
        name = str(payload.get("name", "")).strip()
        if not name:
            raise SymbolGraphError(f"{kind or 'element'} in '{namespace}': name is required")
        full_name = _qualify(namespace, name)
        attributes = _parse_attributes(payload.get("attributes"), full_name)
        doc_text = payload.get("doc")

        if kind == "namespace":
            members = [
                self.parse_element(member, full_name, file_names, location)
                for member in _expect_list(payload.get("members"), f"{full_name}.members")
            ]
            return CodeNamespace(
                name=name,
                full_name=full_name,
                info_location=location,
                attributes=attributes,
                doc_text=doc_text,
                members=members,
            )

        if kind == "class":
            cls = CodeClass(
                name=name,
                full_name=full_name,
                info_location=location,
                attributes=attributes,
                doc_text=doc_text,
                file_names=list(file_names),
            )
            cls.members = [
                self.parse_property(member, namespace, full_name, location)
                for member in _expect_list(payload.get("properties"), f"{full_name}.properties")
            ]
            self._register(cls)
            return cls

        if kind == "enum":
            members: List[Symbol] = []
            for member in _expect_list(payload.get("members"), f"{full_name}.members"):
                member_payload = {"name": member} if isinstance(member, str) else _expect_dict(
                    member, f"{full_name} member"
                )
                member_name = str(member_payload.get("name", "")).strip()
                if not member_name:
                    raise SymbolGraphError(f"{full_name}: enum member name is required")
                members.append(
                    CodeEnumMember(
                        name=member_name,
                        full_name=_qualify(full_name, member_name),
                        info_location=location,
                        doc_text=member_payload.get("doc"),
                    )
                )
            enum = CodeEnum(
                name=name,
                full_name=full_name,
                info_location=location,
                attributes=attributes,
                doc_text=doc_text,
                members=members,
                file_names=list(file_names),
            )
            self._register(enum)
            return enum

        if kind == "other":
            return CodeElement(
                name=name,
                full_name=full_name,
                info_location=location,
                attributes=attributes,
                doc_text=doc_text,
            )

        raise SymbolGraphError(f"{full_name}: unknown element kind '{kind}'")

    def source_path(self, unit_path: str) -> str:
        return unit_path if os.path.isabs(unit_path) else os.path.join(self.root, unit_path)

    def bind_types(self) -> Tuple[int, int]:
        """Attach class/enum symbols to ``CODE_TYPE`` references.

        Names are looked up the way C# does: inside the declaring namespace,
        then each enclosing namespace outward, then as written.
        Returns ``(bound, opaque)`` counts.
        """
        bound = 0
        opaque = 0
        for pending in self.pending:
            ref = pending.ref
            symbol = None
            for candidate in candidate_type_names(pending.namespace, ref.as_string):
                symbol = self.types.get(candidate)
                if symbol is not None:
                    break
            if symbol is None:
                opaque += 1
                continue
            ref.code_type = symbol
            ref.as_string = symbol.full_name
            bound += 1
        return bound, opaque


def _resolve_root(payload: Dict[str, Any], dump_path: str) -> str:
    dump_dir = os.path.dirname(os.path.abspath(dump_path))
    raw_root = payload.get("root")
    if raw_root is None:
        return dump_dir
    root = str(raw_root).strip() or "."
    return root if os.path.isabs(root) else os.path.normpath(os.path.join(dump_dir, root))


def load_symbol_graph(path: str) -> SymbolGraph:
    """Load a symbol dump (YAML, or JSON by suffix) into a ``SymbolGraph``.

    Args:
        path: Path to the dump file.

    Returns:
        The project's compilation units with all type references bound.

    Raises:
        FileNotFoundError: If the dump does not exist.
        SymbolGraphError: If the dump is malformed.
    """
    payload = _load_dump_payload(path)
    project = str(payload.get("project", "")).strip()
    if not project:
        raise SymbolGraphError("project is required")

    root = _resolve_root(payload, path)
    builder = _GraphBuilder(root)

    units: List[CompilationUnit] = []
    seen_paths: set[str] = set()
    for raw_unit in _expect_list(payload.get("units"), "units"):
        unit_payload = _expect_dict(raw_unit, "unit")
        unit_path = str(unit_payload.get("path", "")).strip()
        if not unit_path:
            raise SymbolGraphError("unit.path is required")
        if unit_path in seen_paths:
            raise SymbolGraphError(f"Duplicate unit path in symbol dump: {unit_path}")
        seen_paths.add(unit_path)

        source_file = builder.source_path(unit_path)
        if unit_payload.get("elements") is None:
            units.append(CompilationUnit(path=unit_path, code_elements=None))
            continue

        elements = [
            builder.parse_element(element, "", [source_file])
            for element in _expect_list(unit_payload["elements"], f"{unit_path}.elements")
        ]
        units.append(CompilationUnit(path=unit_path, code_elements=elements))

    for raw_external in _expect_list(payload.get("external_types"), "external_types"):
        external_payload = _expect_dict(raw_external, "external type")
        namespace = str(external_payload.get("namespace", "")).strip()
        builder.parse_element(external_payload, namespace, [], InfoLocation.EXTERNAL)

    bound, opaque = builder.bind_types()
    logger.info(
        "Loaded symbol graph '%s': %d units, %d types, %d bound references, %d opaque",
        project,
        len(units),
        len(builder.types),
        bound,
        opaque,
    )
    return SymbolGraph(project=project, root=root, units=units, types=builder.types)
