"""
Descriptor models produced by type-model extraction.

Descriptors are immutable once built; sequences are tuples. ``to_dict``
renders the camelCase mapping handed to serializers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class TypeRef:
    """The exported view of a property's declared type.

    Attributes:
        source_type_name: Fully-qualified type name as declared (element type
            name for arrays).
        is_array: Declared as an array, or a collection type.
        cross_reference_name: ``namespace.name`` of a sibling generated type,
            when one exists for a project-local class or enum.
        shape: Inlined properties of a class type; ``None`` for primitives,
            collections, enums and cyclic occurrences.
    """

    source_type_name: str
    is_array: bool = False
    cross_reference_name: Optional[str] = None
    shape: Optional[Tuple["PropertyDescriptor", ...]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sourceTypeName": self.source_type_name,
            "isArray": self.is_array,
            "crossReferenceName": self.cross_reference_name,
            "shape": None if self.shape is None else [p.to_dict() for p in self.shape],
        }


@dataclass(frozen=True)
class PropertyDescriptor:
    """One exported property (or enum member, with ``type`` left ``None``)."""

    name: str
    type: Optional[TypeRef] = None
    summary: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": None if self.type is None else self.type.to_dict(),
            "summary": self.summary,
        }


@dataclass(frozen=True)
class TypeDescriptor:
    """One exported class or enum.

    Attributes:
        name: Simple type name.
        full_name: Fully-qualified name, unique within a project.
        namespace: Export module the type is generated into.
        is_enum: Enum descriptors list member names only.
        summary: Short documentation text, if any.
        properties: Exported properties in declaration order; never empty.
    """

    name: str
    full_name: str
    namespace: str
    is_enum: bool = False
    summary: Optional[str] = None
    properties: Tuple[PropertyDescriptor, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the descriptor to a dictionary suitable for JSON serialization."""
        return {
            "name": self.name,
            "fullName": self.full_name,
            "namespace": self.namespace,
            "isEnum": self.is_enum,
            "summary": self.summary,
            "properties": [p.to_dict() for p in self.properties],
        }
