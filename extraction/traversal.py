"""
Property selection and type resolution.

This module walks from a class's properties into the types they reference,
inlining the shape of referenced classes. Recursion is guarded by the set of
types on the current path, so cyclic references terminate while the same
type can still be expanded again in an unrelated branch.
"""

import logging
import os
from contextlib import contextmanager
from typing import Iterable, Iterator, List, Optional

from extraction.config import (
    COLLECTION_NAMESPACE_PREFIX,
    DATETIME_TYPE_MARKER,
    IGNORE_ATTRIBUTE_NAME,
    ExtractionOptions,
)
from extraction.documentation import extract_summary
from extraction.models import PropertyDescriptor, TypeRef
from extraction.naming import resolve_namespace, resolve_property_name
from symbols.model import (
    Access,
    CodeClass,
    CodeEnum,
    CodeProperty,
    CodeTypeRef,
    InfoLocation,
    TypeKind,
)

logger = logging.getLogger(__name__)

# Kinds that name a user type rather than a built-in value
_NAMED_TYPE_KINDS = frozenset({TypeKind.OTHER, TypeKind.CODE_TYPE})


class TypePath:
    """Fully-qualified names of the class types being expanded, outermost first.

    One instance belongs to one top-level class extraction. Entries are added
    and removed only through ``enter``.
    """

    def __init__(self) -> None:
        self._names: List[str] = []

    def __contains__(self, full_name: str) -> bool:
        return full_name in self._names

    def __len__(self) -> int:
        return len(self._names)

    @property
    def names(self) -> tuple:
        return tuple(self._names)

    @contextmanager
    def enter(self, full_name: str) -> Iterator[None]:
        if full_name in self._names:
            raise ValueError(f"{full_name} is already on the traversal path")
        self._names.append(full_name)
        try:
            yield
        finally:
            self._names.pop()


def is_exported_property(prop: CodeProperty) -> bool:
    """Check that a property has a public instance getter and is not ignored."""
    getter = prop.getter
    if getter is None or getter.is_static or getter.access is not Access.PUBLIC:
        return False
    return all(attr.name != IGNORE_ATTRIBUTE_NAME for attr in prop.attributes)


def is_primitive(type_ref: CodeTypeRef) -> bool:
    """Classify a type reference as primitive for export purposes.

    Built-in value kinds are primitive. ``DateTime`` is a named struct to the
    code model but exports as a primitive as well.
    """
    if type_ref.kind not in _NAMED_TYPE_KINDS:
        return True
    return type_ref.as_string.endswith(DATETIME_TYPE_MARKER)


def has_generated_artifact(symbol, extension: str) -> bool:
    """Check whether a generated definition file sits next to any of the symbol's source files."""
    return any(os.path.isfile(file_name + extension) for file_name in symbol.file_names)


def _cross_reference_name(type_ref: CodeTypeRef, options: ExtractionOptions) -> Optional[str]:
    """Name of the sibling generated type for a project-local class or enum."""
    symbol = type_ref.code_type
    if type_ref.kind is not TypeKind.CODE_TYPE or symbol is None:
        return None
    if symbol.info_location is not InfoLocation.PROJECT:
        return None

    # Class before enum
    for kind in (CodeClass, CodeEnum):
        if isinstance(symbol, kind) and has_generated_artifact(symbol, options.artifact_extension):
            namespace = resolve_namespace(
                symbol.attributes,
                default=options.default_module_name,
                marker=options.module_attribute_marker,
            )
            return f"{namespace}.{symbol.name}"
    return None


def resolve_type(
    type_ref: CodeTypeRef,
    path: TypePath,
    options: Optional[ExtractionOptions] = None,
) -> TypeRef:
    """Resolve a declared type into its exported ``TypeRef``.

    Args:
        type_ref: The declared type of a property.
        path: Class types currently being expanded above this property.
        options: Extraction options; defaults apply when omitted.

    Returns:
        The exported type, with an inline shape for class types that are
        neither primitive, collections, nor already on ``path``.
    """
    options = options or ExtractionOptions()

    is_array = type_ref.kind is TypeKind.ARRAY
    if is_array and type_ref.element_type is not None:
        type_ref = type_ref.element_type
    is_collection = type_ref.as_string.startswith(COLLECTION_NAMESPACE_PREFIX)

    symbol = type_ref.code_type
    shape = None
    if (
        not is_primitive(type_ref)
        and isinstance(symbol, CodeClass)
        and not is_collection
        and symbol.full_name not in path
    ):
        with path.enter(symbol.full_name):
            logger.debug("Expanding %s at depth %d", symbol.full_name, len(path))
            shape = tuple(collect_properties(symbol.members, path, options))

    return TypeRef(
        source_type_name=type_ref.as_string,
        is_array=is_array or is_collection,
        cross_reference_name=_cross_reference_name(type_ref, options),
        shape=shape,
    )


def collect_properties(
    members: Iterable,
    path: TypePath,
    options: Optional[ExtractionOptions] = None,
) -> List[PropertyDescriptor]:
    """Map a class's exported properties to descriptors, in declaration order.

    Args:
        members: The class's members; non-property members are skipped.
        path: Class types currently being expanded.
        options: Extraction options; defaults apply when omitted.

    Returns:
        Descriptors for every property passing ``is_exported_property``.
    """
    options = options or ExtractionOptions()
    properties: List[PropertyDescriptor] = []
    for member in members:
        if not isinstance(member, CodeProperty) or not is_exported_property(member):
            continue
        properties.append(
            PropertyDescriptor(
                name=resolve_property_name(member),
                type=resolve_type(member.type, path, options) if member.type is not None else None,
                summary=extract_summary(member),
            )
        )
    return properties
