"""
High-level orchestrator for type-model extraction.

This module provides the main entry points for extracting type descriptors
from a single compilation unit or from every unit of a symbol graph.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from extraction.config import ExtractionOptions
from extraction.documentation import extract_summary
from extraction.models import PropertyDescriptor, TypeDescriptor
from extraction.naming import resolve_namespace
from extraction.traversal import TypePath, collect_properties
from symbols.model import CodeClass, CodeEnum, CompilationUnit, SymbolKind

logger = logging.getLogger(__name__)

_TYPE_KINDS = frozenset({SymbolKind.CLASS, SymbolKind.ENUM})


class ExtractionStats:
    """Statistics for an extraction operation."""

    def __init__(self):
        self.units_processed = 0
        self.units_skipped = 0
        self.units_failed = 0
        self.types_extracted = 0

    def to_dict(self) -> Dict[str, int]:
        """Convert stats to dictionary."""
        return {
            "units_processed": self.units_processed,
            "units_skipped": self.units_skipped,
            "units_failed": self.units_failed,
            "types_extracted": self.types_extracted,
        }

    def __str__(self) -> str:
        return (
            f"ExtractionStats(processed={self.units_processed}, "
            f"skipped={self.units_skipped}, failed={self.units_failed}, "
            f"types={self.types_extracted})"
        )


def _namespace_for(symbol, options: ExtractionOptions) -> str:
    return resolve_namespace(
        symbol.attributes,
        default=options.default_module_name,
        marker=options.module_attribute_marker,
    )


def build_enum_descriptor(
    enum: CodeEnum,
    options: Optional[ExtractionOptions] = None,
) -> Optional[TypeDescriptor]:
    """Build the descriptor of an enum; members become untyped properties.

    Returns:
        The descriptor, or None if the enum has no members.
    """
    options = options or ExtractionOptions()
    properties = tuple(PropertyDescriptor(name=member.name) for member in enum.members)
    if not properties:
        logger.debug("Skipping enum %s: no members", enum.full_name)
        return None

    return TypeDescriptor(
        name=enum.name,
        full_name=enum.full_name,
        namespace=_namespace_for(enum, options),
        is_enum=True,
        summary=extract_summary(enum),
        properties=properties,
    )


def build_class_descriptor(
    cls: CodeClass,
    options: Optional[ExtractionOptions] = None,
) -> Optional[TypeDescriptor]:
    """Build the descriptor of a class from its exported properties.

    Returns:
        The descriptor, or None if no property is exported.
    """
    options = options or ExtractionOptions()
    properties = tuple(collect_properties(cls.members, TypePath(), options))
    if not properties:
        logger.debug("Skipping class %s: no exported properties", cls.full_name)
        return None

    return TypeDescriptor(
        name=cls.name,
        full_name=cls.full_name,
        namespace=_namespace_for(cls, options),
        summary=extract_summary(cls),
        properties=properties,
    )


def _build_descriptor(symbol, options: ExtractionOptions) -> Optional[TypeDescriptor]:
    if symbol.kind is SymbolKind.ENUM:
        return build_enum_descriptor(symbol, options)
    if symbol.kind is SymbolKind.CLASS:
        return build_class_descriptor(symbol, options)
    return None


def _top_level_types(elements: Iterable) -> Iterable:
    """Yield class/enum symbols at file level and directly inside file-level namespaces.

    Namespaces nested inside a namespace are not entered.
    """
    for element in elements:
        if element.kind is SymbolKind.NAMESPACE:
            for member in element.members:
                if member.kind in _TYPE_KINDS:
                    yield member
        elif element.kind in _TYPE_KINDS:
            yield element


def extract_type_model(
    unit: CompilationUnit,
    options: Optional[ExtractionOptions] = None,
) -> Optional[List[TypeDescriptor]]:
    """Extract type descriptors from one compilation unit.

    Args:
        unit: The unit's symbol model.
        options: Extraction options; defaults apply when omitted.

    Returns:
        Descriptors in declaration order, or None if the unit has no symbol
        model (as opposed to an empty list for a code file with nothing to
        export).

    Raises:
        Exception: Whatever the symbol provider raises is propagated.

    Example:
        >>> descriptors = extract_type_model(unit)
        >>> [d.full_name for d in descriptors or []]
        ['Acme.Models.Customer']
    """
    if unit.code_elements is None:
        return None

    options = options or ExtractionOptions()
    descriptors: List[TypeDescriptor] = []
    for symbol in _top_level_types(unit.code_elements):
        descriptor = _build_descriptor(symbol, options)
        if descriptor is not None:
            descriptors.append(descriptor)

    logger.debug("Extracted %d types from %s", len(descriptors), unit.path)
    return descriptors


def extract_project(
    units: Iterable[CompilationUnit],
    options: Optional[ExtractionOptions] = None,
    continue_on_error: bool = True,
) -> tuple[List[TypeDescriptor], ExtractionStats]:
    """Extract type descriptors from every compilation unit of a project.

    Args:
        units: Compilation units to process, in order.
        options: Extraction options; defaults apply when omitted.
        continue_on_error: If True, log and count a unit whose provider fails
            and move on. If False, raise on the first failure.

    Returns:
        A tuple of (descriptors, stats).
    """
    options = options or ExtractionOptions()
    stats = ExtractionStats()
    all_descriptors: List[TypeDescriptor] = []

    for unit in units:
        try:
            descriptors = extract_type_model(unit, options)
        except Exception as e:
            logger.error("Unexpected error processing %s: %s", unit.path, e, exc_info=True)
            stats.units_failed += 1
            if not continue_on_error:
                raise
            continue

        if descriptors is None:
            logger.debug("No symbol model for %s", unit.path)
            stats.units_skipped += 1
            continue

        all_descriptors.extend(descriptors)
        stats.units_processed += 1
        stats.types_extracted += len(descriptors)

    logger.info("Extraction complete: %s", stats)
    return all_descriptors, stats


def extract_to_dict_list(
    units: Iterable[CompilationUnit],
    options: Optional[ExtractionOptions] = None,
) -> List[Dict[str, Any]]:
    """Extract descriptors and return them as JSON-ready dictionaries."""
    descriptors, _ = extract_project(units, options)
    return [descriptor.to_dict() for descriptor in descriptors]
