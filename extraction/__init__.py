"""
Type-model extraction engine.

Turns a compilation unit's symbol model into exported type descriptors:
attribute-driven naming, getter/ignore visibility, cycle-safe inlining of
referenced class shapes and cross-references to sibling generated types.
"""

from extraction.config import ExtractionOptions, load_extraction_options
from extraction.models import PropertyDescriptor, TypeDescriptor, TypeRef
from extraction.naming import resolve_namespace, resolve_property_name
from extraction.documentation import DocParseResult, extract_summary, parse_summary
from extraction.traversal import TypePath, collect_properties, is_primitive, resolve_type
from extraction.extractor import (
    ExtractionStats,
    extract_project,
    extract_to_dict_list,
    extract_type_model,
)

__all__ = [
    # Options
    "ExtractionOptions",
    "load_extraction_options",
    # Data models
    "PropertyDescriptor",
    "TypeDescriptor",
    "TypeRef",
    # Naming and documentation
    "resolve_namespace",
    "resolve_property_name",
    "DocParseResult",
    "extract_summary",
    "parse_summary",
    # Traversal
    "TypePath",
    "collect_properties",
    "is_primitive",
    "resolve_type",
    # High-level orchestration
    "ExtractionStats",
    "extract_project",
    "extract_to_dict_list",
    "extract_type_model",
]
