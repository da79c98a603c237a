"""
Export naming resolution.

Derives a type's export namespace and a property's export name from the
attributes attached to the symbol.
"""

import logging
from typing import Iterable, Mapping, Optional, Tuple

from extraction.config import (
    DEFAULT_MODULE_NAME,
    MODULE_ATTRIBUTE_MARKER,
    NAME_ATTRIBUTES,
)
from symbols.model import CodeAttribute, CodeProperty

logger = logging.getLogger(__name__)

_QUOTE = '"'


def attribute_simple_name(attribute_name: str) -> str:
    """Return the class-name portion of a possibly qualified attribute name.

    >>> attribute_simple_name("Newtonsoft.Json.JsonProperty")
    'JsonProperty'
    """
    return attribute_name.rsplit(".", 1)[-1]


def resolve_namespace(
    attributes: Optional[Iterable[CodeAttribute]],
    default: str = DEFAULT_MODULE_NAME,
    marker: str = MODULE_ATTRIBUTE_MARKER,
) -> str:
    """Resolve the export namespace of a class or enum.

    Every attribute whose name ends with ``marker`` (case-insensitive) is
    searched in order; the first argument whose unquoted value is not blank
    wins.

    Args:
        attributes: The type's attributes, or None if the provider has none.
        default: Namespace used when no attribute supplies one.
        marker: Attribute name suffix marking a namespace override.

    Returns:
        The export namespace.
    """
    if attributes is None:
        return default

    marker = marker.lower()
    for attribute in attributes:
        if not attribute.name.lower().endswith(marker):
            continue
        for argument in attribute.arguments:
            value = (argument.value or "").strip(_QUOTE)
            if value.strip():
                return value
    return default


def _unquote_literal(raw: str, owner: str) -> str:
    """Strip the quotes of a string literal argument.

    Only a value with a quote at both ends is treated as a literal. Anything
    else (a constant reference, ``nameof(...)``) cannot be evaluated here and
    is passed through with a warning.
    """
    if len(raw) >= 2 and raw[0] == _QUOTE and raw[-1] == _QUOTE:
        return raw[1:-1]
    logger.warning(
        "Name argument for %s is not a string literal (%r); using it verbatim",
        owner,
        raw,
    )
    return raw.strip()


def resolve_property_name(
    prop: CodeProperty,
    name_attributes: Mapping[str, Tuple[str, ...]] = NAME_ATTRIBUTES,
) -> str:
    """Resolve the exported name of a property.

    The first attribute listed in ``name_attributes`` decides: its first
    argument named as one of the candidates supplies the name. If that
    attribute has no such argument, later attributes are not consulted and
    the declared name is kept.
    """
    for attribute in prop.attributes:
        candidates = name_attributes.get(attribute_simple_name(attribute.name))
        if candidates is None:
            continue

        argument = next(
            (arg for arg in attribute.arguments if arg.name in candidates),
            None,
        )
        if argument is None or argument.value is None:
            break
        return _unquote_literal(argument.value, prop.full_name)

    return prop.name
