"""Field extraction: normalize a component schema into ``Field`` pairs.

The schema returned by the management API is a mapping from field name to a
field definition object.  Only the ``type`` attribute of each definition takes
part in comparisons; every other CMS attribute (``pos``, ``translatable``,
``display_name`` ...) is ignored.

Field order follows the mapping's insertion order.  No comparison depends on
it (all comparisons are set-like), so it only affects incidental ordering.
"""

from __future__ import annotations

from collections.abc import Mapping

from storyblok_analyzer.errors import SchemaFormatError
from storyblok_analyzer.models import Component, Field

__all__ = ["extract_fields"]


def extract_fields(component: Component) -> tuple[Field, ...]:
    """Return the ``(name, type)`` fields of ``component`` in schema order.

    Args:
        component: The component whose schema is normalized.

    Returns:
        A tuple of ``Field`` objects.  Empty when the schema is absent or
        empty (``None``, ``{}``, ``[]``).  A field definition without a
        ``type`` key yields ``Field(name, None)``.

    Raises:
        SchemaFormatError: If the schema, or one of its field definitions, is
            not a mapping.  An empty non-mapping schema is not an error.
    """
    schema = component.schema
    if not schema:
        return ()
    if not isinstance(schema, Mapping):
        msg = (
            f"schema of component {component.name!r} must be an object, "
            f"got {type(schema).__name__}"
        )
        raise SchemaFormatError(msg)

    fields: list[Field] = []
    for name, definition in schema.items():
        if not isinstance(definition, Mapping):
            msg = (
                f"field {name!r} of component {component.name!r} must be an "
                f"object, got {type(definition).__name__}"
            )
            raise SchemaFormatError(msg)
        fields.append(Field(name=str(name), type=definition.get("type")))
    return tuple(fields)
