"""
Constraint validator families.

Each family module exposes ``validate(graph, focus_node, property_shape)``
and, where the constraints apply to a focus node directly,
``validate_node(graph, focus_node, node_shape)``.
"""

from rdf_shapes.validators import (
    cardinality,
    qualified,
    sparql,
    string,
    type,
    value,
)

PROPERTY_VALIDATORS = (cardinality, type, string, value, qualified)
NODE_VALIDATORS = (type, string, value)

__all__ = [
    "cardinality",
    "qualified",
    "sparql",
    "string",
    "type",
    "value",
    "PROPERTY_VALIDATORS",
    "NODE_VALIDATORS",
]
