"""
Runtime-checked algebraic data types.

	from sumtag import tag

	Shape = tag.named_union(["Circle", "Square"])
	area = Shape.named_match(Shape.Circle(2.0), {
		"Circle": lambda r: 3.14159 * r * r,
		"Square": lambda s: s * s,
	})

A union groups tags, and matching over a union is checked
for exhaustiveness before anything gets dispatched.
"""

__version__ = "0.1.0"

from .diagnostics import SumTagError, InvalidArgument, DuplicateDefinition, InvalidOperation, set_verbosity
from .tagging import Tag, Tagged, tag
from .unions import Union, NamedUnion, union, named_union

tag.union = union
tag.named_union = named_union
