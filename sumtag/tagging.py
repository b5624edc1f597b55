"""
Tags are nominal constructors. Each one stamps out tagged values
which only that same tag will recognize. Identity is by object,
never by name: two tags called "Foo" are still two different tags.
"""
from itertools import count
from typing import Any, Callable, NamedTuple, Optional
from .diagnostics import Report, InvalidOperation

_serial_numbers = count()

class Tag:
	""" A nominal constructor. Call it to make a tagged value. """
	display_name: Optional[str]
	serial: int

	def __init__(self, display_name:Optional[str]=None):
		self.display_name = display_name
		self.serial = next(_serial_numbers)

	def __repr__(self):
		if self.display_name is None: return "<tag #%d>" % self.serial
		return self.display_name

	def __call__(self, *payload) -> "Tagged":
		return Tagged(self, payload)

	def is_(self, value:Any) -> bool:
		""" Was this value made by this very tag? (Spelled with an underscore because `is` is a keyword.) """
		return isinstance(value, Tagged) and value.tag is self

	def unwrap(self, value:Any, fn:Callable):
		if not self.is_(value):
			raise InvalidOperation("Cannot unwrap %r as %r: it was not made by that tag." % (value, self))
		return fn(*value.payload)

class Tagged(NamedTuple):
	tag: Tag
	payload: tuple

	def __repr__(self):
		return "%r(%s)" % (self.tag, ", ".join(map(repr, self.payload)))

def tag(display_name:Optional[str]=None) -> Tag:
	if display_name is not None and not isinstance(display_name, str):
		report = Report()
		report.display_name_not_a_string(display_name)
		report.raise_if_sick()
	return Tag(display_name)
