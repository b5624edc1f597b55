"""
A union closes over a fixed set of tags.
It can tell whether a value belongs to it, and it can dispatch a value
to the one clause which handles that value's tag.

Match clauses come as a flat list: tag, handler, tag, handler, ...
optionally followed by a lone catch-all. Before anything is dispatched,
the clause list is checked for typos, duplicates, strays, and
exhaustiveness. A catch-all alongside a complete set of clauses
is also an error, since it can never run.
"""
from typing import Any, Callable, Iterator, Mapping, Optional, Sequence
from .diagnostics import Report, Listing, InvalidOperation, render
from .space import Layer, AlreadyExists
from .tagging import Tag, Tagged

DISPATCH = dict[Tag, Callable]

def _is_list(x) -> bool:
	return isinstance(x, (list, tuple))

class Union:
	""" A closed set of tags. Values come from the member tags, never from the union itself. """
	_tags: tuple[Tag, ...]
	_members: frozenset[Tag]

	def __init__(self, tags:Sequence[Tag]):
		report = Report()
		if not _is_list(tags):
			report.not_a_list("tags of a union", tags)
			report.raise_if_sick()
		listing = Listing(tags)
		seen : dict[Tag, int] = {}
		display_names = Layer()
		for i, t in enumerate(tags):
			if not isinstance(t, Tag):
				report.invalid_tag(listing, i)
			elif t in seen:
				report.duplicate_tag(listing, seen[t], i)
			else:
				seen[t] = i
				if t.display_name is None: continue
				try: display_names.mount(t.display_name, i, t)
				except AlreadyExists:
					first = display_names.locate(t.display_name)
					report.duplicate_display_name(listing, t.display_name, first, i)
		report.raise_if_sick()
		self._tags = tuple(tags)
		self._members = frozenset(self._tags)
		report.info("Closed %r over %d tag(s)." % (self, len(self._tags)))

	def __repr__(self):
		return "<%s>" % "|".join(map(repr, self._tags))

	def __call__(self, *args, **kwargs):
		raise InvalidOperation("A union cannot be created directly. Call one of its tags instead: %r" % (self,))

	def __len__(self): return len(self._tags)
	def __iter__(self) -> Iterator[Tag]: return iter(self._tags)

	@property
	def tags(self) -> tuple[Tag, ...]:
		return self._tags

	def has(self, value:Any) -> bool:
		""" Was this value made by one of the member tags? """
		return isinstance(value, Tagged) and value.tag in self._members

	def match(self, value:Any, clauses:Sequence):
		"""
		Dispatch value to the handler listed after its tag, with the
		payload spread as positional arguments. If no clause lists the
		value's tag, the catch-all gets called with no arguments.
		"""
		report = Report()
		dispatch, otherwise = self._check_clauses(clauses, report)
		return self._dispatch(value, dispatch, otherwise, report)

	def _check_clauses(self, clauses:Sequence, report:Report) -> tuple[DISPATCH, Optional[Callable]]:
		if not _is_list(clauses):
			report.not_a_list("clauses of a match", clauses)
			report.raise_if_sick()
		listing = Listing(clauses)
		paired = len(clauses) - len(clauses) % 2

		dispatch : DISPATCH = {}
		seen : dict[Tag, int] = {}
		for i in range(0, paired, 2):
			t, handler = clauses[i], clauses[i+1]
			if not isinstance(t, Tag):
				report.clause_not_a_tag(listing, i)
			elif t in seen:
				report.covered_twice(listing, t, seen[t], i)
			else:
				seen[t] = i
				if t in self._members: dispatch[t] = handler
				else: report.not_a_case_of(listing, i, t, self)
			if not callable(handler):
				report.handler_not_callable(listing, i+1, t)

		if paired < len(clauses):
			otherwise = clauses[-1]
			if not callable(otherwise):
				report.catch_all_not_callable(listing, paired)
		else:
			otherwise = None

		# Exhaustiveness only makes sense once the clauses themselves are sane.
		report.raise_if_sick()
		missing = [t for t in self._tags if t not in dispatch]
		if otherwise is None and missing: report.not_exhaustive(self, missing)
		if otherwise is not None and not missing: report.redundant_else(listing, paired, self)
		report.raise_if_sick()
		return dispatch, otherwise

	def _dispatch(self, value:Any, dispatch:DISPATCH, otherwise:Optional[Callable], report:Report):
		if not self.has(value):
			raise InvalidOperation("%r is not a value of this union %r." % (value, self))
		if value.tag in dispatch:
			report.trace("Dispatching %r to %s" % (value, render(dispatch[value.tag])))
			return value.tag.unwrap(value, dispatch[value.tag])
		report.trace("Dispatching %r to the catch-all" % (value,))
		return otherwise()


class NamedUnion(Union):
	"""
	A union which mints its own tags, one per name.
	Each tag is exposed as an attribute by the same name,
	so a name may not shadow anything a union already has.
	"""
	_named: Layer[Tag]

	def __init__(self, names:Sequence[str]):
		report = Report()
		if not _is_list(names):
			report.not_a_list("names of a named union", names)
			report.raise_if_sick()
		listing = Listing(names)
		seen = Layer()
		for i, name in enumerate(names):
			if not isinstance(name, str):
				report.name_not_a_string(listing, i)
				continue
			try: seen.mount(name, i, name)
			except AlreadyExists: report.duplicate_name(listing, name, seen.locate(name), i)
		report.raise_if_sick()

		super().__init__([Tag(name) for name in names])
		self._named = Layer()
		for i, name in enumerate(names):
			if hasattr(self, name):
				report.reserved_name(listing, i, name)
		report.raise_if_sick()
		for i, t in enumerate(self._tags):
			self._named.mount(t.display_name, i, t)

	def __getattr__(self, name):
		# Only consulted after ordinary attribute lookup fails.
		try: named = self.__dict__["_named"]
		except KeyError: raise AttributeError(name) from None
		symbol = named.symbol(name)
		if symbol is None: raise AttributeError(name)
		return symbol

	def names(self) -> tuple[str, ...]:
		return tuple(self._named.each_key())

	def named_match(self, value:Any, handlers:Mapping[str, Callable], otherwise:Optional[Callable]=None):
		""" Same as match, but handlers come keyed by member name, and the catch-all separately. """
		report = Report()
		if not isinstance(handlers, Mapping):
			report.not_a_mapping(handlers)
			report.raise_if_sick()
		clauses = []
		for name, handler in handlers.items():
			t = self._named.symbol(name) if isinstance(name, str) else None
			if t is None: report.not_a_name_of(name, self)
			clauses.extend((t, handler))
		report.raise_if_sick()
		if otherwise is not None:
			clauses.append(otherwise)
		dispatch, otherwise = self._check_clauses(clauses, report)
		return self._dispatch(value, dispatch, otherwise, report)


def union(tags:Sequence[Tag]) -> Union:
	return Union(tags)

def named_union(names:Sequence[str]) -> NamedUnion:
	return NamedUnion(names)
