"""
Everything that can go wrong, and how it gets explained.

Checks do not raise at the first sign of trouble. Instead they record
issues on a Report, and the Report raises once the check is finished,
so that one exception explains every problem the check found.
The kind of exception is decided by the first issue.
"""
import os, sys
from inspect import isroutine
from typing import Any, Sequence
from boozetools.support.failureprone import illustration

MAX_ISSUES = 10

verbosity = int(os.environ.get("SUMTAG_VERBOSE") or 0)

def set_verbosity(level:int):
	""" Reports made after this call print their trace at the given level. """
	global verbosity
	verbosity = level or 0

class SumTagError(Exception):
	""" Base class. The issues that provoked the exception ride along in `issues`. """
	def __init__(self, message:str, issues:Sequence["Issue"]=()):
		super().__init__(message)
		self.issues = list(issues)

class InvalidArgument(SumTagError, TypeError):
	""" Something was handed in that is the wrong kind of thing. """

class DuplicateDefinition(SumTagError, ValueError):
	""" Two things want to be the same tag, or the same name. """

class InvalidOperation(SumTagError):
	""" Something was used against its contract. """

def render(item:Any) -> str:
	if isroutine(item): return item.__name__
	return repr(item)

class Listing:
	"""
	A one-line picture of a list (of tags, clauses, or names)
	which knows where each element sits, so that an issue
	can point at exactly the guilty element.
	"""
	def __init__(self, items:Sequence):
		self.spans = []
		text = "["
		for i, item in enumerate(items):
			if i: text += ", "
			word = render(item)
			self.spans.append((len(text), len(word)))
			text += word
		self.text = text + "]"

	def illustrate(self, position:int, caption:str="") -> str:
		col, width = self.spans[position]
		return illustration(self.text, col, width, prefix='% 6d |' % position, caption=caption)

class Issue:
	def __init__(self, kind:type[SumTagError], intro:str, pictures:Sequence[str]=(), footer:Sequence[str]=()):
		self.kind = kind
		self._intro, self._pictures, self._footer = intro, list(pictures), footer

	def __repr__(self): return "<%s: %s>"%(self.kind.__name__, self._intro)

	def as_text(self):
		lines = [self._intro]
		lines.extend(self._pictures)
		lines.extend(self._footer)
		return '\n'.join(lines)

class Report:
	""" Collects issues during a check, then raises about all of them together. """
	_issues : list[Issue]

	def __init__(self, *, verbose:int=None, max_issues:int=None):
		self._verbose = verbosity if verbose is None else verbose
		self._max_issues = max_issues or MAX_ISSUES
		self._issues = []

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	def issue(self, it:Issue):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise self.exception()

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def trace(self, *args):
		if self._verbose > 1:
			print(*args, file=sys.stderr)

	def exception(self) -> SumTagError:
		assert self._issues
		kind = self._issues[0].kind
		text = "\n".join(i.as_text() for i in self._issues)
		return kind(text, self._issues)

	def raise_if_sick(self):
		""" Does what it says on the tin """
		if self._issues:
			raise self.exception()

	# Methods the tag factory calls:

	def display_name_not_a_string(self, name):
		self.issue(Issue(InvalidArgument, "A display name must be a string, not %r." % (name,)))

	# Methods the union factory calls:

	def not_a_list(self, what:str, culprit):
		intro = "The %s must be an array (a list or tuple), not %s." % (what, type(culprit).__name__)
		self.issue(Issue(InvalidArgument, intro))

	def invalid_tag(self, listing:Listing, position:int):
		intro = "Invalid Tag at position %d." % position
		self.issue(Issue(InvalidArgument, intro, [listing.illustrate(position, "not a Tag")]))

	def duplicate_tag(self, listing:Listing, first:int, again:int):
		intro = "Duplicate Tag: the same tag appears at positions %d and %d." % (first, again)
		pictures = [listing.illustrate(first, "First"), listing.illustrate(again, "Not First")]
		self.issue(Issue(DuplicateDefinition, intro, pictures))

	def duplicate_display_name(self, listing:Listing, name:str, first:int, again:int):
		intro = "Two different tags share the display name %r." % name
		pictures = [listing.illustrate(first, "First"), listing.illustrate(again, "Not First")]
		footer = ["Within a union, each display name must be unique."]
		self.issue(Issue(DuplicateDefinition, intro, pictures, footer))

	# Methods the named-union factory calls:

	def name_not_a_string(self, listing:Listing, position:int):
		intro = "Each name must be a string; position %d is not." % position
		self.issue(Issue(InvalidArgument, intro, [listing.illustrate(position)]))

	def reserved_name(self, listing:Listing, position:int, name:str):
		intro = "The name %r is reserved: a union already has an attribute by that name." % name
		self.issue(Issue(DuplicateDefinition, intro, [listing.illustrate(position)]))

	def duplicate_name(self, listing:Listing, name:str, first:int, again:int):
		intro = "The name %r is defined more than once." % name
		pictures = [listing.illustrate(first, "Earliest definition"), listing.illustrate(again)]
		self.issue(Issue(DuplicateDefinition, intro, pictures))

	def not_a_mapping(self, culprit):
		intro = "Named handlers must come in a mapping from name to handler, not %s." % type(culprit).__name__
		self.issue(Issue(InvalidArgument, intro))

	def not_a_name_of(self, name, union):
		intro = "The name %r is not in this union %r." % (name, union)
		self.issue(Issue(InvalidOperation, intro))

	# Methods the match-checker calls:

	def clause_not_a_tag(self, listing:Listing, position:int):
		intro = "In a match clause, the type must be a Tag."
		self.issue(Issue(InvalidArgument, intro, [listing.illustrate(position, "not a Tag")]))

	def handler_not_callable(self, listing:Listing, position:int, tag):
		intro = "The handler for %s must be a function." % render(tag)
		self.issue(Issue(InvalidArgument, intro, [listing.illustrate(position, "not callable")]))

	def catch_all_not_callable(self, listing:Listing, position:int):
		intro = "The catch-all must be a function."
		self.issue(Issue(InvalidArgument, intro, [listing.illustrate(position, "not callable")]))

	def covered_twice(self, listing:Listing, tag, first:int, again:int):
		intro = "The type %r is listed twice, but a type can only be covered by one clause." % tag
		pictures = [listing.illustrate(first, "First"), listing.illustrate(again, "Not First")]
		self.issue(Issue(InvalidOperation, intro, pictures))

	def not_a_case_of(self, listing:Listing, position:int, tag, union):
		intro = "The type %r is not in this union %r." % (tag, union)
		self.issue(Issue(InvalidOperation, intro, [listing.illustrate(position)]))

	def not_exhaustive(self, union, missing:Sequence):
		intro = "Not all cases are covered in this match over %r, and it lacks a catch-all." % union
		footer = ["Missing: " + ", ".join(map(repr, missing))]
		self.issue(Issue(InvalidOperation, intro, (), footer))

	def redundant_else(self, listing:Listing, position:int, union):
		intro = "All cases are covered in this match over %r, so the catch-all cannot happen." % union
		footer = ["That's probably an oversight."]
		self.issue(Issue(InvalidOperation, intro, [listing.illustrate(position, "cannot happen")], footer))
