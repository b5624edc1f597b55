import io
import unittest
from unittest import mock

from sumtag import tag, diagnostics
from sumtag.diagnostics import Report, Listing, Issue, InvalidArgument, DuplicateDefinition
from sumtag.space import Layer, AlreadyExists

class ReportTests(unittest.TestCase):

	def test_healthy_report_does_not_raise(self):
		report = Report(verbose=0)
		self.assertTrue(report.ok())
		report.raise_if_sick()

	def test_first_issue_decides_the_exception(self):
		report = Report(verbose=0)
		report.issue(Issue(DuplicateDefinition, "first"))
		report.issue(Issue(InvalidArgument, "second"))
		self.assertTrue(report.sick())
		with self.assertRaises(DuplicateDefinition) as cm:
			report.raise_if_sick()
		self.assertEqual("first\nsecond", str(cm.exception))
		self.assertEqual([DuplicateDefinition, InvalidArgument], [i.kind for i in cm.exception.issues])

	def test_too_many_issues_raises_early(self):
		report = Report(verbose=0, max_issues=2)
		report.issue(Issue(InvalidArgument, "one"))
		with self.assertRaises(InvalidArgument):
			report.issue(Issue(InvalidArgument, "two"))

	def test_long_lists_give_up_after_max_issues(self):
		with self.assertRaises(InvalidArgument) as cm:
			tag.union(list(range(50)))
		self.assertEqual(diagnostics.MAX_ISSUES, len(cm.exception.issues))

	def test_info_is_quiet_unless_verbose(self):
		with mock.patch("sys.stderr", new_callable=io.StringIO) as err:
			Report(verbose=0).info("hush")
			Report(verbose=1).info("hello")
			Report(verbose=1).trace("too detailed")
			Report(verbose=2).trace("detail")
		self.assertEqual("hello\ndetail\n", err.getvalue())

	def test_verbosity_setting_applies_to_new_reports(self):
		before = diagnostics.verbosity
		try:
			diagnostics.set_verbosity(2)
			Foo, Bar = tag("Foo"), tag("Bar")
			with mock.patch("sys.stderr", new_callable=io.StringIO) as err:
				Msg = tag.union([Foo, Bar])
				Msg.match(Bar(), [Foo, lambda: 1, lambda: 2])
			self.assertIn("Closed <Foo|Bar> over 2 tag(s).", err.getvalue())
			self.assertIn("Dispatching Bar() to the catch-all", err.getvalue())
		finally:
			diagnostics.set_verbosity(before)


class ListingTests(unittest.TestCase):

	def test_listing_renders_each_item(self):
		Foo = tag("Foo")
		def handle(): pass
		listing = Listing([Foo, handle, 4, "x"])
		self.assertEqual("[Foo, handle, 4, 'x']", listing.text)
		self.assertEqual([(1, 3), (6, 6), (14, 1), (17, 3)], listing.spans)

	def test_complaint_shows_the_offending_list(self):
		Foo = tag("Foo")
		with self.assertRaises(InvalidArgument) as cm:
			tag.union([Foo, 4])
		self.assertIn("[Foo, 4]", str(cm.exception))


class LayerTests(unittest.TestCase):

	def test_layer_refuses_duplicates(self):
		layer = Layer()
		layer.mount("Foo", 0, "first")
		self.assertIn("Foo", layer)
		self.assertEqual("first", layer.symbol("Foo"))
		self.assertIsNone(layer.symbol("Bar"))
		with self.assertRaises(AlreadyExists):
			layer.mount("Foo", 3, "second")
		self.assertEqual(0, layer.locate("Foo"))
		self.assertEqual(1, len(layer))


if __name__ == '__main__':
	unittest.main()
