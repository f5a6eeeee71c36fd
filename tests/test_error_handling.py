import unittest
from syntaxer.support.interfaces import GrammarCompileError, ParseFailure, ScannerBlocked, Position
from syntaxer.support import failureprone
from syntaxer.parsing.shape import Grammar
from syntaxer.runtime import Parser

SAMPLE = Grammar('sample')
SAMPLE.shape('Word').field('text', '@Ident')
SENTENCE = SAMPLE.shape('Sentence').field('words', "(@@)+ '.'", element='Word', many=True)

class RecordingParser(Parser):
	def __init__(self, shape, **kwargs):
		super().__init__(shape, **kwargs)
		self.complaints = []

	def log_error(self, *parts):
		self.complaints.append(' '.join(parts))

class TestParseFailures(unittest.TestCase):
	def setUp(self) -> None:
		self.parser = RecordingParser(SENTENCE)

	def test_00_success_logs_nothing(self):
		result = self.parser.parse('the cat sat .')
		self.assertEqual(['the', 'cat', 'sat'], [w.text for w in result.words])
		self.assertEqual([], self.parser.complaints)

	def test_01_empty(self):
		with self.assertRaises(ParseFailure) as cm:
			self.parser.parse('')
		self.assertTrue(cm.exception.token.is_eof())
		self.assertEqual("Unexpected end of text; expected Ident", cm.exception.message)
		self.assertEqual(1, len(self.parser.complaints))

	def test_02_deepest_failure_wins(self):
		with self.assertRaises(ParseFailure) as cm:
			self.parser.parse('the cat\nsat ; .')
		failure = cm.exception
		self.assertEqual(Position(2, 4, 12), failure.position)
		self.assertEqual(';', failure.token.text)
		self.assertEqual("Unexpected token ';'; expected Ident or '.'", failure.message)
		self.assertEqual("Unexpected token ';'; expected Ident or '.' at line 2, column 5", str(failure))
		complaint = self.parser.complaints[0]
		self.assertIn('line 2, column 5', complaint)
		self.assertIn('sat ; .', complaint)

	def test_03_leftovers(self):
		with self.assertRaises(ParseFailure) as cm:
			self.parser.parse('the end . more')
		self.assertEqual('more', cm.exception.token.text)
		self.assertIn('end of text', cm.exception.message)
		partial = RecordingParser(SENTENCE, complete=False)
		self.assertEqual(2, len(partial.parse('the end . more').words))

	def test_04_filename_in_complaint(self):
		with self.assertRaises(ParseFailure):
			self.parser.parse('.', filename='words.txt')
		self.assertTrue(self.parser.complaints[0].startswith('words.txt: line 1, column 1'))

	def test_05_scanner_blocked(self):
		with self.assertRaises(ScannerBlocked) as cm:
			self.parser.parse('the $cat .')
		self.assertEqual(4, cm.exception.position.index)
		self.assertIn("Lexical scan got stuck in condition 'INITIAL'", self.parser.complaints[0])


class TestCompileErrors(unittest.TestCase):
	def test_00_message_shows_the_spot(self):
		g = Grammar()
		s = g.shape('Broken').field('ok', '@Ident').field('bad', "'x' @Bogus")
		with self.assertRaises(GrammarCompileError) as cm:
			s.rules.root()
		ex = cm.exception
		self.assertEqual('bad', ex.field)
		self.assertEqual(5, ex.offset)
		lines = str(ex).splitlines()
		self.assertIn("field 'bad'", lines[0])
		self.assertEqual("    'x' @Bogus", lines[1])
		self.assertEqual("         ^ offset 5", lines[2])

	def test_01_errors_surface_through_parse(self):
		g = Grammar()
		s = g.shape('Broken').field('bad', "'a' | )")
		with self.assertRaises(GrammarCompileError):
			RecordingParser(s).parse('a')

	def test_02_compile_errors_are_not_parse_failures(self):
		self.assertFalse(issubclass(GrammarCompileError, ParseFailure))
		self.assertFalse(issubclass(ParseFailure, GrammarCompileError))


class TestIllustration(unittest.TestCase):
	def test_00_illustration(self):
		self.assertEqual("abc def\n    ^^^ here", failureprone.illustration("abc def\n", 4, 3, caption='here'))

	def test_01_source_text(self):
		source = failureprone.SourceText("one\r\ntwo\nthree")
		self.assertEqual((1, 0), source.find_row_col(0))
		self.assertEqual((2, 1), source.find_row_col(6))
		self.assertEqual((3, 2), source.find_row_col(11))
		self.assertEqual("two\n", source.line_of_text(2))
		self.assertEqual("At line 3, column 1: oops\n >>> three\n     ^ near here", source.complaint(slice(9, 10), "oops"))


if __name__ == '__main__':
	unittest.main()
