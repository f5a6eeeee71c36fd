import unittest
from syntaxer.support.interfaces import TokenKind, Position, ScannerBlocked, DEFAULT_KIND_NAMES
from syntaxer.scanning.simple import SimpleScanner
from syntaxer.scanning.miniscan import RegexScanner

def kinds_and_texts(scanner, text):
	return [(t.kind, t.text) for t in scanner.tokens(text)]

K = TokenKind

class TestSimpleScanner(unittest.TestCase):
	def setUp(self) -> None:
		self.scanner = SimpleScanner()

	def test_00_empty(self):
		tokens = list(self.scanner.tokens(''))
		self.assertEqual(1, len(tokens))
		self.assertTrue(tokens[0].is_eof())
		self.assertEqual(Position(1, 0, 0), tokens[0].position)

	def test_01_kinds(self):
		self.assertEqual(
			[
				(K.KEYWORD, 'if'), (K.OPERATOR, '('), (K.IDENT, 'x_1'), (K.OPERATOR, '>'), (K.NUMBER, '2.5'),
				(K.OPERATOR, ')'), (K.STRING, 'yes'), (K.OPERATOR, ';'), (K.EOF, ''),
			],
			kinds_and_texts(self.scanner, 'if (x_1 > 2.5) "yes";'),
		)

	def test_02_number_followed_by_dot(self):
		self.assertEqual([(K.NUMBER, '3'), (K.OPERATOR, '.'), (K.IDENT, 'x'), (K.EOF, '')], kinds_and_texts(self.scanner, '3.x'))

	def test_03_strings(self):
		for text, content in [
			("'a b'", 'a b'),
			(r'"say \"hi\""', 'say "hi"'),
			(r"'back\\slash'", 'back\\slash'),
			('""', ''),
		]:
			with self.subTest(text=text):
				self.assertEqual([(K.STRING, content), (K.EOF, '')], kinds_and_texts(self.scanner, text))

	def test_04_comments_are_omitted(self):
		text = 'a // comment\nb /* more\ncomment */ c'
		self.assertEqual(['a', 'b', 'c', ''], [t.text for t in self.scanner.tokens(text)])
		keep = SimpleScanner(omit=())
		self.assertEqual(
			[K.IDENT, K.COMMENT, K.IDENT, K.COMMENT, K.IDENT, K.EOF],
			[t.kind for t in keep.tokens(text)],
		)

	def test_05_positions(self):
		tokens = list(self.scanner.tokens('ab\n  cd /* x\n */ ef'))
		self.assertEqual(Position(1, 0, 0), tokens[0].position)
		self.assertEqual(Position(2, 2, 5), tokens[1].position)
		self.assertEqual(Position(3, 4, 17), tokens[2].position)
		self.assertEqual(Position(3, 6, 19), tokens[3].position)
		self.assertEqual('line 2, column 3', str(tokens[1].position))

	def test_06_blocked(self):
		for text, condition, index in [
			('a $ b', 'INITIAL', 2),
			('"open', 'string', 0),
			('"two\nlines"', 'string', 0),
			('x /* open', 'block comment', 2),
		]:
			with self.subTest(text=text):
				with self.assertRaises(ScannerBlocked) as cm:
					list(self.scanner.tokens(text))
				self.assertEqual(condition, cm.exception.condition)
				self.assertEqual(index, cm.exception.position.index)

	def test_07_configuration(self):
		s = SimpleScanner(operators='+', keywords={'let'})
		self.assertEqual([(K.KEYWORD, 'let'), (K.IDENT, 'if'), (K.OPERATOR, '+'), (K.EOF, '')], kinds_and_texts(s, 'let if +'))
		with self.assertRaises(ScannerBlocked):
			list(s.tokens('a - b'))
		self.assertEqual(DEFAULT_KIND_NAMES, s.kind_names)

	def test_08_reusable(self):
		self.assertEqual(['a', ''], [t.text for t in self.scanner.tokens('a')])
		second = list(self.scanner.tokens('\n b'))
		self.assertEqual(Position(2, 1, 2), second[0].position)


class TestRegexScanner(unittest.TestCase):
	def test_00_rank_then_length_then_order(self):
		s = RegexScanner()
		s.ignore(r'\s+')
		s.token('Word', r'\w+')
		s.token_map('Number', r'\d+', lambda text: text.lstrip('0') or '0', TokenKind.NUMBER, rank=1)
		s.token('Early', r'[a-z]{3}', TokenKind.KEYWORD)
		self.assertEqual(
			[
				(K.IDENT, 'abc'),  # Tie on length: Word is defined before Early.
				(K.NUMBER, '123'),
				(K.IDENT, 'def456'),  # Longest match beats the shorter one.
				(K.NUMBER, '7'),
				(K.EOF, ''),
			],
			kinds_and_texts(s, 'abc 00123 def456 007'),
		)
		self.assertEqual({'Word': K.IDENT, 'Number': K.NUMBER, 'Early': K.KEYWORD}, s.kind_names)

	def test_01_blocked(self):
		s = RegexScanner()
		s.token('Word', r'[a-z]+')
		with self.assertRaises(ScannerBlocked) as cm:
			list(s.tokens('ab cd'))
		self.assertEqual(Position(1, 2, 2), cm.exception.position)

	def test_02_zero_width_matches_do_not_count(self):
		s = RegexScanner()
		s.ignore(r'\s*')
		s.token('Word', r'[a-z]*')
		self.assertEqual([(K.IDENT, 'ab'), (K.IDENT, 'cd'), (K.EOF, '')], kinds_and_texts(s, 'ab cd'))
		with self.assertRaises(ScannerBlocked):
			list(s.tokens('ab 12'))

	def test_03_omit(self):
		s = RegexScanner(omit=(K.COMMENT,))
		s.ignore(r'\s+')
		s.token('Comment', r'#[^\n]*', K.COMMENT)
		s.token('Word', r'\w+')
		self.assertEqual(['a', 'b', ''], [t.text for t in s.tokens('a # note\nb')])

	def test_04_duplicate_rule_name(self):
		s = RegexScanner()
		s.token('Word', r'\w+')
		with self.assertRaises(AssertionError):
			s.token('Word', r'[a-z]+')


if __name__ == '__main__':
	unittest.main()
