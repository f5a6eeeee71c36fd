"""
A hand-rolled scanner for C-family looking text. No frills. Plenty useful.

It knows about:
	* whitespace, which it skips;
	* // line comments and /* block comments */, which come out as COMMENT tokens (omitted by default);
	* single-character operators from a configurable set;
	* decimal numbers, with an optional fractional part;
	* identifiers, some of which are keywords (also configurable);
	* strings in single or double quotes, on one line, with backslash escapes.
The text of a string token excludes its quotes and has its escapes resolved.
"""

from ..support.interfaces import TokenKind, Token, DEFAULT_KIND_NAMES
from .engine import Scanner

DEFAULT_OPERATORS = frozenset('+-*/.\\:%|!?#&;,()<>{}[]=')

DEFAULT_KEYWORDS = frozenset('''
	if function const for switch break instanceof with yield void this in goto
	import default debugger continue async await delete let else while class
	export private public var new return try catch typeof
'''.split())

QUOTES = '\'"'

def _is_word_start(c): return c == '_' or ('a' <= c <= 'z') or ('A' <= c <= 'Z')
def _is_word_part(c): return _is_word_start(c) or _is_digit(c)
def _is_digit(c): return '0' <= c <= '9'


class SimpleScanner(Scanner):
	def __init__(self, *, operators=DEFAULT_OPERATORS, keywords=DEFAULT_KEYWORDS, kind_names=None, omit=(TokenKind.COMMENT,)):
		self.operators = frozenset(operators)
		self.keywords = frozenset(keywords)
		super().__init__(kind_names=DEFAULT_KIND_NAMES if kind_names is None else kind_names, omit=omit)

	def __peek(self, offset=0):
		at = self.right + offset
		return self.text[at] if at < len(self.text) else ''

	def __run(self, offset, predicate) -> int:
		""" Return the offset (relative to self.right) of the first character not satisfying the predicate. """
		while predicate(self.__peek(offset)): offset += 1
		return offset

	def next_token(self) -> Token:
		while self.has_more():
			c = self.__peek()
			if c.isspace():
				self.skip(self.__run(1, str.isspace))
			elif c == '/' and self.__peek(1) == '/':
				return self.__line_comment()
			elif c == '/' and self.__peek(1) == '*':
				return self.__block_comment()
			elif c in self.operators:
				return self.emit(TokenKind.OPERATOR, 1)
			elif _is_digit(c):
				return self.__number()
			elif _is_word_start(c):
				width = self.__run(1, _is_word_part)
				word = self.text[self.right:self.right+width]
				return self.emit(TokenKind.KEYWORD if word in self.keywords else TokenKind.IDENT, width)
			elif c in QUOTES:
				return self.__string(c)
			else:
				self.blocked('INITIAL')
		return self.end_of_text()

	def __line_comment(self):
		end = self.text.find('\n', self.right)
		if end < 0: end = len(self.text)
		return self.emit(TokenKind.COMMENT, end - self.right)

	def __block_comment(self):
		end = self.text.find('*/', self.right+2)
		if end < 0: self.blocked('block comment')
		return self.emit(TokenKind.COMMENT, end + 2 - self.right)

	def __number(self):
		width = self.__run(1, _is_digit)
		if self.__peek(width) == '.' and _is_digit(self.__peek(width+1)):
			width = self.__run(width+1, _is_digit)
		return self.emit(TokenKind.NUMBER, width)

	def __string(self, quote):
		content, offset = [], 1
		while True:
			c = self.__peek(offset)
			if c in ('', '\n', '\r'): self.blocked('string')
			if c == quote: break
			if c == '\\':
				offset += 1
				c = self.__peek(offset)
				if c == '': self.blocked('string')
			content.append(c)
			offset += 1
		return self.emit(TokenKind.STRING, offset+1, ''.join(content))
