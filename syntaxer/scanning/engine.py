"""
Bookkeeping common to the scanners in this package.

Both scanners walk a cursor through the text, and for each token they recognize they
need the same things: the matched text, its slice, and its line and column. This keeps
that in one place. The interesting part (deciding how wide the next token is, and what
kind it has) is the business of the subclass.
"""
from ..support.interfaces import Tokenizer, Token, TokenKind, Position, ScannerBlocked

class Scanner(Tokenizer):
	"""
	Tracks `left` and `right` offsets bracketing the most recent match, plus the line and
	column of the right-hand offset. Subclasses implement `next_token` in terms of
	`skip(...)`, `emit(...)`, and `end_of_text()`.
	"""

	def __init__(self, *, kind_names, omit=()):
		self.kind_names = dict(kind_names)
		self.omit = frozenset(omit)
		self.set_source('')

	def set_source(self, text:str):
		self.text = text
		self.left = self.right = 0
		self.__line, self.__column = 1, 0

	def has_more(self):
		return self.right < len(self.text)

	def here(self) -> Position:
		""" Where scanning will next resume. """
		return Position(self.__line, self.__column, self.right)

	def slice(self):
		""" Return a slice-object corresponding to the extent of matched text. """
		return slice(self.left, self.right)

	def match(self):
		""" Return the actual matched text """
		return self.text[self.left:self.right]

	def skip(self, width:int) -> Position:
		""" Consume `width` characters as the current match. Return the position where the match began. """
		start = self.here()
		self.left, self.right = self.right, self.right + width
		passed = self.text[self.left:self.right]
		breaks = passed.count('\n')
		if breaks:
			self.__line += breaks
			self.__column = len(passed) - passed.rfind('\n') - 1
		else:
			self.__column += len(passed)
		return start

	def emit(self, kind:TokenKind, width:int, text:str=None) -> Token:
		""" Consume `width` characters and make a token of them. The token's text defaults to the matched text. """
		start = self.skip(width)
		return Token(kind, self.match() if text is None else text, start)

	def end_of_text(self) -> Token:
		self.left = self.right
		return Token(TokenKind.EOF, '', self.here())

	def blocked(self, condition:str):
		""" Complain that no token can be recognized at the current position. """
		raise ScannerBlocked(self.here(), condition)
