"""
This file aggregates the abstract classes, data types, and exception types which Syntaxer deals in.

The parsing core never looks at characters. It deals in tokens, and it gets them from
whatever object satisfies the `Tokenizer` interface below. Two such tokenizers ship
in the `scanning` package, but nothing stops you writing a third: the core asks only
for a way to reset onto new text, a way to get the next token, and a table saying
which semantic kind-names (like "String" or "Number") a rule string may capture.

Errors come in two flavors which never mix:

* A grammar-compile error is a bug in somebody's rule strings. It's fatal and immediate.
* A failure to match is ordinary control data inside the engine. Only when nothing at
  all matches does it become a `ParseFailure` for the caller.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import NamedTuple, Optional, Iterator

from . import failureprone

class TokenKind(Enum):
	EOF = 'end-of-text'
	IDENT = 'identifier'
	COMMENT = 'comment'
	STRING = 'string'
	NUMBER = 'number'
	KEYWORD = 'keyword'
	WHITE = 'whitespace'
	OPERATOR = 'operator'

# The kind-names a rule string may capture by, as in "@String" or "@Number".
DEFAULT_KIND_NAMES = {
	'String': TokenKind.STRING,
	'Number': TokenKind.NUMBER,
	'Ident': TokenKind.IDENT,
	'Keyword': TokenKind.KEYWORD,
	'Operator': TokenKind.OPERATOR,
}

class Position(NamedTuple):
	""" Line is 1-based; column and index are 0-based. Same convention as failureprone.SourceText. """
	line: int
	column: int
	index: int

	def __str__(self): return "line %d, column %d"%(self.line, self.column+1)

class Token(NamedTuple):
	kind: TokenKind
	text: str
	position: Position

	def is_eof(self): return self.kind is TokenKind.EOF


class LanguageError(ValueError):
	""" Base class of all exceptions arising from the language machinery. """

class GrammarCompileError(LanguageError):
	"""
	Raised when a rule string is malformed. This is a grammar-authoring bug,
	so it is never caught by the backtracking machinery. Parameters are:
		a description of the problem,
		the raw rule string,
		the name of the field the rule belongs to,
		the character offset into the rule (or None if it's about the whole thing).
	"""
	def __init__(self, message, raw_rule, field, offset=None):
		super().__init__(message, raw_rule, field, offset)
		self.message, self.raw_rule, self.field, self.offset = message, raw_rule, field, offset

	def __str__(self):
		headline = "%s (field %r, rule %r)"%(self.message, self.field, self.raw_rule)
		if self.offset is None: return headline
		picture = failureprone.illustration(self.raw_rule, self.offset, 1, prefix='    ', caption="offset %d"%self.offset)
		return headline+"\n"+picture

class ScannerBlocked(LanguageError):
	"""
	Raised (by default) if a scanner gets blocked.
	Parameters are:
		the Position where it happened.
		the name of whatever the scanner was trying to do at the time.
	"""
	def __init__(self, position, condition):
		super().__init__(position, condition)
		self.position, self.condition = position, condition

class ParseFailure(LanguageError):
	"""
	Raised when no arrangement of the grammar matches the tokens.
	The position is that of the deepest failure seen during the attempt,
	because that is generally where the mistake in the text is.
	"""
	def __init__(self, position:Optional[Position], token:Optional[Token], message:str):
		super().__init__(position, token, message)
		self.position, self.token, self.message = position, token, message

	def __str__(self):
		if self.position is None: return self.message
		return "%s at %s"%(self.message, self.position)


class Tokenizer(ABC):
	"""
	The tokenizer contract, as consumed by the parsing core.

	Implementations must produce tokens strictly left to right, ending with an
	EOF-kind token which repeats forever once the text is exhausted.
	Each token knows its own position for the sake of error messages.
	"""

	kind_names: dict[str, TokenKind]
	omit: frozenset

	@abstractmethod
	def set_source(self, text:str):
		""" Start over on some new text, resetting line, column, and offset. """

	@abstractmethod
	def next_token(self) -> Token:
		""" Return the next token. Once exhausted, return an EOF token every time. """

	def tokens(self, text:str) -> Iterator[Token]:
		""" Yield the significant tokens of the text, up to and including the first EOF. """
		self.set_source(text)
		while True:
			token = self.next_token()
			if token.kind in self.omit: continue
			yield token
			if token.is_eof(): return
