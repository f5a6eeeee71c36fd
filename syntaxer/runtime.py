"""
The public entry point: parse some text into a populated instance of a shape.

Most applications need similar things here: tokenize, match, complain politely when
the text is wrong, and hand back a filled-in object otherwise. The Parser class bundles
that, with error reporting you can override; `parse_source` is the one-liner.
"""

import sys

from .support import failureprone
from .support.interfaces import Tokenizer, ParseFailure, ScannerBlocked
from .parsing.cursor import TokenCursor, NotMatch
from .parsing.matcher import failed
from .parsing.shape import Shape

class Parser:
	"""
	Binds a shape to a tokenizer (by default, the shape's own) and reports failures.
	With `complete` set, the grammar must account for every token up to the end of the text.

	Grammars not yet compiled get compiled against the kind-names of the tokenizer in use,
	and that includes every shape first reached through `@@` along the way. A grammar is
	compiled only once, so later parses with a different tokenizer had better agree with it.
	"""

	source: failureprone.SourceText

	def __init__(self, shape:Shape, *, scanner:Tokenizer=None, complete=True):
		self.shape = shape
		self.scanner = scanner
		self.complete = complete

	def parse(self, text:str, *, filename:str=None, line_breaks='normal'):
		self.source = failureprone.SourceText(text, line_breaks=line_breaks, filename=filename)
		scanner = self.shape.scanner if self.scanner is None else self.scanner
		root = self.shape.rules.root(scanner.kind_names)
		try: cursor = TokenCursor.scan(scanner, text)
		except ScannerBlocked as ex:
			self.unexpected_character(ex)
			raise
		outcome = root.match(cursor)
		if self.complete and not failed(outcome) and not cursor.at_end():
			outcome = cursor.fail(cursor.save(), "expected end of text", "end of text")
		if failed(outcome):
			raise self.no_match(cursor, outcome)
		target = self.shape.new()
		outcome(target)
		return target

	def no_match(self, cursor:TokenCursor, outcome:NotMatch) -> ParseFailure:
		""" Describe the deepest failure, log it, and return the exception to raise. """
		token = cursor.deepest_token()
		found = "end of text" if token.is_eof() else "token %r"%token.text
		if cursor.expected: message = "Unexpected %s; expected %s"%(found, " or ".join(cursor.expected))
		else: message = outcome.message or "Unexpected %s"%found
		start = token.position.index
		self.log_error(self.source.complaint(slice(start, start+max(1, len(token.text))), message))
		return ParseFailure(token.position, token, message)

	def unexpected_character(self, ex:ScannerBlocked):
		start = ex.position.index
		self.log_error(self.source.complaint(slice(start, start+1), "Lexical scan got stuck in condition %r."%ex.condition))

	@staticmethod
	def log_error(*parts):
		""" Simple place to override if you'd rather use a logging framework. """
		print(*parts, file=sys.stderr)


def parse_source(shape:Shape, text:str, *, scanner:Tokenizer=None, complete=True, filename:str=None):
	"""
	Tokenize the text, build (once) the shape's grammar, match it from the first token,
	and return a fresh instance of the shape with the match applied.
	Raises ParseFailure, pointing at the deepest failure, if the text does not match.
	"""
	return Parser(shape, scanner=scanner, complete=complete).parse(text, filename=filename)
