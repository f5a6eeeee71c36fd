"""
The token cursor: a repositionable view over a fully-materialized token stream.

Backtracking is cheap because a checkpoint is just an index. The cursor is the only
mutable thing in play during a match, and it belongs to exactly one parse at a time.

The cursor also remembers the deepest point at which anything failed to match,
along with descriptions of what was wanted there. When a whole parse fails, that
is usually the most informative place to point a finger.
"""

from typing import NamedTuple, Optional, Iterable

from ..support.interfaces import Token, Position, Tokenizer

class NotMatch(NamedTuple):
	"""
	A local, recoverable failure to match: purely control data, not a program fault.
	`checkpoint` is where the cursor stood when the failing attempt began.
	"""
	checkpoint: int
	position: Optional[Position]
	message: str = ''

class TokenCursor:
	"""
	`kind_names`, if known, is the table of the tokenizer which made the tokens.
	A shape first reached while matching gets its grammar compiled against that table.
	"""
	def __init__(self, tokens:Iterable[Token], kind_names:dict=None):
		self.__tokens = list(tokens)
		assert self.__tokens and self.__tokens[-1].is_eof(), "A token stream must end with an EOF token."
		self.__index = 0
		self.furthest = 0
		self.expected = []
		self.kind_names = kind_names

	@classmethod
	def scan(cls, tokenizer:Tokenizer, text:str) -> "TokenCursor":
		return cls(tokenizer.tokens(text), tokenizer.kind_names)

	def __len__(self): return len(self.__tokens)

	def save(self) -> int:
		return self.__index

	def restore(self, checkpoint:int):
		assert 0 <= checkpoint <= len(self.__tokens), checkpoint
		self.__index = checkpoint

	def peek(self, n=0) -> Optional[Token]:
		""" Look `n` tokens ahead without moving. Returns None beyond the end of the stream. """
		at = self.__index + n
		return self.__tokens[at] if at < len(self.__tokens) else None

	def advance(self) -> Optional[Token]:
		""" Step past the current token. Return the new current token, if any. """
		if self.__index < len(self.__tokens): self.__index += 1
		return self.peek()

	def at_end(self) -> bool:
		token = self.peek()
		return token is None or token.is_eof()

	def position(self) -> Optional[Position]:
		token = self.peek()
		return None if token is None else token.position

	def fail(self, checkpoint:int, message:str='', expected:str=None) -> NotMatch:
		"""
		Build a NotMatch for an attempt which began at `checkpoint` and came to grief at the current token.
		If the failure says what it `expected`, that is noted against the current index,
		provided nothing has yet failed any deeper.
		"""
		if expected is not None:
			if self.__index > self.furthest:
				self.furthest, self.expected = self.__index, []
			if self.__index == self.furthest and expected not in self.expected:
				self.expected.append(expected)
		return NotMatch(checkpoint, self.position(), message)

	def deepest_token(self) -> Optional[Token]:
		at = self.furthest
		return self.__tokens[at] if at < len(self.__tokens) else None
