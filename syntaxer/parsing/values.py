"""
What sort of value a field holds, and how token text becomes such a value.

The set of kinds is closed and resolved when the field is registered, so there is
exactly one coercion per kind and no guessing at match time.
"""

import re
from enum import Enum

from ..support.interfaces import TokenKind

_INTEGER = re.compile(r'[-+]?\d+')
_DECIMAL = re.compile(r'[-+]?(\d+\.\d*|\.\d+|\d+)([eE][-+]?\d+)?')

def _scalar(text:str, token_kind:TokenKind=None):
	""" Only number tokens become numbers. A string token holding "00501" stays exactly that. """
	if token_kind not in (None, TokenKind.NUMBER): return text
	if _INTEGER.fullmatch(text): return int(text)
	if _DECIMAL.fullmatch(text): return float(text)
	return text

class ValueKind(Enum):
	TEXT = 'text'
	INTEGER = 'integer'
	FLOAT = 'float'
	BOOLEAN = 'boolean'
	SCALAR = 'scalar'
	NESTED = 'nested'

	def coerce(self, text:str, token_kind:TokenKind=None):
		"""
		Turn token text into a value of this kind. Raises ValueError if it can't,
		which the matching engine treats as an ordinary failure to match.
		The SCALAR kind looks at `token_kind` too, when it's known.
		"""
		if self is ValueKind.SCALAR: return _scalar(text, token_kind)
		return _COERCION[self](text)

def _not_coercible(text):
	raise ValueError("Nested fields are filled by sub-objects, not by token text: %r"%text)

_COERCION = {
	ValueKind.TEXT: str,
	ValueKind.INTEGER: int,
	ValueKind.FLOAT: float,
	ValueKind.BOOLEAN: lambda text: True,
	ValueKind.SCALAR: _scalar,
	ValueKind.NESTED: _not_coercible,
}
