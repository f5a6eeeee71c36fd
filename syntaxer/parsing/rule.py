"""
The rule compiler: it chops one field's rule string into grammar tokens.

The rule language is small:
	'text' or "text"    a literal, matched against token text; backslash escapes the next character
	@Name               capture a token by semantic kind (as the tokenizer names them)
	@'text'             capture a literal
	@( ... )            capture whatever the group matches
	@@                  delegate to another shape's grammar (or this one's)
	( ... ) + ? *       grouping, with optional repetition
	|                   ordered alternation

Every token carries its owning field, so that the grammar parser can build capture
nodes without consulting the field registration again.
"""

from enum import Enum
from typing import NamedTuple, Optional, Any

from ..support.interfaces import GrammarCompileError
from .values import ValueKind

OPERATORS = frozenset('()+?*@')
QUOTES = '\'"'

class RuleTokenKind(Enum):
	LITERAL = 'literal'
	OPERATOR = 'operator'
	BRANCH = 'branch'
	IDENT = 'identifier'

class FieldRule(NamedTuple):
	"""
	One registered field: its name, its raw rule string, the kind of value it holds,
	and (for nested fields) the element shape, given as a Shape or by name.
	`many` means the field collects a list of elements.
	"""
	name: str
	raw_rule: str
	kind: ValueKind = ValueKind.TEXT
	element: Any = None
	many: bool = False

class GrammarToken(NamedTuple):
	text: str
	kind: RuleTokenKind
	offset: int
	field: FieldRule

	@property
	def field_name(self) -> str: return self.field.name
	@property
	def raw_rule(self) -> str: return self.field.raw_rule
	@property
	def value_kind(self) -> ValueKind: return self.field.kind
	@property
	def element(self) -> Optional[Any]: return self.field.element
	@property
	def many(self) -> bool: return self.field.many

	def is_operator(self, text:str):
		return self.kind is RuleTokenKind.OPERATOR and self.text == text

	def complain(self, message:str):
		""" Raise a compile error pointing at this token. """
		raise GrammarCompileError(message, self.raw_rule, self.field_name, self.offset)

def _is_word_start(c): return c == '_' or c.isascii() and c.isalpha()
def _is_word_part(c): return c == '_' or c.isascii() and c.isalnum()

def compile_rule(field:FieldRule) -> list[GrammarToken]:
	""" Scan a field's raw rule string left to right, producing grammar tokens. """
	rule = field.raw_rule
	tokens = []
	def emit(text, kind, offset): tokens.append(GrammarToken(text, kind, offset, field))
	index = 0
	while index < len(rule):
		c = rule[index]
		if c.isspace():
			index += 1
		elif c == '|':
			emit(c, RuleTokenKind.BRANCH, index)
			index += 1
		elif c in OPERATORS:
			emit(c, RuleTokenKind.OPERATOR, index)
			index += 1
		elif c in QUOTES:
			text, end = _scan_literal(field, index)
			emit(text, RuleTokenKind.LITERAL, index)
			index = end
		elif _is_word_start(c):
			end = index + 1
			while end < len(rule) and _is_word_part(rule[end]): end += 1
			emit(rule[index:end], RuleTokenKind.IDENT, index)
			index = end
		else:
			raise GrammarCompileError("Invalid character %r"%c, rule, field.name, index)
	return tokens

def _scan_literal(field:FieldRule, start:int):
	""" Return the unescaped text of the literal beginning at `start`, and the offset just past its closing quote. """
	rule, quote = field.raw_rule, field.raw_rule[start]
	text, index = [], start + 1
	while index < len(rule):
		c = rule[index]
		if c == quote: return ''.join(text), index + 1
		if c == '\\':
			index += 1
			if index == len(rule): break
			c = rule[index]
		text.append(c)
		index += 1
	raise GrammarCompileError("Missing closing quote %s"%quote, rule, field.name, start)
