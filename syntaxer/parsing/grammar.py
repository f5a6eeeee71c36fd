"""
The grammar parser: recursive descent over the pooled grammar-token stream of one shape,
producing the tree of match nodes.

Tokens from all of a shape's fields arrive as one stream, in declaration order. That's
what lets a rule continue where the previous field's rule left off: a field whose rule
begins with "|" adds an alternative to whatever came before, and a group opened in one
field may close in another. Each token still knows its own field, so each capture lands
where its own rule says.

The three productions are mutually recursive:
	sequence-or-alternation: things in a row, separated by bars into alternatives
	group: a parenthesized sequence-or-alternation, perhaps followed by + ? or *
	capture: whatever follows an @

Afterwards, the tree is simplified: one-child sequences and alternations, and groups that
match exactly once, collapse into their only child. That keeps the tree shallow and saves
redundant backtracking checkpoints at match time.
"""

from typing import Callable, Optional

from ..support.interfaces import TokenKind
from .rule import GrammarToken, RuleTokenKind
from .values import ValueKind
from . import matcher

def build_tree(tokens:list[GrammarToken], kind_names:dict[str, TokenKind], owner, resolve:Callable) -> matcher.MatchNode:
	"""
	`kind_names` maps the names a rule may capture by (like "String") to token kinds.
	`owner` is the shape these tokens belong to; a bare `@@` in a field with no element shape refers back to it.
	`resolve` turns an element-shape designation (a shape, or a name) into a shape, when first needed.
	"""
	if not tokens: return matcher.Empty()
	return _GrammarParser(tokens, kind_names, owner, resolve).parse().simplify()


class _GrammarParser:
	def __init__(self, tokens, kind_names, owner, resolve):
		self.tokens = tokens
		self.kind_names = kind_names
		self.owner = owner
		self.resolve = resolve

	def parse(self) -> matcher.MatchNode:
		node, index = self.sequence_or_alternation(0, None, False)
		assert index == len(self.tokens)
		return node

	def sequence(self, start:int, opener:Optional[GrammarToken], capturing:bool):
		"""
		Collect nodes until a bar, the closing parenthesis (if `opener` is given), or the end.
		Returns the sequence, the index just past whatever stopped it, and whether that was a bar.
		"""
		members, index = [], start
		while index < len(self.tokens):
			t = self.tokens[index]
			if t.kind is RuleTokenKind.LITERAL:
				members.append(self.literal(t, capturing))
				index += 1
			elif t.kind is RuleTokenKind.BRANCH:
				return matcher.Sequence(members), index + 1, True
			elif t.is_operator(')'):
				if opener is None: t.complain("Unbalanced ')'")
				return matcher.Sequence(members), index + 1, False
			elif t.is_operator('@'):
				node, index = self.capture(index + 1, t)
				members.append(node)
			elif t.is_operator('('):
				node, index = self.group(index + 1, t, capturing)
				members.append(node)
			elif t.kind is RuleTokenKind.IDENT:
				t.complain("Bare name %r (perhaps you meant '@%s')"%(t.text, t.text))
			else:
				t.complain("Quantifier %r must follow a parenthesized group"%t.text)
		if opener is not None: opener.complain("Unterminated group")
		return matcher.Sequence(members), index, False

	def sequence_or_alternation(self, start:int, opener:Optional[GrammarToken], capturing:bool):
		node, index, is_branch = self.sequence(start, opener, capturing)
		if not is_branch: return node, index
		branches = [node]
		while is_branch:
			node, index, is_branch = self.sequence(index, opener, capturing)
			branches.append(node)
		return matcher.Alternation(branches), index

	def group(self, start:int, opener:GrammarToken, capturing:bool):
		""" The opening parenthesis is already consumed. Look for a quantifier after the closing one. """
		node, index = self.sequence_or_alternation(start, opener, capturing)
		if index < len(self.tokens):
			t = self.tokens[index]
			if t.kind is RuleTokenKind.OPERATOR and t.text in matcher.QUANTIFIERS:
				return matcher.Repetition(node, matcher.QUANTIFIERS[t.text]), index + 1
		return matcher.Repetition(node, matcher.Bound.ONCE), index

	def capture(self, start:int, at:GrammarToken):
		""" The @ is already consumed. Dispatch on what follows it. """
		if start >= len(self.tokens) or self.tokens[start].field is not at.field:
			at.complain("Invalid capture syntax: nothing follows '@'")
		t = self.tokens[start]
		if t.is_operator('('):
			return self.group(start + 1, t, True)
		elif t.kind is RuleTokenKind.IDENT:
			if t.text not in self.kind_names:
				t.complain("Cannot capture unknown token kind %r (known kinds are %s)"%(t.text, ', '.join(sorted(self.kind_names))))
			self.check_scalar(t)
			return matcher.CaptureByType(self.kind_names[t.text], t.text, t.field), start + 1
		elif t.kind is RuleTokenKind.LITERAL:
			self.check_scalar(t)
			return matcher.CaptureLiteral(t.text, t.field), start + 1
		elif t.is_operator('@'):
			target = self.owner if t.element is None else t.element
			return matcher.Reference(target, t.field, self.resolve), start + 1
		else:
			t.complain("Invalid capture syntax: %r cannot follow '@'"%t.text)

	def literal(self, t:GrammarToken, capturing:bool):
		if capturing:
			self.check_scalar(t)
			return matcher.CaptureLiteral(t.text, t.field)
		return matcher.LiteralMatch(t.text, t.field)

	@staticmethod
	def check_scalar(t:GrammarToken):
		if t.value_kind is ValueKind.NESTED:
			t.complain("Field %r holds nested shapes, so it cannot capture token text"%t.field_name)
