"""
Hook regular expression patterns up to token kinds: a table-driven scanner.

For instance:
	s = RegexScanner()
	s.ignore(r'\s+')
	s.token('Number', r'\d+(?:\.\d+)?', TokenKind.NUMBER)
	s.token_map('String', r'"(?:\\.|[^"])*"', lambda text: text[1:-1], TokenKind.STRING)
	s.token('Operator', r'[][{}:,]', TokenKind.OPERATOR)

The name of each rule is also a kind-name that rule strings may capture by:
the definition above makes "@String" capture string tokens.

At each position, every rule gets a try. Rule priority ranks come first; the longest
match breaks ties among the highest ranked rules that match; after that, the rule
defined earliest wins. Zero-width matches don't count.
"""

import re
from typing import NamedTuple, Callable, Optional

from ..support.interfaces import TokenKind, Token
from .engine import Scanner

class ScanRule(NamedTuple):
	name: Optional[str]
	pattern: re.Pattern
	kind: Optional[TokenKind]
	fn: Optional[Callable[[str], str]]
	rank: int

class RegexScanner(Scanner):
	def __init__(self, *, omit=()):
		super().__init__(kind_names={}, omit=omit)
		self.__rules : list[ScanRule] = []

	def token(self, name:str, pattern:str, kind:TokenKind=TokenKind.IDENT, *, rank=0):
		""" Every member of the pattern becomes a token of the given kind, with the matched text. """
		self.token_map(name, pattern, None, kind, rank=rank)

	def token_map(self, name:str, pattern:str, fn:Optional[Callable], kind:TokenKind=TokenKind.IDENT, *, rank=0):
		""" Every member of the pattern becomes a token of the given kind, with text=fn(matched text). """
		assert name not in self.kind_names, "Scan rule %r is already defined."%name
		self.kind_names[name] = kind
		self.__rules.append(ScanRule(name, re.compile(pattern), kind, fn, rank))

	def ignore(self, pattern:str, *, rank=0):
		""" Tell Scanner to ignore what matches the pattern. """
		self.__rules.append(ScanRule(None, re.compile(pattern), None, None, rank))

	def __best_match(self):
		best, best_key = None, None
		for order, rule in enumerate(self.__rules):
			m = rule.pattern.match(self.text, self.right)
			if m is None or m.end() == self.right: continue
			key = (rule.rank, m.end(), -order)
			if best_key is None or key > best_key: best, best_key = (rule, m), key
		return best

	def next_token(self) -> Token:
		while self.has_more():
			found = self.__best_match()
			if found is None: self.blocked('INITIAL')
			rule, m = found
			width = m.end() - m.start()
			if rule.kind is None:
				self.skip(width)
				continue
			text = m.group() if rule.fn is None else rule.fn(m.group())
			return self.emit(rule.kind, width, text)
		return self.end_of_text()
