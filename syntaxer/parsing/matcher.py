"""
The matching engine: compiled grammar nodes, each of which knows how to match itself against a token cursor.

The contract is uniform. `node.match(cursor)` returns one of two things:

* An "apply action": a function which, given a target object, writes the matched values
  into its fields. The cursor has advanced exactly past the tokens consumed.
* A NotMatch: the cursor is back where it was when the node began. Nothing leaks.

Apply actions are deferred so that a branch which fails half-way leaves no trace:
nothing gets written anywhere until the whole parse has succeeded.

Ordinary mismatches are return values, never exceptions. Exceptions mean something is
structurally wrong (like a reference to a shape nobody defined) and they abort the parse.
"""

from enum import Enum
from typing import Callable, Optional

from ..support.interfaces import TokenKind
from .cursor import TokenCursor, NotMatch
from .rule import FieldRule
from .values import ValueKind

ApplyAction = Callable[[object], None]

def _nothing(target): pass

def _all_of(actions:list[ApplyAction]) -> ApplyAction:
	if not actions: return _nothing
	if len(actions) == 1: return actions[0]
	def apply(target):
		for action in actions: action(target)
	return apply

def _assign(name:str, value) -> ApplyAction:
	def apply(target): setattr(target, name, value)
	return apply

def _append(name:str, item) -> ApplyAction:
	def apply(target):
		collection = getattr(target, name, None)
		if collection is None: setattr(target, name, [item])
		else: collection.append(item)
	return apply

def failed(outcome) -> bool:
	return isinstance(outcome, NotMatch)


class Bound(Enum):
	""" The admissible (minimum, maximum) repetition counts. A maximum of None means no upper bound. """
	ONCE = (1, 1)
	ONCE_OR_MORE = (1, None)
	OPTIONAL = (0, 1)
	OPTIONAL_OR_MORE = (0, None)

	@property
	def minimum(self) -> int: return self.value[0]
	@property
	def maximum(self) -> Optional[int]: return self.value[1]

QUANTIFIERS = {'+': Bound.ONCE_OR_MORE, '?': Bound.OPTIONAL, '*': Bound.OPTIONAL_OR_MORE}


class MatchNode:
	__slots__ = ()
	def match(self, cursor:TokenCursor):
		raise NotImplementedError(type(self))
	def simplify(self) -> "MatchNode":
		return self
	def children(self) -> tuple:
		return ()
	def label(self) -> str:
		""" A one-line description for tree displays. """
		return type(self).__name__


class Empty(MatchNode):
	""" Matches nothing, and always succeeds at it. """
	__slots__ = ()
	def match(self, cursor): return _nothing
	def __repr__(self): return 'Empty()'


class Sequence(MatchNode):
	__slots__ = ('members',)
	def __init__(self, members:list[MatchNode]):
		self.members = list(members)

	def match(self, cursor):
		checkpoint = cursor.save()
		actions = []
		for member in self.members:
			outcome = member.match(cursor)
			if failed(outcome):
				cursor.restore(checkpoint)
				return outcome
			actions.append(outcome)
		return _all_of(actions)

	def simplify(self):
		if not self.members: return Empty()
		if len(self.members) == 1: return self.members[0].simplify()
		return Sequence([m.simplify() for m in self.members])

	def children(self): return tuple(self.members)
	def __repr__(self): return 'Sequence(%r)'%self.members


class Alternation(MatchNode):
	""" Ordered choice: the first branch to match wins, and the rest are never tried. """
	__slots__ = ('branches',)
	def __init__(self, branches:list[MatchNode]):
		self.branches = list(branches)

	def match(self, cursor):
		checkpoint = cursor.save()
		for branch in self.branches:
			outcome = branch.match(cursor)
			if not failed(outcome): return outcome
			cursor.restore(checkpoint)
		return cursor.fail(checkpoint, "expected one of %d alternatives"%len(self.branches))

	def simplify(self):
		if len(self.branches) == 1: return self.branches[0].simplify()
		return Alternation([b.simplify() for b in self.branches])

	def children(self): return tuple(self.branches)
	def __repr__(self): return 'Alternation(%r)'%self.branches


class Repetition(MatchNode):
	"""
	Greedy repetition with a minimum: keep matching until the inner node fails or the maximum
	is reached. Succeed if the minimum was met, regardless of how the last attempt went.
	An iteration which consumes nothing ends the loop, or else `( x? )*` would spin forever.
	"""
	__slots__ = ('inner', 'bound')
	def __init__(self, inner:MatchNode, bound:Bound):
		self.inner, self.bound = inner, bound

	def match(self, cursor):
		entry = cursor.save()
		maximum = self.bound.maximum
		actions, last_failure = [], None
		while maximum is None or len(actions) < maximum:
			checkpoint = cursor.save()
			outcome = self.inner.match(cursor)
			if failed(outcome):
				cursor.restore(checkpoint)
				last_failure = outcome
				break
			actions.append(outcome)
			if cursor.save() == checkpoint: break
		if len(actions) < self.bound.minimum:
			cursor.restore(entry)
			return last_failure
		return _all_of(actions)

	def simplify(self):
		if self.bound is Bound.ONCE: return self.inner.simplify()
		return Repetition(self.inner.simplify(), self.bound)

	def children(self): return (self.inner,)
	def label(self): return 'Repetition %s'%self.bound.name
	def __repr__(self): return 'Repetition(%r, %s)'%(self.inner, self.bound)


class Leaf(MatchNode):
	"""
	Common machinery for nodes which consume exactly one token: peek, decide, maybe advance.
	A leaf never matches the end-of-text token.
	"""
	__slots__ = ('field',)

	def accepts(self, token) -> bool:
		raise NotImplementedError(type(self))

	def expectation(self) -> str:
		raise NotImplementedError(type(self))

	def action(self, token) -> ApplyAction:
		""" May raise ValueError if the token cannot become a value of the field's kind. """
		raise NotImplementedError(type(self))

	def match(self, cursor):
		checkpoint = cursor.save()
		token = cursor.peek()
		if token is None or token.is_eof() or not self.accepts(token):
			return cursor.fail(checkpoint, "expected %s"%self.expectation(), self.expectation())
		try: action = self.action(token)
		except ValueError as ex:
			return cursor.fail(checkpoint, str(ex), "%s as %s"%(self.expectation(), self.field.kind.value))
		cursor.advance()
		return action


class LiteralMatch(Leaf):
	""" Consumes a token with exactly the expected text. Records presence only in a BOOLEAN field. """
	__slots__ = ('text', 'flag')
	def __init__(self, text:str, field:FieldRule):
		self.text, self.field = text, field
		self.flag = _assign(field.name, True) if field.kind is ValueKind.BOOLEAN else _nothing

	def accepts(self, token): return token.text == self.text
	def expectation(self): return repr(self.text)
	def action(self, token): return self.flag
	def label(self): return 'Literal %r'%self.text
	def __repr__(self): return 'LiteralMatch(%r, %r)'%(self.text, self.field.name)


class CaptureLiteral(Leaf):
	""" Like LiteralMatch, but the text (coerced to the field's kind) is bound to the field. """
	__slots__ = ('text',)
	def __init__(self, text:str, field:FieldRule):
		self.text, self.field = text, field

	def accepts(self, token): return token.text == self.text
	def expectation(self): return repr(self.text)
	def action(self, token): return _assign(self.field.name, self.field.kind.coerce(token.text, token.kind))
	def label(self): return 'Capture %r -> %s'%(self.text, self.field.name)
	def __repr__(self): return 'CaptureLiteral(%r, %r)'%(self.text, self.field.name)


class CaptureByType(Leaf):
	""" Consumes any one token of the expected kind, binding its (coerced) text to the field. """
	__slots__ = ('token_kind', 'kind_name')
	def __init__(self, token_kind:TokenKind, kind_name:str, field:FieldRule):
		self.token_kind, self.kind_name, self.field = token_kind, kind_name, field

	def accepts(self, token): return token.kind is self.token_kind
	def expectation(self): return self.kind_name
	def action(self, token): return _assign(self.field.name, self.field.kind.coerce(token.text, token.kind))
	def label(self): return 'Capture @%s -> %s'%(self.kind_name, self.field.name)
	def __repr__(self): return 'CaptureByType(%s, %r)'%(self.kind_name, self.field.name)


class Reference(MatchNode):
	"""
	Delegates to another shape's compiled grammar, against the same cursor.
	This is how nested and recursive grammars compose. The shape is found by `resolve`
	on first use and cached; its grammar is built on first use by the shape itself.
	A successful match makes a fresh instance of the shape, fills it in, and then
	either assigns it to the field or appends it to the field's list.
	"""
	__slots__ = ('target', 'field', '__resolve', '__shape')
	def __init__(self, target, field:FieldRule, resolve:Callable):
		self.target, self.field = target, field
		self.__resolve = resolve
		self.__shape = None

	def shape(self):
		if self.__shape is None: self.__shape = self.__resolve(self.target)
		return self.__shape

	def match(self, cursor):
		checkpoint = cursor.save()
		shape = self.shape()
		outcome = shape.rules.root(cursor.kind_names).match(cursor)
		if failed(outcome):
			cursor.restore(checkpoint)
			return outcome
		item = shape.new()
		outcome(item)
		return (_append if self.field.many else _assign)(self.field.name, item)

	def label(self):
		name = self.target if isinstance(self.target, str) else self.target.name
		return 'Reference @@%s -> %s%s'%(name, self.field.name, '[]' if self.field.many else '')
	def __repr__(self): return 'Reference(%r, %r)'%(self.target, self.field.name)
