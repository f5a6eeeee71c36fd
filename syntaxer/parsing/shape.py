"""
Shapes: the things a parse produces, and the place where rule strings get attached to fields.

Here's the concept. A Shape is a description of a record type: a name, and an ordered
list of fields, each with a rule string saying how the field gets filled from the
token stream. You register fields one at a time, in order:

	grammar = Grammar()
	pair = grammar.shape('Pair')
	pair.field('key', "@Ident '='")
	pair.field('value', "@Number", ValueKind.INTEGER)

Registration is the single source of truth for which fields exist: the engine binds
nothing else. Each shape owns a RuleSet, which compiles the registered rules into a
match-node tree exactly once, the first time somebody needs it.

Shapes refer to each other with `@@`. The element shape may be given as a Shape or by
name; names are looked up in the grammar when the reference is first matched. That's
what makes forward references, recursion, and mutual recursion work: a reference finds
the one and only RuleSet of its target by identity, and never builds a private copy.
"""

import warnings
from enum import Enum
from typing import Optional, Callable

from ..support import pretty
from ..support.interfaces import GrammarCompileError, Tokenizer
from ..support.symtab import NameSpace, NoSuchSymbol
from ..scanning.simple import SimpleScanner
from .rule import FieldRule, GrammarToken, compile_rule
from .values import ValueKind
from .grammar import build_tree
from .matcher import MatchNode


class Record:
	"""
	Base class for the record types generated for shapes which don't supply a factory.
	It's somewhere between a dataclass and a namedtuple: keyword construction,
	equality by value, a readable repr, and conversion to plain data.
	"""
	__slots__ = ()
	_fields_ : tuple = ()

	def __init__(self, **kwargs):
		for name in self._fields_:
			setattr(self, name, kwargs.pop(name, None))
		if kwargs:
			raise TypeError("%s has no field(s) named %s"%(type(self).__name__, ', '.join(sorted(kwargs))))

	def __eq__(self, other):
		return type(self) is type(other) and all(getattr(self, f) == getattr(other, f) for f in self._fields_)

	def __repr__(self):
		return "%s(%s)"%(type(self).__name__, ', '.join('%s=%r'%(f, getattr(self, f)) for f in self._fields_))

	def as_dict(self) -> dict:
		""" Convert recursively to plain dictionaries and lists, e.g. for dumping as JSON. """
		return {f: _plain(getattr(self, f)) for f in self._fields_}

def _plain(value):
	if isinstance(value, Record): return value.as_dict()
	if isinstance(value, list): return [_plain(v) for v in value]
	return value

def _default(field:FieldRule):
	if field.many: return []
	if field.kind is ValueKind.BOOLEAN: return False
	return None


class State(Enum):
	PENDING = 'pending'
	COMPILING = 'compiling'
	READY = 'ready'

class RuleSet:
	"""
	Owns a shape's registered field rules, the pooled grammar tokens compiled from them,
	and the root of the match-node tree. Fields are registered first; the tree is built
	once, on first demand, and is immutable (and freely shareable) thereafter.
	"""
	def __init__(self, shape:"Shape"):
		self.shape = shape
		self.fields : list[FieldRule] = []
		self.tokens : list[GrammarToken] = []
		self.state = State.PENDING
		self.__root : Optional[MatchNode] = None

	def add(self, field:FieldRule):
		assert self.state is State.PENDING, "Cannot register field %r: the grammar for %r is already built."%(field.name, self.shape.name)
		self.fields.append(field)

	def build(self, kind_names:dict=None):
		"""
		Compile against `kind_names` if given (the table of the tokenizer actually in use),
		or else the shape's own tokenizer. Whichever table comes first is the one that sticks.
		"""
		if self.state is State.READY: return
		if self.state is State.COMPILING:
			raise GrammarCompileError("Grammar is already being compiled", '', self.shape.name)
		self.state = State.COMPILING
		try:
			tokens = []
			for field in self.fields:
				field_tokens = compile_rule(field)
				if field.element is not None and not _mentions_reference(field_tokens):
					warnings.warn("Field %r of shape %r names an element shape, but its rule %r never says '@@'."%(field.name, self.shape.name, field.raw_rule))
				tokens.extend(field_tokens)
			self.tokens = tokens
			self.__root = build_tree(tokens, self.shape.scanner.kind_names if kind_names is None else kind_names, self.shape, self.shape.resolve)
		except BaseException:
			self.state = State.PENDING
			raise
		self.state = State.READY

	def root(self, kind_names:dict=None) -> MatchNode:
		if self.state is not State.READY: self.build(kind_names)
		return self.__root

	def display(self):
		print(pretty.render(self.root()))

def _mentions_reference(tokens:list[GrammarToken]):
	return any(a.is_operator('@') and b.is_operator('@') for a, b in zip(tokens, tokens[1:]))


class Shape:
	def __init__(self, name:str, factory:Callable=None, *, grammar:"Grammar"=None, scanner:Tokenizer=None):
		self.name = name
		self.grammar = grammar
		self.rules = RuleSet(self)
		self.__factory = factory
		self.__record = None
		self.__scanner = scanner

	def __repr__(self): return "<Shape %s>"%self.name

	@property
	def scanner(self) -> Tokenizer:
		if self.__scanner is None:
			self.__scanner = SimpleScanner() if self.grammar is None else self.grammar.scanner
		return self.__scanner

	@property
	def fields(self) -> list[FieldRule]:
		return self.rules.fields

	def field(self, name:str, rule:str, kind:ValueKind=ValueKind.TEXT, *, element=None, many=False) -> "Shape":
		"""
		Register a field and its rule string. Fields must be registered in order, and before the first parse.
		`element` (a Shape, or the name of one) makes this a nested field, filled by `@@` references;
		`many` makes it collect a list of such elements. Returns the shape, so calls may be chained.
		"""
		assert self.__record is None, "Cannot register field %r: instances of %r already exist."%(name, self.name)
		if not name.isidentifier():
			raise ValueError("Field name %r is not an identifier."%name)
		if any(f.name == name for f in self.fields):
			raise ValueError("Shape %r already has a field named %r."%(self.name, name))
		if element is not None:
			if kind not in (ValueKind.TEXT, ValueKind.NESTED):
				raise ValueError("Field %r names an element shape, so it cannot hold %s values."%(name, kind.value))
			kind = ValueKind.NESTED
		elif many:
			raise ValueError("Field %r collects many items, so it needs an element shape."%name)
		self.rules.add(FieldRule(name, rule, kind, element, many))
		return self

	@property
	def factory(self) -> Callable:
		""" The generated record type is made on first use, and after that the set of fields is closed. """
		if self.__factory is not None: return self.__factory
		if self.__record is None:
			names = tuple(f.name for f in self.fields)
			self.__record = type(self.name, (Record,), {'__slots__': names, '_fields_': names})
		return self.__record

	def new(self):
		""" Make a fresh, empty target instance with defaults for any registered fields it lacks. """
		target = self.factory()
		for field in self.fields:
			if getattr(target, field.name, None) is None:
				setattr(target, field.name, _default(field))
		return target

	def resolve(self, target) -> "Shape":
		""" Find the shape an `@@` refers to. """
		if isinstance(target, Shape): return target
		if self.grammar is None: raise NoSuchSymbol(target, self.name)
		return self.grammar[target]


class Grammar:
	"""
	A registry of shapes by name, sharing one tokenizer. A grammar may build upon
	the shapes of a `parent` grammar, and inherits its tokenizer unless given another.
	"""
	def __init__(self, name:str="grammar", *, scanner:Tokenizer=None, parent:"Grammar"=None):
		self.name = name
		if scanner is None: scanner = SimpleScanner() if parent is None else parent.scanner
		self.scanner = scanner
		self.__shapes : NameSpace[Shape] = NameSpace(place=name) if parent is None else parent.__shapes.new_child(name)

	def shape(self, name:str, factory:Callable=None, *, scanner:Tokenizer=None) -> Shape:
		it = Shape(name, factory, grammar=self, scanner=scanner)
		self.__shapes[name] = it
		return it

	def __getitem__(self, name) -> Shape: return self.__shapes[name]
	def __contains__(self, name): return name in self.__shapes
	def __iter__(self): return iter(self.__shapes)
