"""
A grammar of shapes needs a symbol table: rule strings refer to other shapes with `@@`,
and those shapes may not be defined yet when the reference is written down. (JSON values
contain objects which contain values, so somebody has to go first.) The answer is to
refer to shapes by name and look the name up late, when the reference is first matched.

This module provides the name-space for that. It's deliberately dumb:

* adding a name expects it not already to exist locally;
* looking up a name expects it surely to exist, here or in some enclosing space.

When an expectation is falsified, this raises an exception. Why? Because it's Python.
"""

from typing import Optional, Generic, TypeVar

class NoSuchSymbol(KeyError):
	pass

class SymbolAlreadyExists(KeyError):
	pass

T = TypeVar("T")

class NameSpace(Generic[T]):
	"""
	NameSpace bears some resemblance to chainmap with a few extra attributes.
	The "local" is the set of names defined in this space.
	The "place" is a general statement of where the namespace "lives", used for error messages.
	The "parent" works like a static link: a grammar may build upon the shapes of another.
	"""
	def __init__(self, *, place, parent:Optional["NameSpace[T]"]=None):
		self.local : dict[str, T] = {}
		self.place = place
		self.parent : Optional[NameSpace[T]] = parent

	def __getitem__(self, key) -> T:
		if key in self.local:
			return self.local[key]
		elif self.parent is not None:
			return self.parent[key]
		else:
			raise NoSuchSymbol(key, self.place)

	def __contains__(self, key):
		return key in self.local or (self.parent is not None and key in self.parent)

	def __setitem__(self, key, value:T):
		if key in self.local:
			raise SymbolAlreadyExists(key, self.place)
		else:
			self.local[key] = value

	def __iter__(self):
		return iter(self.local)

	def new_child(self, place) -> "NameSpace[T]":
		""" Return a subordinate name-space linked to this one. """
		return NameSpace(place=place, parent=self)
