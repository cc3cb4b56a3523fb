"""
These most-fundamental classes in the syntax class hierarchy
are separate from the rest to avoid various circular-import
scenarios. Every phrase of source text knows the slice of
text it came from, so that diagnostics can point at it.
"""
from typing import NamedTuple

class Token(NamedTuple):
	""" What the scanner hands the parser. """
	kind: str
	text: str
	slice: slice

	def __repr__(self): return "<%s %r @%d>" % (self.kind, self.text, self.slice.start)

class Phrase:
	def left(self) -> int:
		""" Return the offset of the first character of this phrase """
		raise NotImplementedError(type(self))
	def right(self) -> int:
		""" Return the offset just past the last character of this phrase """
		raise NotImplementedError(type(self))
	def span(self) -> slice: return slice(self.left(), self.right())

class Nom(Phrase):
	""" Representing the occurrence of a name anywhere. """
	def __init__(self, text:str, where:slice):
		assert isinstance(text, str)
		self.text, self.where = text, where
	def __repr__(self): return "<Name %r>" % self.text
	def left(self): return self.where.start
	def right(self): return self.where.stop

def nom_of(token:Token) -> Nom:
	return Nom(token.text, token.slice)

class Expression(Phrase):
	""" Anything that may appear where a value is wanted. """

class Statement(Phrase):
	""" Anything that may appear in a block or at top level. """
