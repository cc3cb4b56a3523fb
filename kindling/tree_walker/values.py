"""
This module defines the specialized value-types that the tree-walker operates in terms of.
Basic primitive values play themselves, but closures and host functions need more help.
"""
from abc import abstractmethod
from typing import Callable

from .. import syntax
from .evaluator import evaluate
from .types import (
	KindlingValue, VALUE, ARGS, ENV, kind_of,
	NULL, NUMBER, STRING, BOOL, LIST, OBJECT, FUNCTION, NATIVE,
)

class Function(KindlingValue):
	""" A run-time object that can be applied with arguments. """
	@abstractmethod
	def apply(self, args:ARGS) -> VALUE: pass

	@abstractmethod
	def kind(self) -> str: pass

class Closure(Function):
	"""
	The run-time manifestation of a user-defined function:
	parameter names and body shared with the syntax tree,
	plus a reference (not a copy) to its natal environment.
	"""
	def __init__(self, fn:syntax.FunctionExpr, captures:ENV):
		self._fn = fn
		self.params = fn.param_names()
		self.body = fn.body
		self.captures = captures

	def __repr__(self):
		name = self._fn.nom.text if isinstance(self._fn, syntax.FunctionDecl) else "<anonymous>"
		return "<function %s(%s)>" % (name, ', '.join(self.params))

	def kind(self) -> str: return FUNCTION

	def apply(self, args:ARGS) -> VALUE:
		inner = self.captures.child()
		for i, name in enumerate(self.params):
			# Missing arguments are null, not an error. Extras are ignored.
			inner.define(name, args[i] if i < len(args) else None)
		return evaluate(self.body, inner)

class Primitive(Function):
	""" A host-provided callable, exposed by name in the global scope. """
	def __init__(self, fn:Callable[..., VALUE], name:str=None):
		assert callable(fn)
		self._fn = fn
		self.name = name or getattr(fn, "__name__", "native")

	def __repr__(self): return "<native %s>" % self.name

	def kind(self) -> str: return NATIVE

	def apply(self, args:ARGS) -> VALUE:
		return from_host(self._fn(*args))

def from_host(it) -> VALUE:
	""" Bring a host-produced value into the run-time's closed set of kinds. """
	if isinstance(it, bool) or it is None: return it
	if isinstance(it, (int, float)): return float(it)
	if isinstance(it, (str, list, dict, KindlingValue)): return it
	if isinstance(it, tuple): return list(it)
	if callable(it): return Primitive(it)
	raise TypeError("Host function returned an unsupported value: %r" % (it,))

###############################################################################

def as_text(value:VALUE) -> str:
	""" Total: every value has a printable form. """
	return _TEXT[kind_of(value)](value)

def _number_text(n:float) -> str:
	if n != n: return "NaN"
	if n in (float("inf"), float("-inf")): return "Infinity" if n > 0 else "-Infinity"
	if n == int(n): return str(int(n))
	return repr(n)

_TEXT = {
	NULL: lambda v: "null",
	NUMBER: _number_text,
	STRING: lambda v: v,
	BOOL: lambda v: "true" if v else "false",
	LIST: lambda v: "[Array]",
	OBJECT: lambda v: "[Object]",
	FUNCTION: lambda v: "[Function]",
	NATIVE: lambda v: "[Function]",
}

def is_truthy(value:VALUE) -> bool:
	"""
	Flags say what they mean and numbers are false only at zero.
	Everything else counts as true, empty strings and empty lists included.
	"""
	kind = kind_of(value)
	if kind == BOOL: return value
	if kind == NUMBER: return value != 0
	return True
