"""
Simplest possible environment concept.

This is the canonical list-structured search: each frame knows its
bindings and a static link to the frame lexically around it.
Closures keep their natal frame alive merely by referring to it.
"""
from typing import Any
import abc

from .diagnostics import UndefinedVariableError, ConstAssignmentError

class Environment(abc.ABC):
	@abc.abstractmethod
	def resolve(self, name:str) -> Any:
		""" Value of the nearest binding of this name. """

	@abc.abstractmethod
	def assign(self, name:str, value:Any) -> Any:
		""" Overwrite the nearest binding of this name. """

class NullEnv(Environment):
	""" Beyond the global scope lies nothing at all. """
	def resolve(self, name:str) -> Any:
		raise UndefinedVariableError(name)
	def assign(self, name:str, value:Any) -> Any:
		raise UndefinedVariableError(name)

null_env = NullEnv()

class InnerEnv(Environment):
	def __init__(self, static_link:Environment = null_env):
		self._bindings = {}
		self._constants = set()
		self.static_link = static_link

	def __repr__(self):
		return "<Frame %s>" % ', '.join(self._bindings)

	def holds(self, name:str) -> bool:
		""" Is the name bound in this very frame? """
		return name in self._bindings

	def define(self, name:str, value:Any, is_const:bool=False) -> Any:
		""" Bind in this frame; an existing binding here is silently replaced. """
		self._bindings[name] = value
		if is_const: self._constants.add(name)
		else: self._constants.discard(name)
		return value

	def resolve(self, name:str) -> Any:
		try: return self._bindings[name]
		except KeyError: return self.static_link.resolve(name)

	def assign(self, name:str, value:Any) -> Any:
		if name not in self._bindings:
			return self.static_link.assign(name, value)
		if name in self._constants:
			raise ConstAssignmentError(name)
		self._bindings[name] = value
		return value

	def child(self) -> "InnerEnv":
		return InnerEnv(self)
