"""
Kindling: a small embeddable scripting engine for a C-like dynamic language.

	from kindling import Engine
	engine = Engine()
	engine.register("shout", lambda s: s.upper())
	outcome = engine.run('print shout("hello");')
"""
from .diagnostics import (
	KindlingError, KindlingSyntaxError, UndefinedVariableError, DuplicateDeclarationError,
	ConstAssignmentError, NotCallableError, TypeMismatchError, StackOverflowError, Report,
)
from .tree_walker.executive import Engine, Outcome, run
