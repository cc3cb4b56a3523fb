"""
Everything to do with things going wrong, and with telling people about it.

The exceptions here are raised where trouble is found and caught once,
at the boundary of a run. The Report turns them into booze-tools Issues
which know how to draw a picture of the offending source text.
"""
import sys
from typing import Optional

from boozetools.parsing.interface import ParseError
from boozetools.support.failureprone import SourceText, Issue, Evidence, Severity

from .ontology import Token, Phrase

class KindlingError(Exception):
	""" Base class for trouble that is the script's fault rather than the interpreter's. """
	phase = "running"
	site: Optional[Phrase] = None

	def at(self, site:Phrase) -> "KindlingError":
		""" Remember the innermost node where this surfaced, if nobody has yet. """
		if self.site is None: self.site = site
		return self

	def where(self) -> Optional[slice]:
		return None if self.site is None else self.site.span()

	def describe(self) -> str: return str(self)

class KindlingSyntaxError(KindlingError, ParseError):
	phase = "parsing"
	def __init__(self, token:Optional[Token], expected:str):
		super().__init__(token, expected)
		self.token, self.expected = token, expected

	def where(self) -> Optional[slice]:
		return None if self.token is None else self.token.slice

	def describe(self) -> str:
		found = "the end of the text" if self.token is None else repr(self.token.text)
		return "Expected %s but found %s." % (self.expected, found)

class UndefinedVariableError(KindlingError):
	def __init__(self, name:str):
		super().__init__(name)
		self.name = name
	def describe(self): return "Undefined variable: %s" % self.name

class DuplicateDeclarationError(KindlingError):
	def __init__(self, name:str):
		super().__init__(name)
		self.name = name
	def describe(self): return "'%s' is already declared in this scope." % self.name

class ConstAssignmentError(KindlingError):
	def __init__(self, name:str):
		super().__init__(name)
		self.name = name
	def describe(self): return "Cannot reassign const variable: %s" % self.name

class NotCallableError(KindlingError):
	def __init__(self, name:str, kind:str):
		super().__init__(name, kind)
		self.name, self.kind = name, kind
	def describe(self): return "Not a function: %s (it is %s)" % (self.name, self.kind)

class TypeMismatchError(KindlingError):
	def __init__(self, glyph:str, lhs_kind:str, rhs_kind:str):
		super().__init__(glyph, lhs_kind, rhs_kind)
		self.glyph, self.lhs_kind, self.rhs_kind = glyph, lhs_kind, rhs_kind
	def describe(self):
		return "Operator %s needs numbers, not %s and %s." % (self.glyph, self.lhs_kind, self.rhs_kind)

class StackOverflowError(KindlingError):
	""" Calls nested too deeply for the host to follow. """
	def describe(self): return "Calls nested too deeply: the stack overflowed."

###############################################################################

SOURCE = "source"

class Report:
	""" Collects the issues of a run; optionally chats about progress on stderr. """
	issues : list[Issue]

	def __init__(self, *, verbose:int=0, filename:str=None):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._filename = filename
		self._source = SourceText("")
		self.issues = []

	def ok(self): return not any(i.severity == Severity.ERROR for i in self.issues)
	def sick(self): return not self.ok()
	def warnings(self) -> list[Issue]:
		return [i for i in self.issues if i.severity == Severity.WARNING]

	def reset(self, text:str):
		""" A fresh run begins. """
		self._source = SourceText(text, filename=self._filename)
		self.issues.clear()

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def stray_character(self, token:Token):
		description = "Ignoring a character I don't recognize: %r" % token.text
		self._issue("scanning", Severity.WARNING, description, token.slice)

	def error(self, ex:KindlingError):
		self._issue(ex.phase, Severity.ERROR, ex.describe(), ex.where())

	def _issue(self, phase:str, severity:Severity, description:str, where:Optional[slice]):
		evidence = {} if where is None else {SOURCE: [Evidence(where)]}
		self.issues.append(Issue(phase, severity, description, evidence))

	def _fetch(self, key) -> SourceText:
		assert key == SOURCE, key
		return self._source

	def as_text(self) -> str:
		return "\n".join(issue.as_text(self._fetch) for issue in self.issues)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		for issue in self.issues:
			issue.emit(self._fetch)
		sys.stderr.flush()
