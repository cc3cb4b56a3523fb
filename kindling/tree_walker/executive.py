"""
This is the overall control for the run-time: the part an embedding host talks to.

An Engine owns a root frame full of natives, a task queue, and a Report.
Each run gets a fresh global frame just inside the root, so that one
script's declarations do not collide with the next one's.
"""
import sys
import math
from contextlib import contextmanager
from typing import NamedTuple, Optional, Callable

from boozetools.support.failureprone import Issue

from .. import syntax
from ..diagnostics import KindlingError, StackOverflowError, Report
from ..environment import InnerEnv
from ..front_end import parse_text
from .types import VALUE, kind_of, NUMBER, STRING, LIST, OBJECT
from .evaluator import evaluate
from .values import Function, Primitive, from_host, as_text
from .scheduler import TaskQueue
from . import runtime  # NOQA: fills the evaluation table.

# Each script-level call costs about a dozen Python frames.
RECURSION_LIMIT = 8000

@contextmanager
def recursion_limit(depth:int):
	prior = sys.getrecursionlimit()
	sys.setrecursionlimit(max(prior, depth))
	try: yield
	finally: sys.setrecursionlimit(prior)

class Outcome(NamedTuple):
	value: VALUE
	error: Optional[KindlingError]
	warnings: list[Issue]

	@property
	def ok(self) -> bool: return self.error is None

class Engine:
	def __init__(self, *, stdout=None, clock=None, by_time:bool=False, report:Report=None):
		self._stdout = stdout
		self.report = report or Report()
		self.queue = TaskQueue(clock, by_time=by_time, report=self.report)
		self.root = InnerEnv()
		for name, value in (("true", True), ("false", False), ("null", None)):
			self.root.define(name, value, is_const=True)
		self.register("print", self._print)
		self.register("defer", self._defer)
		self.register("setTimeout", self._defer)
		self.register("len", self._len)
		self.register("str", self._str)

	def register(self, name:str, fn:Callable) -> Primitive:
		""" Expose a host callable to scripts under the given name. """
		primitive = Primitive(fn, name)
		self.root.define(name, primitive, is_const=True)
		return primitive

	def define(self, name:str, value) -> VALUE:
		return self.root.define(name, from_host(value))

	@property
	def stdout(self):
		return self._stdout or sys.stdout

	def parse(self, text:str) -> list[syntax.Statement]:
		""" Syntax only. Raises KindlingSyntaxError; strays go in the report. """
		self.report.reset(text)
		return parse_text(text, self.report)

	def run(self, text:str) -> Outcome:
		self.queue.clear()
		try:
			with recursion_limit(RECURSION_LIMIT):
				try:
					program = self.parse(text)
					value = self.execute(program)
				except RecursionError:
					raise StackOverflowError() from None
		except KindlingError as ex:
			self.queue.clear()
			self.report.error(ex)
			return Outcome(None, ex, self.report.warnings())
		return Outcome(value, None, self.report.warnings())

	def execute(self, program:list[syntax.Statement]) -> VALUE:
		"""
		All the top-level statements run, in order, before any deferred task.
		The value of the program is that of its last top-level statement.
		"""
		frame = self.root.child()
		value = None
		self.report.info("Running %d statement(s)..." % len(program))
		for statement in program:
			value = evaluate(statement, frame)
		self.queue.drain()
		return value

	# Natives:

	def _print(self, *args):
		print(*map(as_text, args), file=self.stdout)

	def _defer(self, callback=None, delay=None, *args):
		# Anything that is not a function and a finite delay is quietly ignored.
		if isinstance(callback, Function) and kind_of(delay) == NUMBER and math.isfinite(delay):
			self.queue.defer(delay, callback, args)

	@staticmethod
	def _len(it=None, *_):
		if kind_of(it) in (STRING, LIST, OBJECT): return len(it)

	@staticmethod
	def _str(value=None, *_):
		return as_text(value)

def run(text:str, **engine_options) -> Outcome:
	""" One-shot convenience: a fresh engine runs the text. """
	return Engine(**engine_options).run(text)
