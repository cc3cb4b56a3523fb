"""
This is the simple task-queue version of a scheduler.

Everything happens on one thread. The only way to suspend anything is to
defer a callback, which lands here to be run once the synchronous part
of the program is finished. Each engine owns its own queue.
"""
import time
from typing import Optional

from ..diagnostics import Report
from .types import ARGS
from .values import Function

# Milliseconds to wait when nothing is ready yet.
POLL_INTERVAL = 10

class WallClock:
	""" Real time, in milliseconds, from a clock that never runs backwards. """
	def now_ms(self) -> float:
		return time.monotonic() * 1000.0
	def sleep(self, ms:float):
		time.sleep(ms / 1000.0)

class ManualClock:
	"""
	Virtual time: it only moves when someone sleeps or calls advance.
	Makes deferred-task behavior deterministic, which tests appreciate.
	"""
	def __init__(self, start:float=0):
		self._now = start
	def now_ms(self) -> float:
		return self._now
	def sleep(self, ms:float):
		self._now += ms
	def advance(self, ms:float):
		self._now += ms

class Task:
	""" Interface for things that can go in the queue. """
	execute_at: float
	def proceed(self):
		raise NotImplementedError(type(self))

class DeferredCall(Task):
	""" Apply a function later, to the arguments as they were when deferred. """
	def __init__(self, execute_at:float, fn:Function, args:ARGS=()):
		self.execute_at = execute_at
		self._fn = fn
		self._args = tuple(args)
	def __repr__(self): return "<deferred %r @%s>" % (self._fn, self.execute_at)
	def proceed(self):
		self._fn.apply(self._args)

class TaskQueue:
	"""
	Tasks wait here until their time arrives. By default each pass visits the
	pending tasks in the order they were enqueued; with by_time it visits
	the ready ones earliest-first instead.
	"""
	def __init__(self, clock=None, *, by_time:bool=False, report:Optional[Report]=None):
		self.clock = clock or WallClock()
		self.by_time = by_time
		self._report = report or Report()
		self._tasks = []
		self._serial = 0

	def __len__(self): return len(self._tasks)

	def insert_task(self, task:Task):
		self._tasks.append((self._serial, task))
		self._serial += 1

	def enqueue(self, execute_at:float, fn:Function, args:ARGS=()) -> DeferredCall:
		task = DeferredCall(execute_at, fn, args)
		self.insert_task(task)
		return task

	def defer(self, delay_ms:float, fn:Function, args:ARGS=()) -> DeferredCall:
		return self.enqueue(self.clock.now_ms() + delay_ms, fn, args)

	def clear(self):
		self._tasks.clear()

	def drain(self):
		"""
		Run everything, including whatever the tasks themselves defer.
		If a task raises, the rest are thrown away and the exception propagates.
		"""
		if self._tasks:
			self._report.info("Processing deferred tasks...")
		try:
			while self._tasks:
				if not self._run_ready():
					self.clock.sleep(POLL_INTERVAL)
		finally:
			self.clear()

	def _run_ready(self) -> bool:
		now = self.clock.now_ms()
		ready = [entry for entry in self._tasks if entry[1].execute_at <= now]
		if not ready: return False
		if self.by_time:
			ready.sort(key=lambda entry: (entry[1].execute_at, entry[0]))
		for entry in ready:
			self._tasks.remove(entry)
			entry[1].proceed()
		return True
