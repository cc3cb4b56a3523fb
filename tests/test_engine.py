import io
import sys
import unittest

import kindling
from kindling import Engine
from kindling.diagnostics import (
	KindlingSyntaxError, ConstAssignmentError, UndefinedVariableError, TypeMismatchError,
	StackOverflowError,
)
from kindling.tree_walker.scheduler import ManualClock

class EngineTests(unittest.TestCase):

	def setUp(self) -> None:
		self.out = io.StringIO()
		self.clock = ManualClock()
		self.engine = Engine(stdout=self.out, clock=self.clock)

	def run_text(self, text):
		return self.engine.run(text)

	def output(self):
		return self.out.getvalue().splitlines()

	def test_value_of_the_last_statement(self):
		outcome = self.run_text("let x = 2; x * 21;")
		self.assertTrue(outcome.ok)
		self.assertEqual(42.0, outcome.value)
		self.assertIsNone(outcome.error)

	def test_print_writes_text_forms(self):
		self.run_text('print 1, "a", true, null, [1], {}, 0.5; print(2 + 3);')
		self.assertEqual(["1 a true null [Array] [Object] 0.5", "5"], self.output())

	def test_const_assignment_fails_and_keeps_value(self):
		outcome = self.run_text("const x = 5; print x; x = 6; print x;")
		self.assertFalse(outcome.ok)
		self.assertIsInstance(outcome.error, ConstAssignmentError)
		self.assertEqual(["5"], self.output())

	def test_closure_sees_later_mutation(self):
		self.run_text("let x = 1; function show() { print x; } x = 2; show();")
		self.assertEqual(["2"], self.output())

	def test_nested_blocks_shadow_and_restore(self):
		self.run_text("let x = 1; { let x = 2; print x; } print x;")
		self.assertEqual(["2", "1"], self.output())

	def test_deferred_work_runs_after_the_program(self):
		self.run_text('defer(function () { print "late"; }, 0); print "early";')
		self.assertEqual(["early", "late"], self.output())

	def test_set_timeout_is_defer(self):
		self.run_text("""
			setTimeout(function () { print "second"; }, 20);
			setTimeout(function () { print "first"; }, 10);
			print "zeroth";
		""")
		self.assertEqual(["zeroth", "first", "second"], self.output())

	def test_deferred_callback_sees_its_closure(self):
		self.run_text("""
			function later(msg) { defer(function () { print msg, n; }, 5); }
			let n = 1;
			later("n is");
			n = 2;
		""")
		self.assertEqual(["n is 2"], self.output())

	def test_deferred_arguments(self):
		self.run_text('defer(function (a, b) { print a + b; }, 0, 40, 2);')
		self.assertEqual(["42"], self.output())

	def test_bad_defer_is_ignored(self):
		outcome = self.run_text('defer(1, 0); defer(function () { print "x"; }); print "ok";')
		self.assertTrue(outcome.ok)
		self.assertEqual(["ok"], self.output())

	def test_error_in_a_task_abandons_the_rest(self):
		outcome = self.run_text("""
			defer(function () { print "one"; }, 0);
			defer(function () { nonesuch; }, 0);
			defer(function () { print "three"; }, 0);
		""")
		self.assertIsInstance(outcome.error, UndefinedVariableError)
		self.assertEqual(["one"], self.output())
		self.assertEqual(0, len(self.engine.queue))

	def test_output_before_an_error_stays(self):
		outcome = self.run_text('print "before"; print "x" - 1; print "after";')
		self.assertIsInstance(outcome.error, TypeMismatchError)
		self.assertEqual(["before"], self.output())
		self.assertTrue(self.engine.report.sick())

	def test_syntax_error_prevents_running(self):
		outcome = self.run_text('print "hello"; print 1 +;')
		self.assertIsInstance(outcome.error, KindlingSyntaxError)
		self.assertEqual([], self.output())

	def test_strays_are_warnings(self):
		outcome = self.run_text("print 1 $;")
		self.assertTrue(outcome.ok)
		self.assertEqual(1, len(outcome.warnings))
		self.assertEqual(["1"], self.output())

	def test_host_registration(self):
		self.engine.register("shout", lambda s: s.upper() + "!")
		self.engine.define("greeting", "hello")
		outcome = self.run_text("shout(greeting);")
		self.assertEqual("HELLO!", outcome.value)

	def test_registered_names_are_constant(self):
		for name in ("len", "str", "defer", "true"):
			with self.subTest(name):
				outcome = self.run_text("%s = 1;" % name)
				self.assertIsInstance(outcome.error, ConstAssignmentError)

	def test_scripts_may_shadow_natives(self):
		outcome = self.run_text("let len = 3; len;")
		self.assertEqual(3.0, outcome.value)

	def test_runs_do_not_share_globals(self):
		self.assertTrue(self.run_text("let x = 1;").ok)
		self.assertTrue(self.run_text("let x = 2;").ok)
		self.assertIsInstance(self.run_text("x;").error, UndefinedVariableError)

	def test_len_and_str(self):
		self.assertEqual(3.0, self.run_text('len("abc");').value)
		self.assertEqual(2.0, self.run_text('len([1, 2]);').value)
		self.assertIsNone(self.run_text('len(5);').value)
		self.assertEqual("2.5", self.run_text('str(2.5);').value)

	def test_natives_tolerate_any_number_of_arguments(self):
		self.assertEqual("null", self.run_text("str();").value)
		self.assertIsNone(self.run_text("len();").value)
		self.assertEqual(3.0, self.run_text('len("abc", 1, 2);').value)
		self.assertEqual("7", self.run_text("str(7, 8);").value)

	def test_empty_print_writes_a_blank_line(self):
		self.assertTrue(self.run_text('print(); print "x";').ok)
		self.assertEqual(["", "x"], self.output())

	def test_deep_recursion_is_fine(self):
		outcome = self.run_text("""
			function down(n) { let r = 0; if (n > 0) { r = 1 + down(n - 1); } r; }
			down(300);
		""")
		self.assertTrue(outcome.ok, outcome.error)
		self.assertEqual(300.0, outcome.value)

	def test_unbounded_recursion_is_an_error(self):
		limit = sys.getrecursionlimit()
		outcome = self.run_text('defer(function () { print "never"; }, 0); function forever(n) { forever(n + 1); } forever(0);')
		self.assertIsInstance(outcome.error, StackOverflowError)
		self.assertEqual([], self.output())
		self.assertEqual(0, len(self.engine.queue))
		self.assertEqual(limit, sys.getrecursionlimit())
		self.assertTrue(self.run_text("print 1;").ok)

	def test_unbounded_recursion_in_a_task(self):
		outcome = self.run_text("function forever() { forever(); } defer(forever, 0);")
		self.assertIsInstance(outcome.error, StackOverflowError)

	def test_non_finite_delays_are_ignored(self):
		outcome = self.run_text("""
			defer(function () { print "nan"; }, 0 / 0);
			defer(function () { print "forever"; }, 1 / 0);
			print "sync";
		""")
		self.assertTrue(outcome.ok)
		self.assertEqual(["sync"], self.output())
		self.assertEqual(0, self.clock.now_ms())

	def test_module_level_run(self):
		out = io.StringIO()
		outcome = kindling.run("print 6 * 7;", stdout=out, clock=ManualClock())
		self.assertTrue(outcome.ok)
		self.assertEqual("42\n", out.getvalue())

if __name__ == '__main__':
	unittest.main()
