import math
import unittest

from kindling import syntax
from kindling.diagnostics import (
	Report, UndefinedVariableError, NotCallableError, TypeMismatchError,
	DuplicateDeclarationError, ConstAssignmentError,
)
from kindling.environment import InnerEnv
from kindling.front_end import parse_text
from kindling.tree_walker.evaluator import evaluate
from kindling.tree_walker.runtime import binary_operation
from kindling.tree_walker.values import Primitive

class Harness(unittest.TestCase):

	def setUp(self) -> None:
		self.printed = []
		self.frame = InnerEnv()
		self.frame.define("print", Primitive(lambda *args: self.printed.append(args), "print"))
		self.frame.define("null", None, is_const=True)

	def run_text(self, text):
		value = None
		for statement in parse_text(text, Report()):
			value = evaluate(statement, self.frame)
		return value

class ArithmeticTests(Harness):

	def test_precedence(self):
		self.assertEqual(14.0, self.run_text("2 + 3 * 4;"))
		self.assertEqual(20.0, self.run_text("(2 + 3) * 4;"))

	def test_left_associativity(self):
		self.assertEqual(3.0, self.run_text("10 - 4 - 3;"))
		self.assertEqual(2.0, self.run_text("16 / 4 / 2;"))

	def test_concatenation(self):
		self.assertEqual("a1", self.run_text('"a" + 1;'))
		self.assertEqual("1a", self.run_text('1 + "a";'))
		self.assertEqual("0.5 null", self.run_text('0.5 + " " + null;'))

	def test_division_by_zero(self):
		self.assertEqual(math.inf, self.run_text("1 / 0;"))
		self.assertEqual(-math.inf, self.run_text("0 - 1 / 0;"))
		self.assertTrue(math.isnan(self.run_text("0 / 0;")))

	def test_arithmetic_wants_numbers(self):
		with self.assertRaises(TypeMismatchError) as cm:
			self.run_text('"a" - 1;')
		self.assertEqual("-", cm.exception.glyph)
		self.assertIsInstance(cm.exception.site, syntax.BinaryOp)
		with self.assertRaises(TypeMismatchError):
			self.run_text("[1] + 1;")

class ComparisonTests(unittest.TestCase):

	def test_ordering(self):
		self.assertIs(True, binary_operation("<", 1.0, 2.0))
		self.assertIs(True, binary_operation(">", "b", "a"))
		self.assertIs(True, binary_operation(">", True, False))

	def test_mixed_kinds_compare_false(self):
		self.assertIs(False, binary_operation("<", 1.0, "2"))
		self.assertIs(False, binary_operation(">", "2", 1.0))
		self.assertIs(False, binary_operation("==", 1.0, True))
		self.assertIs(False, binary_operation("==", None, 0.0))

	def test_equality(self):
		self.assertIs(True, binary_operation("==", 2.0, 2.0))
		self.assertIs(True, binary_operation("==", "x", "x"))
		self.assertIs(True, binary_operation("==", None, None))
		self.assertIs(False, binary_operation("==", math.nan, math.nan))

	def test_containers_compare_by_identity(self):
		a = [1.0]
		self.assertIs(True, binary_operation("==", a, a))
		self.assertIs(False, binary_operation("==", a, [1.0]))
		self.assertIs(False, binary_operation("==", {}, {}))

class StatementTests(Harness):

	def test_logic_short_circuits(self):
		self.assertIs(True, self.run_text("1 || undefined_thing;"))
		self.assertIs(False, self.run_text("0 && undefined_thing;"))
		self.assertIs(True, self.run_text('0 || "";'))

	def test_blocks_scope_their_declarations(self):
		self.run_text("let x = 1; { let x = 2; print x; } print x;")
		self.assertEqual([(2.0,), (1.0,)], self.printed)

	def test_block_value(self):
		self.assertEqual(3.0, self.run_text("{ 1; 2; 3; }"))
		self.assertIsNone(self.run_text("{ }"))

	def test_duplicate_declaration(self):
		with self.assertRaises(DuplicateDeclarationError):
			self.run_text("let x = 1; let x = 2;")

	def test_const(self):
		with self.assertRaises(ConstAssignmentError) as cm:
			self.run_text("const x = 5; x = 6;")
		self.assertIsInstance(cm.exception.site, syntax.Assignment)
		self.assertEqual(5.0, self.frame.resolve("x"))

	def test_if(self):
		self.run_text('if (1 < 2) { print "yes"; } else { print "no"; }')
		self.run_text('if (0) { print "yes"; } else if (null) { print "null is true"; }')
		self.run_text('if (0) { print "never"; }')
		self.assertEqual([("yes",), ("null is true",)], self.printed)

	def test_while_runs_each_iteration_in_a_fresh_frame(self):
		self.run_text("let i = 0; while (i < 3) { let j = i * 10; print j; i = i + 1; }")
		self.assertEqual([(0.0,), (10.0,), (20.0,)], self.printed)

	def test_undefined_variable(self):
		with self.assertRaises(UndefinedVariableError) as cm:
			self.run_text("print 1 + y;")
		self.assertEqual("y", cm.exception.name)
		self.assertIsInstance(cm.exception.site, syntax.Identifier)

	def test_not_callable(self):
		with self.assertRaises(NotCallableError) as cm:
			self.run_text("let x = 1; x();")
		self.assertEqual("number", cm.exception.kind)

	def test_literals(self):
		self.assertEqual([1.0, "two", [3.0]], self.run_text('[1, "two", [3]];'))
		self.assertEqual({"a": 1.0, "b c": 2.0}, self.run_text('let o = {a: 1, "b c": 2}; o;'))

	def test_pure_expressions_are_repeatable(self):
		[statement] = parse_text("(7 - 2) * 3 + 1;", Report())
		self.assertEqual(evaluate(statement, self.frame), evaluate(statement, self.frame))

class FunctionTests(Harness):

	def test_call(self):
		self.assertEqual(5.0, self.run_text("function add(a, b) { a + b; } add(2, 3);"))

	def test_arguments_are_permissive(self):
		self.assertIsNone(self.run_text("function second(a, b) { b; } second(1);"))
		self.assertEqual(1.0, self.run_text("function first(a) { a; } first(1, 2, 3);"))

	def test_recursion(self):
		text = """
			function fact(n) {
				let result = 1;
				if (n > 1) { result = n * fact(n - 1); }
				result;
			}
			fact(5);
		"""
		self.assertEqual(120.0, self.run_text(text))

	def test_mutual_recursion(self):
		text = """
			function even(n) { let r = true; if (n > 0) { r = odd(n - 1); } r; }
			function odd(n) { let r = false; if (n > 0) { r = even(n - 1); } r; }
			odd(7);
		"""
		self.frame.define("true", True)
		self.frame.define("false", False)
		self.assertIs(True, self.run_text(text))

	def test_closures_observe_later_mutation(self):
		self.run_text("let x = 1; function f() { print x; } x = 2; f();")
		self.assertEqual([(2.0,)], self.printed)

	def test_closures_share_their_captured_frame(self):
		text = """
			function counter() {
				let n = 0;
				function (by) { n = n + by; n; };
			}
			let c = counter();
			c(1); c(1); c(5);
		"""
		self.assertEqual(7.0, self.run_text(text))

if __name__ == '__main__':
	unittest.main()
