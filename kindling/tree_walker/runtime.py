import math
import operator

from .. import syntax
from ..diagnostics import DuplicateDeclarationError, NotCallableError, TypeMismatchError
from .types import ENV, VALUE, ARGS, kind_of, NULL, NUMBER, STRING, BOOL
from .evaluator import evaluate, attach_evaluation_methods
from .values import Function, Closure, as_text, is_truthy

def _divide(a:float, b:float) -> float:
	# Division by zero gives what IEEE arithmetic would.
	if b: return a / b
	if a == 0 or a != a: return math.nan
	return math.copysign(math.inf, a) * math.copysign(1.0, b)

ARITHMETIC = {
	"+" : operator.add,
	"-" : operator.sub,
	"*" : operator.mul,
	"/" : _divide,
}

ORDERED = {
	"<" : operator.lt,
	">" : operator.gt,
}

SHORTCUT = {
	"&&":False,
	"||":True,
}

# Values of these kinds compare by content; anything else by identity.
STRUCTURAL = frozenset([NULL, NUMBER, STRING, BOOL])

def binary_operation(glyph:str, a:VALUE, b:VALUE) -> VALUE:
	ka, kb = kind_of(a), kind_of(b)
	if glyph == "+" and STRING in (ka, kb):
		return as_text(a) + as_text(b)
	if glyph in ARITHMETIC:
		if ka == kb == NUMBER: return ARITHMETIC[glyph](a, b)
		raise TypeMismatchError(glyph, ka, kb)
	if glyph == "==":
		if ka != kb: return False
		return a == b if ka in STRUCTURAL else a is b
	if ka == kb and ka in (NUMBER, STRING, BOOL):
		return ORDERED[glyph](a, b)
	# Incomparable things are neither less nor greater.
	return False

def call_function(name:str, fn:VALUE, args:ARGS) -> VALUE:
	if not isinstance(fn, Function):
		raise NotCallableError(name, kind_of(fn))
	return fn.apply(args)

###############################################################################

def _eval_number(node:syntax.NumberLiteral, frame:ENV):
	return node.value

def _eval_string(node:syntax.StringLiteral, frame:ENV):
	return node.value

def _eval_identifier(node:syntax.Identifier, frame:ENV):
	return frame.resolve(node.nom.text)

def _eval_array(node:syntax.ArrayLiteral, frame:ENV):
	return [evaluate(e, frame) for e in node.elts]

def _eval_object(node:syntax.ObjectLiteral, frame:ENV):
	return {key: evaluate(e, frame) for key, e in node.fields}

def _eval_bin_op(node:syntax.BinaryOp, frame:ENV):
	a = evaluate(node.lhs, frame)
	b = evaluate(node.rhs, frame)
	return binary_operation(node.glyph, a, b)

def _eval_logical(node:syntax.LogicalOp, frame:ENV):
	lhs = is_truthy(evaluate(node.lhs, frame))
	if lhs == SHORTCUT[node.glyph]: return lhs
	return is_truthy(evaluate(node.rhs, frame))

def _eval_call(node:syntax.Call, frame:ENV):
	name = node.callee.text
	fn = frame.resolve(name)
	args = [evaluate(a, frame) for a in node.args]
	return call_function(name, fn, args)

def _eval_function_expr(node:syntax.FunctionExpr, frame:ENV):
	return Closure(node, frame)

###############################################################################

def _eval_block(node:syntax.Block, frame:ENV):
	inner = frame.child()
	value = None
	for statement in node.statements:
		value = evaluate(statement, inner)
	return value

def _eval_var_decl(node:syntax.VarDecl, frame:ENV):
	name = node.nom.text
	value = evaluate(node.init, frame)
	if frame.holds(name):
		raise DuplicateDeclarationError(name)
	return frame.define(name, value, node.is_const)

def _eval_assignment(node:syntax.Assignment, frame:ENV):
	return frame.assign(node.nom.text, evaluate(node.expr, frame))

def _eval_print(node:syntax.Print, frame:ENV):
	args = [evaluate(e, frame) for e in node.exprs]
	return call_function("print", frame.resolve("print"), args)

def _eval_if(node:syntax.If, frame:ENV):
	if is_truthy(evaluate(node.cond, frame)):
		return evaluate(node.then_part, frame)
	if node.else_part is not None:
		return evaluate(node.else_part, frame)

def _eval_while(node:syntax.While, frame:ENV):
	while is_truthy(evaluate(node.cond, frame)):
		evaluate(node.body, frame)

def _eval_function_decl(node:syntax.FunctionDecl, frame:ENV):
	# Bound in the very frame it captures, so it can call itself.
	return frame.define(node.nom.text, Closure(node, frame))

def _eval_expression_statement(node:syntax.ExpressionStatement, frame:ENV):
	return evaluate(node.expr, frame)

def _eval_empty(node:syntax.Empty, frame:ENV):
	return

attach_evaluation_methods(globals())
