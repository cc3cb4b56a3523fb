"""
Turn syntax back into text, in a canonical layout.

The output parses to a tree of the same shape. Parentheses appear only
where precedence demands them. Number literals keep their source text.
"""
import re

from boozetools.support.foundation import Visitor

from . import syntax
from .lexicon import KEYWORDS

PRECEDENCE = {
	"||": 1,
	"&&": 2,
	"<": 3, ">": 3, "==": 3,
	"+": 4, "-": 4,
	"*": 5, "/": 5,
}
NON_ASSOCIATIVE = 3

_PLAIN_NAME = re.compile(r'[A-Za-z_]\w*$')

class Unparser(Visitor):
	def __init__(self, indent="\t"):
		self._indent = indent

	def program(self, statements) -> str:
		return "".join(self.visit(s, 0) for s in statements)

	def _line(self, depth, text):
		return self._indent * depth + text + "\n"

	def _body(self, block:syntax.Block, depth) -> str:
		inside = "".join(self.visit(s, depth + 1) for s in block.statements)
		return "{\n" + inside + self._indent * depth + "}"

	# Statements:

	def visit_Block(self, node:syntax.Block, depth):
		return self._line(depth, self._body(node, depth))

	def visit_VarDecl(self, node:syntax.VarDecl, depth):
		text = "%s %s = %s;" % (node.keyword.kind, node.nom.text, self.visit(node.init, depth))
		return self._line(depth, text)

	def visit_Assignment(self, node:syntax.Assignment, depth):
		return self._line(depth, "%s = %s;" % (node.nom.text, self.visit(node.expr, depth)))

	def visit_Print(self, node:syntax.Print, depth):
		if not node.exprs: return self._line(depth, "print();")
		return self._line(depth, "print %s;" % self._comma_list(node.exprs, depth))

	def visit_If(self, node:syntax.If, depth):
		return self._line(depth, self._if_chain(node, depth))

	def _if_chain(self, node:syntax.If, depth):
		text = "if (%s) %s" % (self.visit(node.cond, depth), self._body(node.then_part, depth))
		if isinstance(node.else_part, syntax.If):
			text += " else " + self._if_chain(node.else_part, depth)
		elif node.else_part is not None:
			text += " else " + self._body(node.else_part, depth)
		return text

	def visit_While(self, node:syntax.While, depth):
		text = "while (%s) %s" % (self.visit(node.cond, depth), self._body(node.body, depth))
		return self._line(depth, text)

	def visit_FunctionDecl(self, node:syntax.FunctionDecl, depth):
		text = "function %s(%s) %s" % (node.nom.text, ", ".join(node.param_names()), self._body(node.body, depth))
		return self._line(depth, text)

	def visit_ExpressionStatement(self, node:syntax.ExpressionStatement, depth):
		text = self.visit(node.expr, depth)
		# A leading brace would read as a block.
		if isinstance(node.expr, syntax.ObjectLiteral): text = "(%s)" % text
		return self._line(depth, text + ";")

	def visit_Empty(self, node:syntax.Empty, depth):
		return self._line(depth, ";")

	# Expressions:

	@staticmethod
	def visit_NumberLiteral(node:syntax.NumberLiteral, depth):
		return node.source_text()

	@staticmethod
	def visit_StringLiteral(node:syntax.StringLiteral, depth):
		return '"%s"' % node.value

	@staticmethod
	def visit_Identifier(node:syntax.Identifier, depth):
		return node.nom.text

	def visit_ArrayLiteral(self, node:syntax.ArrayLiteral, depth):
		return "[%s]" % self._comma_list(node.elts, depth)

	def visit_ObjectLiteral(self, node:syntax.ObjectLiteral, depth):
		fields = ["%s: %s" % (field_key(k), self.visit(e, depth)) for k, e in node.fields]
		return "{%s}" % ", ".join(fields)

	def visit_BinaryOp(self, node:syntax.BinaryOp, depth):
		level = PRECEDENCE[node.glyph]
		lhs = self._operand(node.lhs, depth, level, level == NON_ASSOCIATIVE)
		rhs = self._operand(node.rhs, depth, level, True)
		return "%s %s %s" % (lhs, node.glyph, rhs)

	def _operand(self, node, depth, level, tie_needs_parens):
		text = self.visit(node, depth)
		if isinstance(node, syntax.BinaryOp):
			inner = PRECEDENCE[node.glyph]
			if inner < level or (inner == level and tie_needs_parens):
				return "(%s)" % text
		return text

	def visit_Call(self, node:syntax.Call, depth):
		return "%s(%s)" % (node.callee.text, self._comma_list(node.args, depth))

	def visit_FunctionExpr(self, node:syntax.FunctionExpr, depth):
		return "function (%s) %s" % (", ".join(node.param_names()), self._body(node.body, depth))

	def _comma_list(self, exprs, depth):
		return ", ".join(self.visit(e, depth) for e in exprs)

def field_key(key:str) -> str:
	if _PLAIN_NAME.match(key) and key not in KEYWORDS: return key
	return '"%s"' % key

def unparse(statements) -> str:
	return Unparser().program(statements)
