"""
The set of parse-nodes in simple form.
The parser calls these constructors with subordinate nodes in a top-down descent.
Nodes do not change once built; the evaluator only reads them.
"""
from typing import Optional, Sequence
from .ontology import Token, Nom, Expression, Statement


class Literal(Expression):
	""" Literals remember their source text, so they can be re-read. """
	value: object
	def __init__(self, token:Token, value):
		self.token = token
		self.value = value
	def source_text(self) -> str: return self.token.text
	def left(self): return self.token.slice.start
	def right(self): return self.token.slice.stop
	def __repr__(self): return "<%s %r>" % (type(self).__name__, self.value)

class NumberLiteral(Literal):
	value: float

class StringLiteral(Literal):
	value: str

class Identifier(Expression):
	def __init__(self, nom:Nom): self.nom = nom
	def left(self): return self.nom.left()
	def right(self): return self.nom.right()
	def __repr__(self): return "<ref:%s>" % self.nom.text

class ArrayLiteral(Expression):
	def __init__(self, head:Token, elts:Sequence[Expression], tail:Token):
		self.head, self.elts, self.tail = head, tuple(elts), tail
	def left(self): return self.head.slice.start
	def right(self): return self.tail.slice.stop

class ObjectLiteral(Expression):
	def __init__(self, head:Token, fields:Sequence[tuple[str, Expression]], tail:Token):
		self.head, self.fields, self.tail = head, tuple(fields), tail
	def left(self): return self.head.slice.start
	def right(self): return self.tail.slice.stop

class BinaryOp(Expression):
	def __init__(self, lhs:Expression, op:Token, rhs:Expression):
		self.lhs, self.op, self.rhs = lhs, op, rhs
	@property
	def glyph(self) -> str: return self.op.text
	def left(self): return self.lhs.left()
	def right(self): return self.rhs.right()
	def __repr__(self): return "(%r %s %r)" % (self.lhs, self.glyph, self.rhs)

class LogicalOp(BinaryOp):
	""" The short-cut operators && and || """

class Call(Expression):
	def __init__(self, callee:Nom, args:Sequence[Expression], tail:Token):
		self.callee, self.args, self.tail = callee, tuple(args), tail
	def left(self): return self.callee.left()
	def right(self): return self.tail.slice.stop
	def __repr__(self): return "<call %s%r>" % (self.callee.text, self.args)

###############################################################################

class Block(Statement):
	def __init__(self, head:Token, statements:Sequence[Statement], tail:Token):
		self.head, self.statements, self.tail = head, tuple(statements), tail
	def left(self): return self.head.slice.start
	def right(self): return self.tail.slice.stop

class VarDecl(Statement):
	def __init__(self, keyword:Token, nom:Nom, init:Expression):
		self.keyword, self.nom, self.init = keyword, nom, init
	@property
	def is_const(self) -> bool: return self.keyword.kind == "const"
	def left(self): return self.keyword.slice.start
	def right(self): return self.init.right()

class Assignment(Statement):
	def __init__(self, nom:Nom, expr:Expression):
		self.nom, self.expr = nom, expr
	def left(self): return self.nom.left()
	def right(self): return self.expr.right()

class Print(Statement):
	def __init__(self, keyword:Token, exprs:Sequence[Expression]):
		self.keyword, self.exprs = keyword, tuple(exprs)
	def left(self): return self.keyword.slice.start
	def right(self): return self.exprs[-1].right() if self.exprs else self.keyword.slice.stop

class If(Statement):
	def __init__(self, keyword:Token, cond:Expression, then_part:Block, else_part:Optional[Statement]):
		self.keyword = keyword
		self.cond, self.then_part, self.else_part = cond, then_part, else_part
	def left(self): return self.keyword.slice.start
	def right(self): return (self.else_part or self.then_part).right()

class While(Statement):
	def __init__(self, keyword:Token, cond:Expression, body:Block):
		self.keyword, self.cond, self.body = keyword, cond, body
	def left(self): return self.keyword.slice.start
	def right(self): return self.body.right()

class FunctionExpr(Expression):
	""" Anonymous function: evaluates to a closure without binding a name. """
	def __init__(self, keyword:Token, params:Sequence[Nom], body:Block):
		self.keyword, self.params, self.body = keyword, tuple(params), body
	def param_names(self) -> tuple[str, ...]: return tuple(p.text for p in self.params)
	def left(self): return self.keyword.slice.start
	def right(self): return self.body.right()

class FunctionDecl(FunctionExpr, Statement):
	def __init__(self, keyword:Token, nom:Nom, params:Sequence[Nom], body:Block):
		super().__init__(keyword, params, body)
		self.nom = nom
	def __repr__(self): return "<function %s>" % self.nom.text

class ExpressionStatement(Statement):
	def __init__(self, expr:Expression):
		self.expr = expr
	def left(self): return self.expr.left()
	def right(self): return self.expr.right()

class Empty(Statement):
	""" A lone semicolon """
	def __init__(self, token:Token): self.token = token
	def left(self): return self.token.slice.start
	def right(self): return self.token.slice.stop

