"""
Recursive-descent parser: tokens in, a list of top-level statements out.

Precedence, loosest first:
	||
	&&
	> < ==      (at most one comparison; no chains)
	+ -
	* /
	primary     (literals, names, calls, ( ), [ ], { }, function)
"""
from typing import Optional, Sequence

from . import syntax
from .ontology import Token, Nom, nom_of
from .diagnostics import KindlingSyntaxError, Report
from .lexicon import scan, number_value, string_value

COMPARISON = frozenset(["<", ">", "=="])
ADDITIVE = frozenset(["+", "-"])
MULTIPLICATIVE = frozenset(["*", "/"])

class Parser:
	def __init__(self, tokens:Sequence[Token]):
		self._tokens = list(tokens)
		self._index = 0

	def parse(self) -> list[syntax.Statement]:
		statements = []
		while not self._at_end():
			statements.append(self.statement())
		return statements

	# Token-stream primitives:

	def _at_end(self) -> bool:
		return self._index >= len(self._tokens)

	def _peek(self, offset=0) -> Optional[Token]:
		try: return self._tokens[self._index + offset]
		except IndexError: return None

	def _check(self, *kinds:str) -> bool:
		token = self._peek()
		return token is not None and token.kind in kinds

	def _advance(self) -> Token:
		token = self._tokens[self._index]
		self._index += 1
		return token

	def _accept(self, kind:str) -> Optional[Token]:
		if self._check(kind): return self._advance()

	def _expect(self, kind:str, description:str=None) -> Token:
		if self._check(kind): return self._advance()
		raise KindlingSyntaxError(self._peek(), description or repr(kind))

	# Statements:

	def statement(self) -> syntax.Statement:
		token = self._peek()
		kind = token.kind
		if kind in ("let", "const", "var"): return self.declaration()
		if kind == "print": return self.print_statement()
		if kind == "if": return self.if_statement()
		if kind == "while": return self.while_statement()
		if kind == "{": return self.block()
		if kind == ";": return syntax.Empty(self._advance())
		if kind == "function" and self._peek(1) is not None and self._peek(1).kind == "name":
			return self.function_declaration()
		if kind == "name" and self._peek(1) is not None and self._peek(1).kind == "=":
			return self.assignment()
		expr = self.expression()
		self._expect(";")
		return syntax.ExpressionStatement(expr)

	def declaration(self) -> syntax.VarDecl:
		keyword = self._advance()
		nom = nom_of(self._expect("name", "a name to declare"))
		self._expect("=")
		init = self.expression()
		self._expect(";")
		return syntax.VarDecl(keyword, nom, init)

	def assignment(self) -> syntax.Assignment:
		nom = nom_of(self._advance())
		self._advance()
		expr = self.expression()
		self._expect(";")
		return syntax.Assignment(nom, expr)

	def print_statement(self) -> syntax.Print:
		keyword = self._advance()
		exprs = self.call_style_arguments()
		if exprs is not None: return syntax.Print(keyword, exprs)
		exprs = [self.expression()]
		while self._accept(","):
			exprs.append(self.expression())
		self._expect(";")
		return syntax.Print(keyword, exprs)

	def call_style_arguments(self) -> Optional[list[syntax.Expression]]:
		"""
		Allow `print(a, b);` as well as `print a, b;`, and `print();` for a
		blank line. The former applies only when the parenthesis closes right
		before the semicolon, so that `print (1 + 2) * 3;` still means what it says.
		"""
		if not self._check("("): return None
		depth, offset = 0, 0
		while True:
			token = self._peek(offset)
			if token is None: return None
			if token.kind in ("(", "[", "{"): depth += 1
			elif token.kind in (")", "]", "}"): depth -= 1
			offset += 1
			if depth == 0: break
		closer = self._peek(offset)
		if closer is None or closer.kind != ";": return None
		self._advance()
		exprs = self.comma_list(")")
		self._expect(")")
		self._expect(";")
		return exprs

	def if_statement(self) -> syntax.If:
		keyword = self._advance()
		cond = self.condition()
		then_part = self.block()
		else_part = None
		if self._accept("else"):
			else_part = self.if_statement() if self._check("if") else self.block()
		return syntax.If(keyword, cond, then_part, else_part)

	def while_statement(self) -> syntax.While:
		keyword = self._advance()
		cond = self.condition()
		return syntax.While(keyword, cond, self.block())

	def condition(self) -> syntax.Expression:
		self._expect("(")
		cond = self.expression()
		self._expect(")")
		return cond

	def block(self) -> syntax.Block:
		head = self._expect("{", "a block in braces")
		statements = []
		while not self._check("}"):
			if self._at_end(): raise KindlingSyntaxError(None, "'}'")
			statements.append(self.statement())
		return syntax.Block(head, statements, self._advance())

	def function_declaration(self) -> syntax.FunctionDecl:
		keyword = self._advance()
		nom = nom_of(self._advance())
		params = self.parameters()
		return syntax.FunctionDecl(keyword, nom, params, self.block())

	def parameters(self) -> list[Nom]:
		self._expect("(")
		params = []
		if not self._check(")"):
			params.append(nom_of(self._expect("name", "a parameter name")))
			while self._accept(","):
				params.append(nom_of(self._expect("name", "a parameter name")))
		self._expect(")")
		return params

	# Expressions:

	def expression(self) -> syntax.Expression:
		return self.disjunction()

	def disjunction(self) -> syntax.Expression:
		lhs = self.conjunction()
		while self._check("||"):
			lhs = syntax.LogicalOp(lhs, self._advance(), self.conjunction())
		return lhs

	def conjunction(self) -> syntax.Expression:
		lhs = self.comparison()
		while self._check("&&"):
			lhs = syntax.LogicalOp(lhs, self._advance(), self.comparison())
		return lhs

	def comparison(self) -> syntax.Expression:
		lhs = self.additive()
		if self._check(*COMPARISON):
			lhs = syntax.BinaryOp(lhs, self._advance(), self.additive())
			if self._check(*COMPARISON):
				raise KindlingSyntaxError(self._peek(), "no second comparison; chained comparisons are not supported")
		return lhs

	def additive(self) -> syntax.Expression:
		lhs = self.multiplicative()
		while self._check(*ADDITIVE):
			lhs = syntax.BinaryOp(lhs, self._advance(), self.multiplicative())
		return lhs

	def multiplicative(self) -> syntax.Expression:
		lhs = self.primary()
		while self._check(*MULTIPLICATIVE):
			lhs = syntax.BinaryOp(lhs, self._advance(), self.primary())
		return lhs

	def primary(self) -> syntax.Expression:
		token = self._peek()
		if token is None: raise KindlingSyntaxError(None, "an expression")
		kind = token.kind
		if kind == "number":
			return syntax.NumberLiteral(self._advance(), number_value(token.text))
		if kind == "string":
			return syntax.StringLiteral(self._advance(), string_value(token.text))
		if kind == "name":
			nom = nom_of(self._advance())
			if self._check("("): return self.call(nom)
			return syntax.Identifier(nom)
		if kind == "(":
			self._advance()
			expr = self.expression()
			self._expect(")")
			return expr
		if kind == "[": return self.array()
		if kind == "{": return self.record()
		if kind == "function":
			keyword = self._advance()
			params = self.parameters()
			return syntax.FunctionExpr(keyword, params, self.block())
		raise KindlingSyntaxError(token, "an expression")

	def call(self, callee:Nom) -> syntax.Call:
		self._advance()
		args = self.comma_list(")")
		return syntax.Call(callee, args, self._expect(")"))

	def array(self) -> syntax.ArrayLiteral:
		head = self._advance()
		elts = self.comma_list("]")
		return syntax.ArrayLiteral(head, elts, self._expect("]"))

	def record(self) -> syntax.ObjectLiteral:
		head = self._advance()
		fields = []
		if not self._check("}"):
			fields.append(self.field())
			while self._accept(","):
				fields.append(self.field())
		return syntax.ObjectLiteral(head, fields, self._expect("}"))

	def field(self) -> tuple[str, syntax.Expression]:
		if self._check("string"): key = string_value(self._advance().text)
		else: key = self._expect("name", "a field name").text
		self._expect(":")
		return key, self.expression()

	def comma_list(self, closer:str) -> list[syntax.Expression]:
		items = []
		if not self._check(closer):
			items.append(self.expression())
			while self._accept(","):
				items.append(self.expression())
		return items


def parse(tokens:Sequence[Token]) -> list[syntax.Statement]:
	return Parser(tokens).parse()

def parse_text(text:str, report:Report) -> list[syntax.Statement]:
	""" Scan and parse; strays go in the report as warnings. Syntax errors propagate. """
	tokens, strays = scan(text)
	for token in strays:
		report.stray_character(token)
	return parse(tokens)
