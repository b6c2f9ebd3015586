"""
Recursive-descent parser, with one method per grammar rule.

Precedence, loosest first:
	logical (AND OR) -> relational (< <= > >= == !=) -> additive (+ -)
	-> multiplicative (* /) -> secondary (.member, .method(...)) -> primary

Every binary level folds to the left.
Faults point at the offending token, or just past the last token
if the input runs out early.
"""
import re
from decimal import Decimal
from typing import Sequence
from boozetools.parsing import interface
from . import syntax
from .lexer import tokenize
from .tokens import Token, IDENTIFIER, INTEGER, DECIMAL, CHARACTER, STRING, OPERATOR

class ParseError(interface.ParseError):
	""" Carries (offset, message) in its args. """
	def __init__(self, offset:int, message:str):
		super().__init__(offset, message)
		self.offset, self.message = offset, message
	def __str__(self): return "%s at offset %d" % (self.message, self.offset)

LOGICAL = ("AND", "OR")
RELATIONAL = ("<", "<=", ">", ">=", "==", "!=")
ADDITIVE = ("+", "-")
MULTIPLICATIVE = ("*", "/")

_ESCAPE = re.compile(r"\\(000B|.)")
_MEANING = {
	"b": "\b", "n": "\n", "r": "\r", "t": "\t", "f": "\f",
	"'": "'", '"': '"', "\\": "\\", "000B": "\x0b",
}

def unescape(text:str) -> str:
	return _ESCAPE.sub(lambda m: _MEANING[m.group(1)], text)

def parse(tokens:Sequence[Token]) -> syntax.Source:
	return Parser(tokens).parse_source()

def parse_text(text:str) -> syntax.Source:
	""" Convenience: Lex and then parse. """
	return parse(tokenize(text))

class Parser:
	def __init__(self, tokens:Sequence[Token]):
		self._tokens = list(tokens)
		self._index = 0

	# Token-stream mechanics:

	def has(self, offset:int=0) -> bool:
		return self._index + offset < len(self._tokens)

	def peek(self, *patterns) -> bool:
		"""
		Each pattern is either a token kind (matching any token of that kind)
		or literal text (matching an operator or reserved word of exactly that text).
		"""
		for offset, pattern in enumerate(patterns):
			if not self.has(offset): return False
			token = self._tokens[self._index + offset]
			if pattern == IDENTIFIER:
				if not token.is_word(): return False
			elif pattern in (INTEGER, DECIMAL, CHARACTER, STRING):
				if token.kind != pattern: return False
			elif token.text != pattern or token.kind not in (IDENTIFIER, OPERATOR):
				return False
		return True

	def match(self, *patterns) -> bool:
		if self.peek(*patterns):
			self._index += len(patterns)
			return True
		return False

	def previous(self) -> Token:
		return self._tokens[self._index-1]

	def here(self) -> int:
		""" Offset of the next token, or just past the end if there is none. """
		if self.has(): return self._tokens[self._index].offset
		if self._tokens: return self._tokens[-1].stop()
		return 0

	def span_from(self, start:int) -> tuple[int, int]:
		return start, self.previous().stop()

	def fail(self, message:str):
		raise ParseError(self.here(), message)

	def expect(self, pattern:str, message:str) -> Token:
		if not self.match(pattern): self.fail(message)
		return self.previous()

	def expect_name(self, what:str) -> str:
		return self.expect(IDENTIFIER, "Expected %s." % what).text

	# Declarations:

	def parse_source(self) -> syntax.Source:
		fields, methods = [], []
		while self.peek("LET"): fields.append(self.parse_field())
		while self.peek("DEF"): methods.append(self.parse_method())
		if self.has(): self.fail("Expected a field (LET) or a method (DEF).")
		return syntax.Source(fields, methods, (0, self.here()))

	def parse_field(self) -> syntax.Field:
		start = self.here()
		self.expect("LET", "Expected LET.")
		name = self.expect_name("a field name")
		self.expect(":", "A field needs a type: expected ':'.")
		type_name = self.expect_name("a type name")
		value = self.parse_expression() if self.match("=") else None
		self.expect(";", "Missing semicolon.")
		return syntax.Field(name, type_name, value, self.span_from(start))

	def parse_method(self) -> syntax.Method:
		start = self.here()
		self.expect("DEF", "Expected DEF.")
		name = self.expect_name("a method name")
		self.expect("(", "Missing opening parenthesis.")
		parameters, parameter_type_names = [], []
		if not self.peek(")"):
			while True:
				parameters.append(self.expect_name("a parameter name"))
				self.expect(":", "A parameter needs a type: expected ':'.")
				parameter_type_names.append(self.expect_name("a type name"))
				if not self.match(","): break
		self.expect(")", "Missing closing parenthesis.")
		return_type_name = self.expect_name("a return type name") if self.match(":") else None
		self.expect("DO", "Missing DO keyword.")
		statements = self.parse_block("END")
		self.expect("END", "Expected END keyword.")
		return syntax.Method(name, parameters, parameter_type_names, return_type_name, statements, self.span_from(start))

	def parse_block(self, *stoppers) -> list[syntax.Statement]:
		statements = []
		while self.has() and not any(self.peek(s) for s in stoppers):
			statements.append(self.parse_statement())
		return statements

	# Statements:

	def parse_statement(self) -> syntax.Statement:
		if self.peek("LET"): return self.parse_declaration()
		if self.peek("IF"): return self.parse_if()
		if self.peek("FOR"): return self.parse_for()
		if self.peek("WHILE"): return self.parse_while()
		if self.peek("RETURN"): return self.parse_return()
		start = self.here()
		expr = self.parse_expression()
		if self.match("="):
			value = self.parse_expression()
			self.expect(";", "Missing semicolon.")
			return syntax.Assignment(expr, value, self.span_from(start))
		self.expect(";", "Missing semicolon.")
		return syntax.ExprStmt(expr, self.span_from(start))

	def parse_declaration(self) -> syntax.Declaration:
		start = self.here()
		self.expect("LET", "Expected LET.")
		name = self.expect_name("a variable name")
		type_name = self.expect_name("a type name") if self.match(":") else None
		value = self.parse_expression() if self.match("=") else None
		self.expect(";", "Missing semicolon.")
		return syntax.Declaration(name, type_name, value, self.span_from(start))

	def parse_if(self) -> syntax.IfStmt:
		start = self.here()
		self.expect("IF", "Expected IF.")
		condition = self.parse_expression()
		self.expect("DO", "Expected DO keyword.")
		then_statements = self.parse_block("ELSE", "END")
		else_statements = self.parse_block("END") if self.match("ELSE") else []
		self.expect("END", "Expected END keyword.")
		return syntax.IfStmt(condition, then_statements, else_statements, self.span_from(start))

	def parse_for(self) -> syntax.ForStmt:
		start = self.here()
		self.expect("FOR", "Expected FOR.")
		name = self.expect_name("a loop variable name")
		self.expect("IN", "Expected IN keyword.")
		iterable = self.parse_expression()
		self.expect("DO", "Expected DO keyword.")
		statements = self.parse_block("END")
		self.expect("END", "Expected END keyword.")
		return syntax.ForStmt(name, iterable, statements, self.span_from(start))

	def parse_while(self) -> syntax.WhileStmt:
		start = self.here()
		self.expect("WHILE", "Expected WHILE.")
		condition = self.parse_expression()
		self.expect("DO", "Expected DO keyword.")
		statements = self.parse_block("END")
		self.expect("END", "Expected END keyword.")
		return syntax.WhileStmt(condition, statements, self.span_from(start))

	def parse_return(self) -> syntax.ReturnStmt:
		start = self.here()
		self.expect("RETURN", "Expected RETURN.")
		value = self.parse_expression()
		self.expect(";", "Missing semicolon.")
		return syntax.ReturnStmt(value, self.span_from(start))

	# Expressions:

	def parse_expression(self) -> syntax.Expr:
		return self.parse_logical()

	def _fold_left(self, operators, operand) -> syntax.Expr:
		expr = operand()
		while True:
			for op in operators:
				if self.match(op):
					expr = syntax.Binary(op, expr, operand())
					break
			else:
				return expr

	def parse_logical(self) -> syntax.Expr:
		return self._fold_left(LOGICAL, self.parse_relational)

	def parse_relational(self) -> syntax.Expr:
		return self._fold_left(RELATIONAL, self.parse_additive)

	def parse_additive(self) -> syntax.Expr:
		return self._fold_left(ADDITIVE, self.parse_multiplicative)

	def parse_multiplicative(self) -> syntax.Expr:
		return self._fold_left(MULTIPLICATIVE, self.parse_secondary)

	def parse_secondary(self) -> syntax.Expr:
		start = self.here()
		expr = self.parse_primary()
		while self.match("."):
			name = self.expect_name("a member name after '.'")
			if self.match("("):
				args = self.parse_arguments()
				expr = syntax.Call(expr, name, args, self.span_from(start))
			else:
				expr = syntax.Access(expr, name, self.span_from(start))
		return expr

	def parse_arguments(self) -> list[syntax.Expr]:
		""" Call this just after the opening parenthesis. """
		args = []
		if not self.match(")"):
			while True:
				args.append(self.parse_expression())
				if not self.match(","): break
			self.expect(")", "Expected closing parenthesis.")
		return args

	def parse_primary(self) -> syntax.Expr:
		start = self.here()
		if self.match("TRUE"): return syntax.Literal(True, self.span_from(start))
		if self.match("FALSE"): return syntax.Literal(False, self.span_from(start))
		if self.match("NIL"): return syntax.Literal(None, self.span_from(start))
		if self.match(INTEGER): return syntax.Literal(int(self.previous().text), self.span_from(start))
		if self.match(DECIMAL): return syntax.Literal(Decimal(self.previous().text), self.span_from(start))
		if self.match(STRING):
			return syntax.Literal(unescape(self.previous().text[1:-1]), self.span_from(start))
		if self.match(CHARACTER):
			return syntax.Literal(syntax.Char(unescape(self.previous().text[1:-1])), self.span_from(start))
		if self.match(IDENTIFIER):
			name = self.previous().text
			if self.match("("):
				args = self.parse_arguments()
				return syntax.Call(None, name, args, self.span_from(start))
			return syntax.Access(None, name, self.span_from(start))
		if self.match("("):
			inner = self.here()
			expr = self.parse_expression()
			if not isinstance(expr, syntax.Binary):
				raise ParseError(inner, "Parentheses must wrap a binary expression.")
			self.expect(")", "Expected closing parenthesis.")
			return syntax.Group(expr, self.span_from(start))
		self.fail("Expected an expression.")
