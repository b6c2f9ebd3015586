"""
Single-pass static checking: resolve every name, type every expression,
and decorate the tree in place as we go.

Fields go in first (in order, so no forward references among them),
then all method signatures, and only then the method bodies. That way
methods may call each other in any order, but a field initializer
cannot see a method at all.

The first problem ends the pass. There is no recovery.
"""
from typing import Optional, Sequence
from boozetools.parsing import interface
from boozetools.support.foundation import Visitor
from .. import syntax, domain
from ..domain import Type, NIL, BOOLEAN, INTEGER, DECIMAL, CHARACTER, STRING, COMPARABLE, INTEGER_ITERABLE
from ..ontology import Phrase
from ..space import Scope, Absent, AlreadyExists

INT_MIN, INT_MAX = -2**31, 2**31-1

class SemanticError(interface.SemanticError):
	""" Carries a message, and the guilty phrase if there is one. """
	def __init__(self, message:str, node:Optional[Phrase]=None):
		super().__init__(message, node)
		self.message, self.node = message, node
	def __str__(self): return self.message

def analyze(source:syntax.Source, scope:Scope):
	Analyzer(scope).check_source(source)

class Analyzer(Visitor):
	_scope: Scope
	_return_type: Optional[Type]

	def __init__(self, parent:Scope):
		self._scope = parent.child()
		self._return_type = None

	@property
	def scope(self) -> Scope:
		""" The global scope of the program, once checked. """
		return self._scope

	def check(self, expr:syntax.Expr) -> Type:
		self.visit(expr)
		assert expr.type is not None, expr
		return expr.type

	def tour(self, items):
		for i in items: self.visit(i)

	def _block(self, statements:Sequence[syntax.Statement], scope:Scope):
		outer, self._scope = self._scope, scope
		try: self.tour(statements)
		finally: self._scope = outer

	@staticmethod
	def _type_named(name:str, node:Phrase) -> Type:
		try: return domain.lookup(name)
		except domain.UnknownType as ex: raise SemanticError(ex.args[0], node) from None

	@staticmethod
	def _require_assignable(target:Type, source:Type, node:Phrase):
		try: domain.require_assignable(target, source)
		except domain.NotAssignable as ex: raise SemanticError(str(ex), node) from None

	def _define_variable(self, name:str, type:Type, node:Phrase):
		try: return self._scope.define_variable(name, name, type, None)
		except AlreadyExists: raise SemanticError("'%s' is defined more than once in the same scope." % name, node) from None

	def check_source(self, source:syntax.Source):
		if source.analysis_begun:
			raise SemanticError("This program has already been analyzed.", source)
		source.analysis_begun = True
		self.tour(source.fields)
		for method in source.methods: self._declare_method(method)
		self.tour(source.methods)
		try: main = self._scope.lookup_function("main", 0)
		except Absent: raise SemanticError("A program needs a main() method taking no arguments.", source) from None
		if main.return_type is INTEGER:
			raise SemanticError("The main() method may not return an Integer.", source)
		source.is_analyzed = True

	def visit_Field(self, field:syntax.Field):
		type = self._type_named(field.type_name, field)
		if field.value is not None:
			self._require_assignable(type, self.check(field.value), field.value)
		field.resolve_variable(self._define_variable(field.name, type, field))

	def _declare_method(self, method:syntax.Method):
		parameter_types = [self._type_named(t, method) for t in method.parameter_type_names]
		if method.return_type_name is None: return_type = NIL
		else: return_type = self._type_named(method.return_type_name, method)
		try: fn = self._scope.define_function(method.name, method.name, parameter_types, return_type, None)
		except AlreadyExists:
			raise SemanticError("'%s/%d' is defined more than once." % (method.name, len(parameter_types)), method) from None
		method.resolve_function(fn)

	def visit_Method(self, method:syntax.Method):
		fn = method.function
		outer, self._scope = self._scope, self._scope.child()
		try:
			for name, type in zip(method.parameters, fn.parameter_types):
				self._define_variable(name, type, method)
			self._return_type = fn.return_type
			self.tour(method.statements)
		finally:
			self._scope, self._return_type = outer, None

	def visit_ExprStmt(self, stmt:syntax.ExprStmt):
		if not isinstance(stmt.expr, syntax.Call):
			raise SemanticError("An expression standing alone as a statement must be a call.", stmt)
		self.check(stmt.expr)

	def visit_Declaration(self, stmt:syntax.Declaration):
		if stmt.type_name is None and stmt.value is None:
			raise SemanticError("Declaring '%s' needs a type or an initial value to infer one from." % stmt.name, stmt)
		type = None if stmt.type_name is None else self._type_named(stmt.type_name, stmt)
		if stmt.value is not None:
			value_type = self.check(stmt.value)
			if type is None: type = value_type
			self._require_assignable(type, value_type, stmt.value)
		stmt.resolve_variable(self._define_variable(stmt.name, type, stmt))

	def visit_Assignment(self, stmt:syntax.Assignment):
		if not isinstance(stmt.receiver, syntax.Access):
			raise SemanticError("Only a variable or a field can be assigned to.", stmt.receiver)
		target = self.check(stmt.receiver)
		source = self.check(stmt.value)
		if target is not source:
			raise SemanticError("Cannot assign %s to %s, which is %s." % (source, stmt.receiver, target), stmt)

	def visit_IfStmt(self, stmt:syntax.IfStmt):
		self._require_assignable(BOOLEAN, self.check(stmt.condition), stmt.condition)
		if not stmt.then_statements:
			raise SemanticError("An IF statement needs something to do when the condition holds.", stmt)
		self._block(stmt.then_statements, self._scope.child())
		self._block(stmt.else_statements, self._scope.child())

	def visit_ForStmt(self, stmt:syntax.ForStmt):
		self._require_assignable(INTEGER_ITERABLE, self.check(stmt.iterable), stmt.iterable)
		if not stmt.statements:
			raise SemanticError("A FOR loop needs a body.", stmt)
		scope = self._scope.child()
		stmt.resolve_variable(scope.define_variable(stmt.name, stmt.name, INTEGER, None))
		self._block(stmt.statements, scope)

	def visit_WhileStmt(self, stmt:syntax.WhileStmt):
		self._require_assignable(BOOLEAN, self.check(stmt.condition), stmt.condition)
		self._block(stmt.statements, self._scope.child())

	def visit_ReturnStmt(self, stmt:syntax.ReturnStmt):
		if self._return_type is None:
			raise SemanticError("RETURN can only appear within a method.", stmt)
		self._require_assignable(self._return_type, self.check(stmt.value), stmt.value)

	def visit_Literal(self, expr:syntax.Literal):
		value = expr.value
		if value is None: expr.resolve_type(NIL)
		elif isinstance(value, bool): expr.resolve_type(BOOLEAN)
		elif isinstance(value, syntax.Char): expr.resolve_type(CHARACTER)
		elif isinstance(value, str): expr.resolve_type(STRING)
		elif isinstance(value, int):
			if not INT_MIN <= value <= INT_MAX:
				raise SemanticError("The integer %d does not fit in 32 bits." % value, expr)
			expr.resolve_type(INTEGER)
		else:
			if float(value) in (float("inf"), float("-inf")):
				raise SemanticError("The decimal %s is too large to represent." % value, expr)
			expr.resolve_type(DECIMAL)

	def visit_Group(self, expr:syntax.Group):
		if not isinstance(expr.expr, syntax.Binary):
			raise SemanticError("Parentheses must wrap a binary expression.", expr)
		expr.resolve_type(self.check(expr.expr))

	def visit_Binary(self, expr:syntax.Binary):
		lhs, rhs = self.check(expr.lhs), self.check(expr.rhs)
		op = expr.op
		if op in ("AND", "OR"):
			if lhs is not BOOLEAN or rhs is not BOOLEAN:
				raise SemanticError("%s works on Boolean values, not %s and %s." % (op, lhs, rhs), expr)
			expr.resolve_type(BOOLEAN)
		elif op == "+" and STRING in (lhs, rhs):
			expr.resolve_type(STRING)
		elif op in ("+", "-", "*", "/"):
			if lhs not in domain.NUMERIC or rhs is not lhs:
				raise SemanticError("Arithmetic needs two Integers or two Decimals, not %s and %s." % (lhs, rhs), expr)
			expr.resolve_type(lhs)
		else:
			self._require_assignable(COMPARABLE, lhs, expr.lhs)
			self._require_assignable(COMPARABLE, rhs, expr.rhs)
			expr.resolve_type(BOOLEAN)

	def visit_Access(self, expr:syntax.Access):
		if expr.receiver is None:
			try: variable = self._scope.lookup_variable(expr.name)
			except Absent as ex: raise SemanticError(ex.args[0], expr) from None
		else:
			try: variable = self.check(expr.receiver).field(expr.name)
			except domain.NoSuchMember as ex: raise SemanticError(ex.args[0], expr) from None
		expr.resolve_variable(variable)
		expr.resolve_type(variable.type)

	def visit_Call(self, expr:syntax.Call):
		arity = len(expr.args)
		if expr.receiver is None:
			try: fn = self._scope.lookup_function(expr.name, arity)
			except Absent as ex: raise SemanticError(ex.args[0], expr) from None
		else:
			try: fn = self.check(expr.receiver).method(expr.name, arity)
			except domain.NoSuchMember as ex: raise SemanticError(ex.args[0], expr) from None
		for arg, parameter_type in zip(expr.args, fn.parameter_types):
			self._require_assignable(parameter_type, self.check(arg), arg)
		expr.resolve_function(fn)
		expr.resolve_type(fn.return_type)
