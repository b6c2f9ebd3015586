"""
The set of parse-nodes.
The parser calls these constructors as it recognizes each phrase.
Class-level type annotations make peace with the IDE wherever later passes add fields.

Decoration slots (a resolved type or binding) start out empty and
are settled exactly once, by the analyzer. Renderers and the
interpreter read them afterward.
"""
from typing import Any, Optional, Sequence
from .ontology import Phrase, Variable, Function

class AlreadyResolved(Exception):
	""" Somebody tried to settle a decoration slot a second time, differently. """
	pass

def _settle(node:Phrase, slot:str, value):
	prior = getattr(node, slot)
	if prior is not None and prior is not value:
		raise AlreadyResolved(node, slot, prior, value)
	setattr(node, slot, value)
	return value

class Char(str):
	""" A character plays itself, but must not be mistaken for a one-letter string. """
	__slots__ = ()
	def __repr__(self): return "Char(%s)" % str.__repr__(self)

###############################################################################

class Expr(Phrase):
	type = None  # The analyzer fills this in.
	def resolve_type(self, it): return _settle(self, "type", it)

class Literal(Expr):
	def __init__(self, value:Any, span=(0, 0)):
		self.value, self._span = value, span
	def __str__(self):
		if self.value is None: return "NIL"
		if self.value is True: return "TRUE"
		if self.value is False: return "FALSE"
		if isinstance(self.value, Char): return "'%s'" % self.value
		if isinstance(self.value, str): return '"%s"' % self.value
		return str(self.value)

class Group(Expr):
	def __init__(self, expr:Expr, span=(0, 0)):
		self.expr, self._span = expr, span
	def __str__(self): return "(%s)" % self.expr

class Binary(Expr):
	def __init__(self, op:str, lhs:Expr, rhs:Expr, span=None):
		self.op, self.lhs, self.rhs = op, lhs, rhs
		self._span = span or (lhs.left(), rhs.right())
	def __str__(self): return "[%s %s %s]" % (self.lhs, self.op, self.rhs)

class Access(Expr):
	variable: Optional[Variable] = None  # The analyzer fills this in.
	def __init__(self, receiver:Optional[Expr], name:str, span=(0, 0)):
		self.receiver, self.name, self._span = receiver, name, span
	def resolve_variable(self, it:Variable): return _settle(self, "variable", it)
	def __str__(self):
		return self.name if self.receiver is None else "%s.%s" % (self.receiver, self.name)

class Call(Expr):
	function: Optional[Function] = None  # The analyzer fills this in.
	def __init__(self, receiver:Optional[Expr], name:str, args:Sequence[Expr], span=(0, 0)):
		self.receiver, self.name, self.args, self._span = receiver, name, list(args), span
	def resolve_function(self, it:Function): return _settle(self, "function", it)
	def __str__(self):
		call = "%s(%s)" % (self.name, ", ".join(map(str, self.args)))
		return call if self.receiver is None else "%s.%s" % (self.receiver, call)

###############################################################################

class Statement(Phrase):
	pass

class ExprStmt(Statement):
	def __init__(self, expr:Expr, span=(0, 0)):
		self.expr, self._span = expr, span
	def __str__(self): return "%s;" % self.expr

class Declaration(Statement):
	variable: Optional[Variable] = None  # The analyzer fills this in.
	def __init__(self, name:str, type_name:Optional[str], value:Optional[Expr], span=(0, 0)):
		self.name, self.type_name, self.value, self._span = name, type_name, value, span
	def resolve_variable(self, it:Variable): return _settle(self, "variable", it)
	def __str__(self):
		annotation = "" if self.type_name is None else ": "+self.type_name
		initial = "" if self.value is None else " = %s" % self.value
		return "LET %s%s%s;" % (self.name, annotation, initial)

class Assignment(Statement):
	def __init__(self, receiver:Expr, value:Expr, span=(0, 0)):
		self.receiver, self.value, self._span = receiver, value, span
	def __str__(self): return "%s = %s;" % (self.receiver, self.value)

class IfStmt(Statement):
	def __init__(self, condition:Expr, then_statements:Sequence[Statement], else_statements:Sequence[Statement], span=(0, 0)):
		self.condition, self._span = condition, span
		self.then_statements = list(then_statements)
		self.else_statements = list(else_statements)
	def __str__(self):
		text = "IF %s DO %s" % (self.condition, _block(self.then_statements))
		if self.else_statements: text += " ELSE %s" % _block(self.else_statements)
		return text + " END"

class ForStmt(Statement):
	variable: Optional[Variable] = None  # The analyzer fills this in.
	def __init__(self, name:str, iterable:Expr, statements:Sequence[Statement], span=(0, 0)):
		self.name, self.iterable, self.statements, self._span = name, iterable, list(statements), span
	def resolve_variable(self, it:Variable): return _settle(self, "variable", it)
	def __str__(self): return "FOR %s IN %s DO %s END" % (self.name, self.iterable, _block(self.statements))

class WhileStmt(Statement):
	def __init__(self, condition:Expr, statements:Sequence[Statement], span=(0, 0)):
		self.condition, self.statements, self._span = condition, list(statements), span
	def __str__(self): return "WHILE %s DO %s END" % (self.condition, _block(self.statements))

class ReturnStmt(Statement):
	def __init__(self, value:Expr, span=(0, 0)):
		self.value, self._span = value, span
	def __str__(self): return "RETURN %s;" % self.value

def _block(statements): return " ".join(map(str, statements))

###############################################################################

class Field(Phrase):
	variable: Optional[Variable] = None  # The analyzer fills this in.
	def __init__(self, name:str, type_name:str, value:Optional[Expr], span=(0, 0)):
		self.name, self.type_name, self.value, self._span = name, type_name, value, span
	def resolve_variable(self, it:Variable): return _settle(self, "variable", it)
	def __str__(self):
		initial = "" if self.value is None else " = %s" % self.value
		return "LET %s: %s%s;" % (self.name, self.type_name, initial)

class Method(Phrase):
	function: Optional[Function] = None  # The analyzer fills this in.
	def __init__(
			self,
			name:str,
			parameters:Sequence[str],
			parameter_type_names:Sequence[str],
			return_type_name:Optional[str],
			statements:Sequence[Statement],
			span=(0, 0),
	):
		assert len(parameters) == len(parameter_type_names)
		self.name = name
		self.parameters = list(parameters)
		self.parameter_type_names = list(parameter_type_names)
		self.return_type_name = return_type_name
		self.statements = list(statements)
		self._span = span
	def resolve_function(self, it:Function): return _settle(self, "function", it)
	def __str__(self):
		params = ", ".join("%s: %s" % p for p in zip(self.parameters, self.parameter_type_names))
		result = "" if self.return_type_name is None else ": "+self.return_type_name
		return "DEF %s(%s)%s DO %s END" % (self.name, params, result, _block(self.statements))

class Source(Phrase):
	analysis_begun = False  # Set when the analyzer first sees the tree.
	is_analyzed = False  # Set only once analysis succeeds.
	def __init__(self, fields:Sequence[Field], methods:Sequence[Method], span=(0, 0)):
		self.fields, self.methods, self._span = list(fields), list(methods), span
	def __str__(self): return " ".join(map(str, self.fields + self.methods))
