"""
This module defines the specialized value-types that the tree-walker operates in terms of.
Basic primitive values play themselves, but special things like closures need more help.
"""
from abc import abstractmethod
from decimal import Decimal
from typing import Iterator
from .. import syntax, domain
from ..domain import Type, RecordType
from ..space import Scope
from .types import ARGS, STRICT_VALUE, ENV
from .evaluator import execute_block, RuntimeFault, ARITY

class Procedure:
	""" A run-time object that can be applied with arguments. """
	@abstractmethod
	def apply(self, args: ARGS) -> STRICT_VALUE: pass

class Closure(Procedure):
	""" The run-time manifestation of a method: tied to the environment where it was defined. """
	def __init__(self, method:syntax.Method, static_link:ENV):
		self._method = method
		self._static_link = static_link

	def __str__(self): return self._method.name

	def apply(self, args: ARGS) -> STRICT_VALUE:
		method = self._method
		if len(args) != len(method.parameters):
			message = "%s wants %d argument(s) but got %d." % (method.name, len(method.parameters), len(args))
			raise RuntimeFault(ARITY, message, method)
		env = self._static_link.child()
		for name, type, value in zip(method.parameters, method.function.parameter_types, args):
			env.define_variable(name, name, type, value)
		outcome = execute_block(method.statements, env)
		return None if outcome is None else outcome.value

class Primitive(Procedure):
	""" Host-provided code. Arguments arrive already evaluated. """
	def __init__(self, fn: callable):
		self._fn = fn

	def apply(self, args: ARGS) -> STRICT_VALUE:
		return self._fn(*args)

class Record:
	"""
	An instance of a host-defined record type.
	Each field is a Variable in a private scope, so field access
	and assignment work the same way variables do.
	"""
	def __init__(self, type:RecordType, **values):
		self.type = type
		self.scope = Scope()
		for name in type.field_names():
			template = type.field(name)
			self.scope.define_variable(name, template.emitted_name, template.type, values.pop(name, None))
		if values:
			raise TypeError("%s has no field(s) called %s" % (type, ", ".join(values)))

	def __getitem__(self, name:str) -> STRICT_VALUE:
		return self.scope.lookup_variable(name).value

	def __setitem__(self, name:str, value:STRICT_VALUE):
		self.scope.lookup_variable(name).value = value

	def __repr__(self):
		fields = ", ".join("%s:%s" % (v.name, as_text(v.value)) for v in self.scope.variables.each_symbol())
		return "%s{%s}" % (self.type, fields)

class IntegerIterable:
	""" The sequence of integers from start up to (but not including) stop. """
	def __init__(self, start:int, stop:int):
		self.start, self.stop = start, stop
	def __iter__(self) -> Iterator[int]: return iter(range(self.start, self.stop))
	def __repr__(self): return "range(%d, %d)" % (self.start, self.stop)

def type_of(value:STRICT_VALUE) -> Type:
	""" Best-effort description for error messages. """
	if value is None: return domain.NIL
	if isinstance(value, bool): return domain.BOOLEAN
	if isinstance(value, int): return domain.INTEGER
	if isinstance(value, Decimal): return domain.DECIMAL
	if isinstance(value, syntax.Char): return domain.CHARACTER
	if isinstance(value, str): return domain.STRING
	if isinstance(value, Record): return value.type
	if isinstance(value, IntegerIterable): return domain.INTEGER_ITERABLE
	return domain.ANY

def as_text(value:STRICT_VALUE) -> str:
	""" The way print and string concatenation spell a value. """
	if value is None: return "NIL"
	if value is True: return "TRUE"
	if value is False: return "FALSE"
	if isinstance(value, Decimal): return format(value, "f")
	return str(value)
