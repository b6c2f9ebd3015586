"""
Name-spaces with support for nested scopes.

A Scope holds two layers: variables by name, and functions by
(name, arity). Lookup walks outward through parent links, so inner
definitions shadow outer ones. The analyzer and the interpreter both
build their chains from this same class.
"""
from typing import Any, Generic, Iterable, Optional, Sequence, TypeVar
from .ontology import Variable, Function

class AlreadyExists(KeyError): pass
class Absent(KeyError): pass

K = TypeVar('K')
T = TypeVar('T')

class Layer(Generic[K, T]):
	""" Lightly enhanced dictionary: It does not like duplicate keys. """
	_symbol: dict[K, T]

	def __init__(self):
		self._symbol = {}

	def __contains__(self, key: K) -> bool:
		return key in self._symbol

	def symbol(self, key: K) -> Optional[T]:
		return self._symbol.get(key)

	def mount(self, key: K, symbol: T) -> T:
		if key in self._symbol:
			raise AlreadyExists(key)
		else:
			self._symbol[key] = symbol
			return symbol

	def each_symbol(self) -> Iterable[T]:
		return self._symbol.values()

class Scope:
	variables: Layer[str, Variable]
	functions: Layer[tuple[str, int], Function]

	def __init__(self, parent: Optional["Scope"] = None):
		self.parent = parent
		self.variables = Layer()
		self.functions = Layer()

	def child(self) -> "Scope":
		return Scope(self)

	def define_variable(self, name:str, emitted_name:str, type, value:Any) -> Variable:
		return self.variables.mount(name, Variable(name, emitted_name, type, value))

	def define_function(self, name:str, emitted_name:str, parameter_types:Sequence, return_type, procedure) -> Function:
		fn = Function(name, emitted_name, parameter_types, return_type, procedure)
		return self.functions.mount(fn.key(), fn)

	def lookup_variable(self, name:str) -> Variable:
		scope = self
		while scope is not None:
			found = scope.variables.symbol(name)
			if found is not None: return found
			scope = scope.parent
		raise Absent("The variable '%s' is not defined in this scope." % name)

	def lookup_function(self, name:str, arity:int) -> Function:
		scope = self
		while scope is not None:
			found = scope.functions.symbol((name, arity))
			if found is not None: return found
			scope = scope.parent
		raise Absent("The function '%s/%d' is not defined in this scope." % (name, arity))
