"""
The Algebra of Types
====================

Types here are nominal and few. Each is interned by name in a
process-wide registry, so identity is equality. Record types are
the only ones with members; the host defines them, since the
language itself has no syntax to declare one.

Assignability is a one-way street: `is_assignable(target, source)`
asks whether a value of type `source` may live where `target` is
expected. ANY accepts everything. COMPARABLE accepts the four types
with a natural ordering. Otherwise, only identical types agree.
"""
from typing import Iterable, Mapping, Optional
from .ontology import Variable, Function

class UnknownType(KeyError): pass
class NoSuchMember(KeyError): pass

_REGISTRY: dict[str, "Type"] = {}

def _key(name:str) -> str: return name.casefold()

class Type:
	"""
	`name` is how source text spells the type.
	`emitted_name` is how a renderer for the host target would spell it.
	"""
	def __init__(self, name:str, emitted_name:str):
		self.name = name
		self.emitted_name = emitted_name

	def __repr__(self): return self.name

	def field(self, name:str) -> Variable:
		raise NoSuchMember("%s has no fields; in particular not '%s'." % (self, name))

	def method(self, name:str, arity:int) -> Function:
		raise NoSuchMember("%s has no methods; in particular not '%s/%d'." % (self, name, arity))

class RecordType(Type):
	"""
	A record type knows its fields by name and its methods by (name, arity).
	Method procedures receive the receiver as the first argument.
	"""
	def __init__(self, name:str, emitted_name:str, fields:Mapping[str, Type], methods:Iterable[Function]):
		super().__init__(name, emitted_name)
		self._fields = {k: Variable(k, k, t, None) for k, t in fields.items()}
		self._methods = {fn.key(): fn for fn in methods}

	def field_names(self): return list(self._fields)

	def field(self, name:str) -> Variable:
		try: return self._fields[name]
		except KeyError: raise NoSuchMember("Type '%s' has fields, but not one called '%s'." % (self, name)) from None

	def method(self, name:str, arity:int) -> Function:
		try: return self._methods[name, arity]
		except KeyError: raise NoSuchMember("Type '%s' has no method '%s' taking %d argument(s)." % (self, name, arity)) from None

def intern(it:Type) -> Type:
	key = _key(it.name)
	if key in _REGISTRY:
		raise ValueError("A type called %r already exists." % it.name)
	_REGISTRY[key] = it
	return it

def lookup(name:str) -> Type:
	try: return _REGISTRY[_key(name)]
	except KeyError: raise UnknownType("There is no type called '%s'." % name) from None

def known(name:str) -> Optional[Type]:
	return _REGISTRY.get(_key(name))

ANY = intern(Type("Any", "Object"))
NIL = intern(Type("Nil", "Void"))
COMPARABLE = intern(Type("Comparable", "Comparable"))
BOOLEAN = intern(Type("Boolean", "boolean"))
INTEGER = intern(Type("Integer", "int"))
DECIMAL = intern(Type("Decimal", "double"))
CHARACTER = intern(Type("Character", "char"))
STRING = intern(Type("String", "String"))
INTEGER_ITERABLE = intern(Type("IntegerIterable", "Iterable<Integer>"))

ORDERED = frozenset([INTEGER, DECIMAL, CHARACTER, STRING])
NUMERIC = frozenset([INTEGER, DECIMAL])

def is_assignable(target:Type, source:Type) -> bool:
	if target is source: return True
	if target is ANY: return True
	if target is COMPARABLE: return source in ORDERED
	return False

class NotAssignable(TypeError):
	def __init__(self, target:Type, source:Type):
		super().__init__(target, source)
		self.target, self.source = target, source
	def __str__(self): return "Found %s where %s was expected." % (self.source, self.target)

def require_assignable(target:Type, source:Type):
	if not is_assignable(target, source):
		raise NotAssignable(target, source)
