"""
The built-in environment, and the means for a host program to extend it.

One root Scope serves both the analyzer and the interpreter: its
functions carry signatures for the former and Primitive procedures
for the latter. Each run should start from a fresh root, since the
interpreter defines globals into a child of it.
"""
import sys
from typing import Callable, Iterable, Mapping, Sequence, TextIO
from . import domain
from .domain import Type, RecordType, ANY, NIL, INTEGER, INTEGER_ITERABLE
from .ontology import Function
from .space import Scope
from .tree_walker.values import Primitive, Record, IntegerIterable, as_text

def root_scope(out:TextIO=None) -> Scope:
	"""
	Seed a scope with print and range. `print` writes to `out`,
	which defaults to whatever sys.stdout is at call time.
	"""
	def do_print(value):
		stream = sys.stdout if out is None else out
		stream.write(as_text(value) + "\n")
		return None
	scope = Scope()
	scope.define_function("print", "System.out.println", [ANY], NIL, Primitive(do_print))
	scope.define_function("range", "range", [INTEGER, INTEGER], INTEGER_ITERABLE, Primitive(IntegerIterable))
	return scope

MethodSpec = tuple[str, Sequence[Type], Type, Callable]

def define_record_type(name:str, fields:Mapping[str, Type], methods:Iterable[MethodSpec]=()) -> RecordType:
	"""
	Register a record type under `name` for the rest of the process.
	Each method is (name, parameter_types, return_type, fn), where `fn`
	takes the receiver first and then the arguments. Defining the same
	name twice is a ValueError.
	"""
	functions = [
		Function(method_name, method_name, parameter_types, return_type, Primitive(fn))
		for method_name, parameter_types, return_type, fn in methods
	]
	return domain.intern(RecordType(name, name, fields, functions))

def new_record(rtype:RecordType, **values) -> Record:
	""" Missing fields start out NIL. """
	return Record(rtype, **values)
