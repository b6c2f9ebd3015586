"""
The generic machinery that everything needs,
without the specific methods corresponding to particular syntax.

Expressions evaluate to values. Statements execute to an outcome:
None for carrying on normally, or a Returning carrying the value of
a RETURN up to the nearest method call. Every block and loop passes
a Returning outward untouched. Environments are passed down
explicitly, so a block's scope is gone once its executor returns,
however it returns.
"""
from typing import NamedTuple, Optional, Sequence
from .. import syntax
from ..ontology import Phrase
from .types import ENV, STRICT_VALUE

TYPE_MISMATCH = "type"
DIVIDE_BY_ZERO = "divide by zero"
UNBOUND = "unbound"
ARITY = "arity"
UNANALYZED = "unanalyzed"

class RuntimeFault(Exception):
	""" Something went wrong that static checking could not rule out. """
	def __init__(self, kind:str, message:str, node:Optional[Phrase]=None):
		super().__init__(kind, message)
		self.kind, self.message, self.node = kind, message, node
	def __str__(self): return "%s: %s" % (self.kind, self.message)

class Returning(NamedTuple):
	value: STRICT_VALUE

OUTCOME = Optional[Returning]

def evaluate(expr:syntax.Expr, env:ENV) -> STRICT_VALUE:
	try: fn = EVALUATE[type(expr)]
	except KeyError: raise NotImplementedError(type(expr), expr)
	return fn(expr, env)

def execute(stmt:syntax.Statement, env:ENV) -> OUTCOME:
	try: fn = EXECUTE[type(stmt)]
	except KeyError: raise NotImplementedError(type(stmt), stmt)
	return fn(stmt, env)

def execute_block(statements:Sequence[syntax.Statement], env:ENV) -> OUTCOME:
	for stmt in statements:
		outcome = execute(stmt, env)
		if outcome is not None:
			return outcome
	return None

EVALUATE = {}
EXECUTE = {}

def attach_evaluation_methods(python_scope):
	for _k, _v in list(python_scope.items()):
		if _k.startswith("_eval_"):
			_t = _v.__annotations__["expr"]
			assert isinstance(_t, type), (_k, _t)
			EVALUATE[_t] = _v
		elif _k.startswith("_exec_"):
			_t = _v.__annotations__["stmt"]
			assert isinstance(_t, type), (_k, _t)
			EXECUTE[_t] = _v
