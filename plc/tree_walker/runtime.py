import operator
from decimal import Decimal, Context, MAX_PREC, MAX_EMAX, MIN_EMIN, ROUND_HALF_EVEN
from fractions import Fraction
from .. import syntax
from ..domain import STRING
from ..ontology import Variable
from ..space import Absent
from .types import ENV, STRICT_VALUE
from .evaluator import (
	evaluate, execute_block, attach_evaluation_methods,
	Returning, OUTCOME, RuntimeFault, TYPE_MISMATCH, DIVIDE_BY_ZERO, UNBOUND,
)
from .values import Record, IntegerIterable, type_of, as_text

EXACT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN, rounding=ROUND_HALF_EVEN)

ARITHMETIC = {
	int: {
		"+": operator.add,
		"-": operator.sub,
		"*": operator.mul,
	},
	Decimal: {
		"+": EXACT.add,
		"-": EXACT.subtract,
		"*": EXACT.multiply,
	},
}
ORDERING = {
	"<": operator.lt,
	"<=": operator.le,
	">": operator.gt,
	">=": operator.ge,
}
ORDERED = (int, Decimal, syntax.Char, str)
SHORTCUT = {
	"AND":False,
	"OR":True,
}

def _mismatch(expected, value:STRICT_VALUE, node) -> RuntimeFault:
	return RuntimeFault(TYPE_MISMATCH, "Expected %s, received %s." % (expected, type_of(value)), node)

def _truth(value:STRICT_VALUE, node) -> bool:
	if type(value) is not bool: raise _mismatch("Boolean", value, node)
	return value

def same(a:STRICT_VALUE, b:STRICT_VALUE) -> bool:
	""" Equal means same type and same value. 1 is not 1.0, 'a' is not "a", and 1.0 is not 1.00. """
	if type(a) is not type(b): return False
	if type(a) is Decimal: return a.as_tuple().exponent == b.as_tuple().exponent and a == b
	return a == b

def integer_divide(a:int, b:int) -> int:
	""" Truncates toward zero. """
	q = abs(a) // abs(b)
	return q if (a < 0) == (b < 0) else -q

def decimal_divide(a:Decimal, b:Decimal) -> Decimal:
	""" Quotient at the dividend's scale, rounding half to even. """
	exponent = a.as_tuple().exponent
	scaled = round(Fraction(a) / Fraction(b) / Fraction(10) ** exponent)
	return Decimal(scaled).scaleb(exponent, EXACT)

def _arithmetic(op:str, a:STRICT_VALUE, b:STRICT_VALUE, expr:syntax.Binary) -> STRICT_VALUE:
	kind = type(a)
	if kind not in ARITHMETIC: raise _mismatch("a number", a, expr.lhs)
	if type(b) is not kind: raise _mismatch(type_of(a), b, expr.rhs)
	if op == "/":
		if b == 0: raise RuntimeFault(DIVIDE_BY_ZERO, "Cannot divide %s by zero." % as_text(a), expr)
		return integer_divide(a, b) if kind is int else decimal_divide(a, b)
	return ARITHMETIC[kind][op](a, b)

def _compare(op:str, a:STRICT_VALUE, b:STRICT_VALUE, expr:syntax.Binary) -> bool:
	if type(a) not in ORDERED: raise _mismatch("Comparable", a, expr.lhs)
	if type(b) is not type(a): raise _mismatch(type_of(a), b, expr.rhs)
	return ORDERING[op](a, b)

def _record(expr:syntax.Expr, env:ENV) -> Record:
	value = evaluate(expr, env)
	if not isinstance(value, Record): raise _mismatch("a record", value, expr)
	return value

def _variable(expr:syntax.Access, env:ENV) -> Variable:
	scope = env if expr.receiver is None else _record(expr.receiver, env).scope
	try: return scope.lookup_variable(expr.name)
	except Absent as ex: raise RuntimeFault(UNBOUND, ex.args[0], expr) from None

###############################################################################

def _eval_literal(expr:syntax.Literal, env:ENV):
	return expr.value

def _eval_group(expr:syntax.Group, env:ENV):
	return evaluate(expr.expr, env)

def _eval_binary(expr:syntax.Binary, env:ENV):
	op = expr.op
	lhs = evaluate(expr.lhs, env)
	if op in SHORTCUT:
		if _truth(lhs, expr.lhs) == SHORTCUT[op]: return lhs
		return _truth(evaluate(expr.rhs, env), expr.rhs)
	rhs = evaluate(expr.rhs, env)
	if op == "==": return same(lhs, rhs)
	if op == "!=": return not same(lhs, rhs)
	if op in ORDERING: return _compare(op, lhs, rhs, expr)
	if op == "+" and expr.type is STRING: return as_text(lhs) + as_text(rhs)
	return _arithmetic(op, lhs, rhs, expr)

def _eval_access(expr:syntax.Access, env:ENV):
	return _variable(expr, env).value

def _eval_call(expr:syntax.Call, env:ENV):
	if expr.receiver is None:
		args = [evaluate(a, env) for a in expr.args]
		try: fn = env.lookup_function(expr.name, len(args))
		except Absent as ex: raise RuntimeFault(UNBOUND, ex.args[0], expr) from None
		return fn.invoke(args)
	record = _record(expr.receiver, env)
	args = [evaluate(a, env) for a in expr.args]
	try: fn = record.type.method(expr.name, len(args))
	except KeyError as ex: raise RuntimeFault(UNBOUND, ex.args[0], expr) from None
	return fn.invoke([record, *args])

###############################################################################

def _exec_expr_stmt(stmt:syntax.ExprStmt, env:ENV) -> OUTCOME:
	evaluate(stmt.expr, env)

def _exec_declaration(stmt:syntax.Declaration, env:ENV) -> OUTCOME:
	value = None if stmt.value is None else evaluate(stmt.value, env)
	env.define_variable(stmt.name, stmt.variable.emitted_name, stmt.variable.type, value)

def _exec_assignment(stmt:syntax.Assignment, env:ENV) -> OUTCOME:
	variable = _variable(stmt.receiver, env)
	variable.value = evaluate(stmt.value, env)

def _exec_if(stmt:syntax.IfStmt, env:ENV) -> OUTCOME:
	if _truth(evaluate(stmt.condition, env), stmt.condition):
		return execute_block(stmt.then_statements, env.child())
	else:
		return execute_block(stmt.else_statements, env.child())

def _exec_for(stmt:syntax.ForStmt, env:ENV) -> OUTCOME:
	iterable = evaluate(stmt.iterable, env)
	if not isinstance(iterable, IntegerIterable): raise _mismatch("IntegerIterable", iterable, stmt.iterable)
	for item in iterable:
		inner = env.child()
		inner.define_variable(stmt.name, stmt.variable.emitted_name, stmt.variable.type, item)
		outcome = execute_block(stmt.statements, inner)
		if outcome is not None: return outcome

def _exec_while(stmt:syntax.WhileStmt, env:ENV) -> OUTCOME:
	while _truth(evaluate(stmt.condition, env), stmt.condition):
		outcome = execute_block(stmt.statements, env.child())
		if outcome is not None: return outcome

def _exec_return(stmt:syntax.ReturnStmt, env:ENV) -> OUTCOME:
	return Returning(evaluate(stmt.value, env))

attach_evaluation_methods(globals())
