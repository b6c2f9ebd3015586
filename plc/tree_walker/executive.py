"""
This is the overall control for the run-time.
Fields get their values in order, methods become closures over the
program's global environment, and then main() runs.
"""
from .. import syntax
from ..space import Absent
from .types import ENV, STRICT_VALUE
from .evaluator import evaluate, RuntimeFault, UNBOUND, UNANALYZED
from .values import Closure
from . import runtime  # NOQA: This installs the evaluation methods.

def run(source:syntax.Source, environment:ENV) -> STRICT_VALUE:
	if not source.is_analyzed:
		raise RuntimeFault(UNANALYZED, "Only a program that passed analysis can run.", source)
	env = environment.child()
	for field in source.fields:
		value = None if field.value is None else evaluate(field.value, env)
		env.define_variable(field.name, field.variable.emitted_name, field.variable.type, value)
	for method in source.methods:
		fn = method.function
		env.define_function(method.name, fn.emitted_name, fn.parameter_types, fn.return_type, Closure(method, env))
	try: main = env.lookup_function("main", 0)
	except Absent as ex: raise RuntimeFault(UNBOUND, ex.args[0], source) from None
	return main.invoke(())
