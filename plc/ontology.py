"""
These most-fundamental classes sit apart from the rest to avoid
circular imports. The syntax tree, the type domain, the scope chain
and both evaluators all speak in terms of phrases and bindings.

A binding is what a name resolves to: a Variable (a shared value cell)
or a Function (a signature plus whatever can be called).
"""
from typing import Any, Optional, Sequence

class Phrase:
	""" Anything that occupies a stretch of the source text. """
	_span: tuple[int, int] = (0, 0)
	def left(self) -> int:
		""" Return the offset of the first character of this phrase """
		return self._span[0]
	def right(self) -> int:
		""" Return the offset just past the last character of this phrase """
		return self._span[1]
	def span(self) -> tuple[int, int]: return self.left(), self.right()

class Variable:
	"""
	The value cell is mutable and shared: every reader and writer
	of "the same variable" holds this very object, never a copy.
	"""
	def __init__(self, name:str, emitted_name:str, type, value:Any):
		self.name = name
		self.emitted_name = emitted_name
		self.type = type
		self.value = value
	def __repr__(self): return "<var %s:%s>" % (self.name, self.type)

class Function:
	"""
	A signature, plus a procedure. The procedure is anything with
	an `apply(args)` method. The analyzer's bindings for user methods
	have none; the interpreter supplies closures.
	"""
	def __init__(self, name:str, emitted_name:str, parameter_types:Sequence, return_type, procedure:Optional[Any]):
		self.name = name
		self.emitted_name = emitted_name
		self.parameter_types = tuple(parameter_types)
		self.return_type = return_type
		self.procedure = procedure

	def arity(self) -> int: return len(self.parameter_types)
	def key(self) -> tuple[str, int]: return self.name, self.arity()

	def invoke(self, args:Sequence) -> Any:
		return self.procedure.apply(args)

	def __repr__(self):
		return "<fn %s(%s):%s>" % (self.name, ", ".join(map(str, self.parameter_types)), self.return_type)
