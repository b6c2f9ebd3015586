"""
Collect faults, and explain them against the source text.

Lexer and parser faults point at an offset. Semantic errors and
run-time faults point at a node, when they have one, and the
illustration underlines that node's whole span.
"""
import sys
from typing import Any, Optional
from boozetools.support.failureprone import SourceText, illustration
from .ontology import Phrase

class Annotation:
	def __init__(self, source:SourceText, size:int, start:int, stop:int, caption:str=""):
		self.source, self.size = source, size
		self.start, self.stop = start, stop
		self.caption = caption

	def illustrate(self) -> str:
		if not self.size: return ""
		start = max(0, min(self.start, self.size-1))
		row, col = self.source.find_row_col(start)
		single_line = self.source.line_of_text(row)
		width = max(1, min(self.stop, self.size) - start)
		return illustration(single_line, col, width, prefix='% 6d |' % row, caption=self.caption)

class Pic:
	def __init__(self, intro:str, anns:list[Annotation], footer=()):
		self._intro, self._anns, self._footer = intro, anns, footer
	def as_text(self):
		lines = [self._intro, ""]
		lines.extend(ann.illustrate() for ann in self._anns)
		lines.extend(self._footer)
		return '\n'.join(lines)

class Report:
	""" Collects issues. The pipeline stops at the first, so there is rarely more than one. """
	_issues : list[Pic]

	def __init__(self, *, verbose:int=0):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._source, self._size = SourceText(""), 0
		self._path = None

	def set_source(self, text:str, path=None):
		self._source = SourceText(text, filename=None if path is None else str(path))
		self._size = len(text)
		self._path = path

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	def issue(self, it:Pic):
		self._issues.append(it)

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def _footer(self):
		return [] if self._path is None else ["in " + str(self._path)]

	def _at_offset(self, intro:str, offset:int, caption:str):
		ann = Annotation(self._source, self._size, offset, offset+1, caption)
		self.issue(Pic(intro, [ann], self._footer()))

	def _at_node(self, intro:str, node:Optional[Phrase], caption:str=""):
		anns = [] if node is None else [Annotation(self._source, self._size, node.left(), node.right(), caption)]
		self.issue(Pic(intro, anns, self._footer()))

	# One method per stage:

	def lex_error(self, ex:Any):
		self._at_offset("The lexer could not make sense of this text.", ex.offset, ex.message)

	def parse_error(self, ex:Any):
		self._at_offset("The parser got confused.", ex.offset, ex.message)

	def semantic_error(self, ex:Any):
		self._at_node("This program does not make sense: "+ex.message, ex.node)

	def runtime_fault(self, ex:Any):
		self._at_node("Run-time fault (%s): %s" % (ex.kind, ex.message), ex.node, "while doing this")

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(message)

def _bemoan(issues):
	if issues:
		print("*"*60, file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
