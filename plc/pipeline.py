"""
Drive the four stages over one text.

Each stage either succeeds, leaving its product on the Program,
or files its fault with the Report and raises Yuck naming the stage.
"""
from pathlib import Path
from typing import Optional
from . import lexer, front_end, syntax, preamble
from .diagnostics import Report
from .space import Scope
from .static.check import analyze, SemanticError
from .tree_walker.evaluator import RuntimeFault
from .tree_walker.executive import run
from .tree_walker.types import STRICT_VALUE

class Yuck(Exception):
	"""
	The first argument will be the name of the pass fraught with error.
	The end-user might not care about this, but it's handy for testing.
	"""
	pass

class Program:
	source: syntax.Source
	scope: Scope

	def __init__(self, text:str, report:Report, path:Optional[Path]=None, scope:Optional[Scope]=None):
		self.report = report
		self.scope = preamble.root_scope() if scope is None else scope
		report.set_source(text, path)

		report.info("Lexing", path or "text")
		try: tokens = lexer.tokenize(text)
		except lexer.LexError as ex:
			report.lex_error(ex)
			raise Yuck("lex")

		report.info("Parsing %d tokens" % len(tokens))
		try: self.source = front_end.parse(tokens)
		except front_end.ParseError as ex:
			report.parse_error(ex)
			raise Yuck("parse")

		report.info("Analyzing %d field(s) and %d method(s)" % (len(self.source.fields), len(self.source.methods)))
		try: analyze(self.source, self.scope)
		except SemanticError as ex:
			report.semantic_error(ex)
			raise Yuck("analyze")

	@classmethod
	def from_file(cls, path:Path, report:Report, scope:Optional[Scope]=None) -> "Program":
		with open(path, "r", encoding="utf-8") as fh:
			text = fh.read()
		return cls(text, report, path=path, scope=scope)

	def run(self, environment:Optional[Scope]=None) -> STRICT_VALUE:
		""" Runs main() in the same scope it was checked against, unless told otherwise. """
		self.report.info("Running")
		try: return run(self.source, self.scope if environment is None else environment)
		except RuntimeFault as ex:
			self.report.runtime_fault(ex)
			raise Yuck("run")
