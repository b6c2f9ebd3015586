"""
The vocabulary shared between the lexer and the parser.

A token carries its raw source text, delimiters and escapes included.
Turning that text into a value is the parser's business, not the lexer's.
"""
from typing import NamedTuple

IDENTIFIER = "identifier"
INTEGER = "integer"
DECIMAL = "decimal"
CHARACTER = "character"
STRING = "string"
OPERATOR = "operator"

RESERVED = frozenset("""
	LET DEF DO END IF ELSE FOR IN WHILE RETURN
	TRUE FALSE NIL AND OR
""".split())

class Token(NamedTuple):
	kind: str
	text: str
	offset: int

	def stop(self) -> int:
		""" The offset just past the last character of this token """
		return self.offset + len(self.text)

	def is_word(self) -> bool:
		return self.kind == IDENTIFIER and self.text not in RESERVED
