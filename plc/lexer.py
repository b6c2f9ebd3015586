"""
Character-level scanner.

The scanner never backs up: it classifies each token by its first
character (or two), then runs forward to the end of that token.
Every failure is reported at the offset of the character that
cannot start or complete a token.
"""
from typing import Iterator
from boozetools.parsing import interface
from .tokens import Token, IDENTIFIER, INTEGER, DECIMAL, CHARACTER, STRING, OPERATOR

WHITESPACE = frozenset(" \t\n\x0b\f\r\b")
NEWLINE = frozenset("\n\r")
DIGIT = frozenset("0123456789")
SIGN = frozenset("+-")
LETTER = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_")
WORD = LETTER | DIGIT | {"-"}
ESCAPE = frozenset("bnrtf'\"\\")
LONG_ESCAPE = "000B"
RELATIONAL = frozenset("<>!=")

class LexError(interface.ParseError):
	""" Carries (offset, message) in its args. """
	def __init__(self, offset:int, message:str):
		super().__init__(offset, message)
		self.offset, self.message = offset, message
	def __str__(self): return "%s at offset %d" % (self.message, self.offset)

def tokenize(source:str) -> list[Token]:
	return list(Scanner(source).each_token())

class Scanner:
	def __init__(self, text:str):
		self._text = text
		self._index = 0
		self._start = 0

	def has(self, offset:int=0) -> bool:
		return self._index + offset < len(self._text)

	def get(self, offset:int=0) -> str:
		return self._text[self._index + offset]

	def peek(self, *classes) -> bool:
		""" True if the next few characters belong to each given class, in order. """
		for offset, cls in enumerate(classes):
			if not self.has(offset) or self.get(offset) not in cls:
				return False
		return True

	def advance(self, n:int=1):
		self._index += n

	def emit(self, kind:str) -> Token:
		return Token(kind, self._text[self._start:self._index], self._start)

	def fail(self, offset:int, message:str):
		raise LexError(self._index + offset, message)

	def each_token(self) -> Iterator[Token]:
		while self.has():
			if self.peek(WHITESPACE):
				self.advance()
			else:
				self._start = self._index
				yield self.scan_token()

	def scan_token(self) -> Token:
		if self.peek(SIGN, DIGIT) or self.peek(DIGIT): return self.scan_number()
		if self.peek('"'): return self.scan_string()
		if self.peek("'"): return self.scan_character()
		if self.peek(LETTER): return self.scan_identifier()
		return self.scan_operator()

	def scan_identifier(self) -> Token:
		self.advance()
		while self.peek(WORD): self.advance()
		return self.emit(IDENTIFIER)

	def scan_number(self) -> Token:
		# A dot only belongs to the number when a digit follows it.
		self.advance()
		kind = INTEGER
		while True:
			if self.peek(DIGIT):
				self.advance()
			elif kind == INTEGER and self.peek(".", DIGIT):
				kind = DECIMAL
				self.advance(2)
			else:
				return self.emit(kind)

	def scan_string(self) -> Token:
		self.advance()
		while not self.peek('"'):
			if not self.has():
				self.fail(0, "Unterminated string literal")
			if self.peek(NEWLINE):
				self.fail(0, "A string literal must close on the line where it opens")
			if self.peek("\\"):
				self.scan_escape(allow_long=True)
			else:
				self.advance()
		self.advance()
		return self.emit(STRING)

	def scan_escape(self, allow_long:bool):
		if self.peek("\\", ESCAPE):
			self.advance(2)
		elif allow_long and self._text.startswith(LONG_ESCAPE, self._index+1):
			self.advance(1+len(LONG_ESCAPE))
		else:
			self.fail(1, "Invalid escape sequence")

	def scan_character(self) -> Token:
		if not self.has(1):
			self.fail(1, "Unterminated character literal")
		if self.peek("'", "'"):
			self.fail(1, "A character literal cannot be empty")
		if self.peek("'", NEWLINE):
			self.fail(1, "A character literal must close on the line where it opens")
		self.advance()
		if self.peek("\\"):
			if not self.has(1): self.fail(1, "Unterminated character literal")
			self.scan_escape(allow_long=False)
		else:
			self.advance()
		if not self.has():
			self.fail(0, "Unterminated character literal")
		if not self.peek("'"):
			self.fail(0, "A character literal holds exactly one character")
		self.advance()
		return self.emit(CHARACTER)

	def scan_operator(self) -> Token:
		if self.peek(RELATIONAL, "="): self.advance(2)
		else: self.advance()
		return self.emit(OPERATOR)
