import unittest

from plc.lexer import tokenize, LexError
from plc.tokens import IDENTIFIER, INTEGER, DECIMAL, CHARACTER, STRING, OPERATOR

def _kinds(text):
	return [t.kind for t in tokenize(text)]

def _texts(text):
	return [t.text for t in tokenize(text)]

class SingleTokens(unittest.TestCase):
	""" A well-formed lone lexeme comes back as exactly one token of the right kind, at offset zero. """

	def test_each_kind(self):
		for text, kind in [
			("x", IDENTIFIER),
			("_hidden", IDENTIFIER),
			("kebab-case-name", IDENTIFIER),
			("LET", IDENTIFIER),
			("42", INTEGER),
			("-42", INTEGER),
			("+7", INTEGER),
			("3.25", DECIMAL),
			("-0.5", DECIMAL),
			("'a'", CHARACTER),
			("'\\n'", CHARACTER),
			('"hello"', STRING),
			('"tab\\there"', STRING),
			('"\\000B"', STRING),
			('""', STRING),
			("<=", OPERATOR),
			(">=", OPERATOR),
			("==", OPERATOR),
			("!=", OPERATOR),
			("<", OPERATOR),
			(";", OPERATOR),
		]:
			with self.subTest(text):
				tokens = tokenize(text)
				self.assertEqual(1, len(tokens))
				self.assertEqual(kind, tokens[0].kind)
				self.assertEqual(text, tokens[0].text)
				self.assertEqual(0, tokens[0].offset)

	def test_whitespace_gives_nothing(self):
		self.assertEqual([], tokenize(" \t\r\n\f"))
		self.assertEqual([], tokenize(""))

class Sequences(unittest.TestCase):

	def test_offsets(self):
		tokens = tokenize("LET x = 5;")
		self.assertEqual(["LET", "x", "=", "5", ";"], [t.text for t in tokens])
		self.assertEqual([0, 4, 6, 8, 9], [t.offset for t in tokens])

	def test_sign_needs_a_digit(self):
		self.assertEqual(["a", "-", "b"], _texts("a - b"))
		self.assertEqual(["a", "-5"], _texts("a -5"))
		self.assertEqual(["X", "+5"], _texts("X+5"))

	def test_dot_is_ungreedy(self):
		self.assertEqual(["1", ".", "x"], _texts("1.x"))
		self.assertEqual([DECIMAL, OPERATOR, INTEGER], _kinds("1.5.2"))

	def test_relational_operators_are_greedy(self):
		self.assertEqual(["<=", "=", "!=", "!"], _texts("<= = != !"))
		self.assertEqual(["=", "="], _texts("= ="))

	def test_member_access(self):
		self.assertEqual([IDENTIFIER, OPERATOR, IDENTIFIER, OPERATOR, OPERATOR], _kinds("p.move()"))

	def test_raw_text_is_kept(self):
		self.assertEqual(['"a\\"b"'], _texts('"a\\"b"'))

class Failures(unittest.TestCase):

	def expect(self, text, offset):
		with self.assertRaises(LexError) as cm:
			tokenize(text)
		self.assertEqual(offset, cm.exception.offset)

	def test_unterminated_string(self):
		self.expect('"abc', 4)

	def test_string_across_lines(self):
		self.expect('x = "ab\ncd"', 7)

	def test_bad_escape(self):
		self.expect('"\\q"', 2)

	def test_empty_character(self):
		self.expect("''", 1)

	def test_character_newline(self):
		self.expect("'\n'", 1)

	def test_unterminated_character(self):
		self.expect("'", 1)
		self.expect("'a", 2)
		self.expect("'\\n", 3)

	def test_long_character(self):
		self.expect("'ab'", 2)

	def test_long_escape_is_only_for_strings(self):
		self.expect("'\\000B'", 2)

if __name__ == '__main__':
	unittest.main()
