import unittest
from decimal import Decimal

from plc import syntax
from plc.front_end import parse_text, parse, ParseError, unescape
from plc.lexer import tokenize

def _expr(text) -> syntax.Expr:
	""" Parse an expression by wrapping it in a throw-away method. """
	source = parse_text("DEF main() DO print(%s); END" % text)
	return source.methods[0].statements[0].expr.args[0]

def _statements(text):
	return parse_text("DEF main() DO %s END" % text).methods[0].statements

class Programs(unittest.TestCase):

	def test_empty(self):
		source = parse_text("")
		self.assertEqual([], source.fields)
		self.assertEqual([], source.methods)

	def test_declaration_counts(self):
		text = """
			LET a: Integer = 1;
			LET b: String;
			DEF f(x: Integer, y: Decimal): Boolean DO RETURN TRUE; END
			DEF main() DO END
		"""
		source = parse(tokenize(text))
		self.assertEqual(2, len(source.fields))
		self.assertEqual(2, len(source.methods))
		f = source.methods[0]
		self.assertEqual("f", f.name)
		self.assertEqual(["x", "y"], f.parameters)
		self.assertEqual(["Integer", "Decimal"], f.parameter_type_names)
		self.assertEqual("Boolean", f.return_type_name)
		self.assertIsNone(source.methods[1].return_type_name)
		self.assertIsNone(source.fields[1].value)

	def test_spans(self):
		text = "LET a: Integer = 1;"
		field = parse_text(text).fields[0]
		self.assertEqual((0, len(text)), field.span())

	def test_round_trip_through_str(self):
		text = "DEF main() DO LET x: Integer = [1 + 2]; IF [x < 3] DO print(x); ELSE x = 0; END END"
		source = parse_text(text.replace("[", "").replace("]", ""))
		self.assertEqual(text, str(source))

class Expressions(unittest.TestCase):

	def test_precedence(self):
		for text, expect in [
			("1 + 2 * 3", "[1 + [2 * 3]]"),
			("1 * 2 + 3", "[[1 * 2] + 3]"),
			("1 - 2 - 3", "[[1 - 2] - 3]"),
			("a < b AND c", "[[a < b] AND c]"),
			("a OR b AND c", "[[a OR b] AND c]"),
			("a + b == c", "[[a + b] == c]"),
			("(1 + 2) * 3", "[([1 + 2]) * 3]"),
		]:
			with self.subTest(text):
				self.assertEqual(expect, str(_expr(text)))

	def test_member_chain(self):
		expr = _expr("a.b.c()")
		self.assertIsInstance(expr, syntax.Call)
		self.assertEqual("c", expr.name)
		self.assertIsInstance(expr.receiver, syntax.Access)
		self.assertEqual("b", expr.receiver.name)
		self.assertEqual("a", expr.receiver.receiver.name)
		self.assertIsNone(expr.receiver.receiver.receiver)

	def test_literals(self):
		for text, value in [
			("TRUE", True),
			("FALSE", False),
			("NIL", None),
			("12", 12),
			("-12", -12),
			("1.50", Decimal("1.50")),
			('"a\\tb"', "a\tb"),
		]:
			with self.subTest(text):
				expr = _expr(text)
				self.assertIsInstance(expr, syntax.Literal)
				self.assertEqual(value, expr.value)
				self.assertIs(type(value), type(expr.value))

	def test_character_literal(self):
		expr = _expr("'\\n'")
		self.assertIsInstance(expr.value, syntax.Char)
		self.assertEqual("\n", expr.value)

	def test_call_arguments(self):
		expr = _expr("f(1, g(), h(2, 3))")
		self.assertEqual("f", expr.name)
		self.assertEqual(3, len(expr.args))
		self.assertEqual([], expr.args[1].args)

	def test_unescape(self):
		self.assertEqual('a"b\\c\x0b', unescape('a\\"b\\\\c\\000B'))

class Statements(unittest.TestCase):

	def test_each_kind(self):
		statements = _statements("""
			LET x = 1;
			x = 2;
			print(x);
			IF TRUE DO print(1); END
			FOR i IN range(0, 3) DO print(i); END
			WHILE FALSE DO END
			RETURN x;
		""")
		self.assertEqual(
			[syntax.Declaration, syntax.Assignment, syntax.ExprStmt, syntax.IfStmt, syntax.ForStmt, syntax.WhileStmt, syntax.ReturnStmt],
			[type(s) for s in statements],
		)

	def test_assignment_target_is_any_expression(self):
		stmt = _statements("1 + 2 = 3;")[0]
		self.assertIsInstance(stmt, syntax.Assignment)
		self.assertIsInstance(stmt.receiver, syntax.Binary)

	def test_else(self):
		stmt = _statements("IF a DO b(); ELSE c(); d(); END")[0]
		self.assertEqual(1, len(stmt.then_statements))
		self.assertEqual(2, len(stmt.else_statements))

class Failures(unittest.TestCase):

	def expect(self, text, offset=None):
		with self.assertRaises(ParseError) as cm:
			parse_text(text)
		if offset is not None:
			self.assertEqual(offset, cm.exception.offset)
		return cm.exception

	def test_group_must_wrap_binary(self):
		self.expect("DEF main() DO print((1)); END", 21)
		self.expect("DEF main() DO print((x)); END", 21)

	def test_missing_semicolon(self):
		self.expect("DEF main() DO print(1) END", 23)

	def test_missing_end(self):
		text = "DEF main() DO print(1);"
		self.expect(text, len(text))

	def test_stray_top_level(self):
		self.expect("print(1);", 0)

	def test_field_after_method(self):
		self.expect("DEF main() DO END LET x: Integer;", 18)

	def test_field_needs_type(self):
		self.expect("LET x = 1;", 6)

	def test_reserved_word_is_not_a_name(self):
		self.expect("LET END: Integer;", 4)

	def test_logical_needs_both_operands(self):
		self.expect("DEF main() DO print(a AND); END")

if __name__ == '__main__':
	unittest.main()
