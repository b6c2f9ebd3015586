import unittest

from plc import domain
from plc.domain import ANY, NIL, COMPARABLE, BOOLEAN, INTEGER, DECIMAL, CHARACTER, STRING, INTEGER_ITERABLE
from plc.space import Scope, Absent, AlreadyExists

EVERY_TYPE = [ANY, NIL, COMPARABLE, BOOLEAN, INTEGER, DECIMAL, CHARACTER, STRING, INTEGER_ITERABLE]

class Assignability(unittest.TestCase):

	def test_identity(self):
		for t in EVERY_TYPE:
			with self.subTest(t):
				self.assertTrue(domain.is_assignable(t, t))

	def test_anything_goes_to_any(self):
		for t in EVERY_TYPE:
			with self.subTest(t):
				self.assertTrue(domain.is_assignable(ANY, t))

	def test_comparable(self):
		for t in EVERY_TYPE:
			with self.subTest(t):
				expect = t in (COMPARABLE, INTEGER, DECIMAL, CHARACTER, STRING)
				self.assertEqual(expect, domain.is_assignable(COMPARABLE, t))

	def test_no_widening_otherwise(self):
		self.assertFalse(domain.is_assignable(DECIMAL, INTEGER))
		self.assertFalse(domain.is_assignable(INTEGER, DECIMAL))
		self.assertFalse(domain.is_assignable(STRING, CHARACTER))
		self.assertFalse(domain.is_assignable(INTEGER, ANY))
		self.assertFalse(domain.is_assignable(INTEGER, COMPARABLE))
		self.assertFalse(domain.is_assignable(NIL, INTEGER))

	def test_require(self):
		domain.require_assignable(COMPARABLE, STRING)
		with self.assertRaises(domain.NotAssignable) as cm:
			domain.require_assignable(BOOLEAN, INTEGER)
		self.assertEqual("Found Integer where Boolean was expected.", str(cm.exception))

class Registry(unittest.TestCase):

	def test_lookup_ignores_case(self):
		for name in ["Integer", "INTEGER", "integer"]:
			with self.subTest(name):
				self.assertIs(INTEGER, domain.lookup(name))

	def test_unknown(self):
		with self.assertRaises(domain.UnknownType):
			domain.lookup("Banana")
		self.assertIsNone(domain.known("Banana"))

	def test_no_duplicates(self):
		with self.assertRaises(ValueError):
			domain.intern(domain.Type("string", "String"))

	def test_emitted_names(self):
		self.assertEqual("int", INTEGER.emitted_name)
		self.assertEqual("double", DECIMAL.emitted_name)
		self.assertEqual("Void", NIL.emitted_name)
		self.assertEqual("Iterable<Integer>", INTEGER_ITERABLE.emitted_name)

	def test_primitive_types_have_no_members(self):
		with self.assertRaises(domain.NoSuchMember):
			INTEGER.field("x")
		with self.assertRaises(domain.NoSuchMember):
			STRING.method("length", 0)

class Scopes(unittest.TestCase):

	def test_shadowing(self):
		outer = Scope()
		outer.define_variable("x", "x", INTEGER, 1)
		inner = outer.child()
		self.assertIs(outer.lookup_variable("x"), inner.lookup_variable("x"))
		inner.define_variable("x", "x", STRING, "one")
		self.assertEqual("one", inner.lookup_variable("x").value)
		self.assertEqual(1, outer.lookup_variable("x").value)

	def test_variables_are_shared_cells(self):
		outer = Scope()
		cell = outer.define_variable("x", "x", INTEGER, 1)
		outer.child().child().lookup_variable("x").value = 2
		self.assertEqual(2, cell.value)

	def test_duplicates(self):
		scope = Scope()
		scope.define_variable("x", "x", INTEGER, None)
		with self.assertRaises(AlreadyExists):
			scope.define_variable("x", "x", STRING, None)
		scope.child().define_variable("x", "x", STRING, None)

	def test_functions_overload_by_arity(self):
		scope = Scope()
		one = scope.define_function("f", "f", [INTEGER], NIL, None)
		two = scope.define_function("f", "f", [INTEGER, INTEGER], NIL, None)
		inner = scope.child()
		self.assertIs(one, inner.lookup_function("f", 1))
		self.assertIs(two, inner.lookup_function("f", 2))
		with self.assertRaises(Absent):
			inner.lookup_function("f", 3)
		with self.assertRaises(AlreadyExists):
			scope.define_function("f", "f", [STRING], NIL, None)

	def test_absent(self):
		with self.assertRaises(Absent) as cm:
			Scope().child().lookup_variable("nope")
		self.assertIn("nope", cm.exception.args[0])

if __name__ == '__main__':
	unittest.main()
