import math
import unittest

from gorth import runtime
from gorth.ontology import integer, real, text, flag, TRUE, FALSE, INT64_MAX, INT64_MIN, render
from gorth.diagnostics import TypeMismatch, DivisionByZero, NumericOverflow

class ArithmeticTests(unittest.TestCase):
	""" Operands are given in program order: fn(a, b) for `a b op`. """

	def check(self, fn, cases):
		for lhs, rhs, expect in cases:
			with self.subTest(fn=fn.__name__, lhs=lhs, rhs=rhs):
				self.assertEqual(expect, fn(lhs, rhs))

	def reject(self, fn, cases, error=TypeMismatch):
		for lhs, rhs in cases:
			with self.subTest(fn=fn.__name__, lhs=lhs, rhs=rhs):
				with self.assertRaises(error):
					fn(lhs, rhs)

	def test_add(self):
		self.check(runtime.add, [
			(integer(5), integer(10), integer(15)),
			(real(3.5), real(2.25), real(5.75)),
			(integer(5), real(2.5), real(7.5)),
			(real(2.5), integer(5), real(7.5)),
			(text("Hello"), text("World"), text("WorldHello")),
		])
		self.reject(runtime.add, [
			(text("a"), integer(1)),
			(integer(1), TRUE),
			(TRUE, FALSE),
			(real(1.0), text("x")),
		])

	def test_sub(self):
		self.check(runtime.sub, [
			(integer(10), integer(5), integer(5)),
			(integer(5), integer(10), integer(-5)),
			(real(1.5), real(0.5), real(1.0)),
			(integer(3), real(0.5), real(2.5)),
		])
		self.reject(runtime.sub, [(text("a"), text("b")), (TRUE, integer(1))])

	def test_mul(self):
		self.check(runtime.mul, [
			(integer(6), integer(7), integer(42)),
			(real(1.5), real(2.0), real(3.0)),
			(integer(3), real(2.5), real(7.5)),
			(text("ab"), integer(3), text("ababab")),
			(integer(2), text("xy"), text("xyxy")),
			(text("ab"), integer(0), text("")),
			(text("ab"), integer(-2), text("")),
		])
		self.reject(runtime.mul, [(text("a"), text("b")), (text("a"), real(2.0)), (TRUE, integer(2))])

	def test_div(self):
		self.check(runtime.div, [
			(integer(7), integer(2), integer(3)),
			(integer(-7), integer(2), integer(-3)),
			(integer(7), integer(-2), integer(-3)),
			(real(7.0), real(2.0), real(3.5)),
			(integer(7), real(2.0), real(3.5)),
		])
		self.reject(runtime.div, [(integer(1), integer(0)), (real(1.0), real(0.0)), (real(1.0), integer(0))], DivisionByZero)
		self.reject(runtime.div, [(text("a"), integer(1))])

	def test_mod(self):
		self.check(runtime.mod, [
			(integer(7), integer(3), integer(1)),
			(integer(-7), integer(3), integer(-1)),
			(integer(7), integer(-3), integer(1)),
		])
		self.reject(runtime.mod, [(integer(1), integer(0))], DivisionByZero)
		self.reject(runtime.mod, [(real(7.0), integer(3)), (integer(7), real(3.0)), (text("7"), integer(3))])

	def test_exp(self):
		self.check(runtime.exp, [
			(integer(2), integer(10), integer(1024)),
			(integer(2), integer(-1), integer(0)),
			(integer(-3), integer(3), integer(-27)),
			(real(4.0), real(0.5), real(2.0)),
			(integer(4), real(0.5), real(2.0)),
			(real(1.5), integer(2), real(2.25)),
		])
		self.reject(runtime.exp, [(integer(0), integer(-1))], DivisionByZero)
		self.reject(runtime.exp, [(integer(2), integer(64)), (real(10.0), real(400.0))], NumericOverflow)
		self.reject(runtime.exp, [(text("a"), integer(2))])

	def test_negative_base_fractional_power(self):
		self.assertTrue(math.isnan(runtime.exp(real(-8.0), real(0.5)).datum))

	def test_integers_wrap_at_64_bits(self):
		self.assertEqual(integer(INT64_MIN), runtime.add(integer(INT64_MAX), integer(1)))
		self.assertEqual(integer(INT64_MAX), runtime.sub(integer(INT64_MIN), integer(1)))

	def test_text_length_is_bounded(self):
		self.reject(runtime.mul, [
			(text("ab"), integer(INT64_MAX)),
			(integer(4000000000), text("ab")),
		], NumericOverflow)
		half = text("x" * (runtime.MAX_TEXT_LENGTH // 2 + 1))
		self.reject(runtime.add, [(half, half)], NumericOverflow)
		self.assertEqual(runtime.MAX_TEXT_LENGTH, len(runtime.mul(text("x"), integer(runtime.MAX_TEXT_LENGTH)).datum))


class StepTests(unittest.TestCase):

	def test_numbers(self):
		self.assertEqual(integer(6), runtime.increment(integer(5)))
		self.assertEqual(integer(4), runtime.decrement(integer(5)))
		self.assertEqual(real(2.5), runtime.increment(real(1.5)))
		self.assertEqual(integer(-5), runtime.negate(integer(5)))
		self.assertEqual(real(1.5), runtime.negate(real(-1.5)))

	def test_non_numbers(self):
		for fn in runtime.STEPS.values():
			for bogon in [TRUE, text("1")]:
				with self.subTest(fn=fn.__name__, bogon=bogon):
					with self.assertRaises(TypeMismatch):
						fn(bogon)


class LogicTests(unittest.TestCase):

	def test_truth_tables(self):
		for a in (True, False):
			for b in (True, False):
				with self.subTest(a=a, b=b):
					self.assertEqual(flag(a and b), runtime.logical_and(flag(a), flag(b)))
					self.assertEqual(flag(a or b), runtime.logical_or(flag(a), flag(b)))
			self.assertEqual(flag(not a), runtime.logical_not(flag(a)))

	def test_only_flags(self):
		for fn in (runtime.logical_and, runtime.logical_or):
			with self.subTest(fn.__name__):
				with self.assertRaises(TypeMismatch):
					fn(TRUE, integer(1))
		with self.assertRaises(TypeMismatch):
			runtime.logical_not(integer(0))

	def test_equality_across_kinds(self):
		self.assertEqual(FALSE, runtime.equal(integer(5), TRUE))
		self.assertEqual(FALSE, runtime.equal(integer(1), TRUE))
		self.assertEqual(FALSE, runtime.equal(integer(5), real(5.0)))
		self.assertEqual(TRUE, runtime.equal(text("a"), text("a")))
		self.assertEqual(TRUE, runtime.equal(real(2.5), real(2.5)))

	def test_equal_type(self):
		self.assertEqual(TRUE, runtime.equal_type(integer(1), integer(99)))
		self.assertEqual(FALSE, runtime.equal_type(integer(1), real(1.0)))
		self.assertEqual(TRUE, runtime.equal_type(text(""), text("x")))

	def test_relations(self):
		greater = runtime.COMPARISONS[runtime.OpCode.GREATER]
		less_equal = runtime.COMPARISONS[runtime.OpCode.LESS_EQUAL]
		self.assertEqual(TRUE, greater(integer(5), integer(3)))
		self.assertEqual(FALSE, greater(integer(3), real(3.5)))
		self.assertEqual(TRUE, less_equal(real(3.0), integer(3)))
		for bogon in [(text("a"), text("b")), (TRUE, FALSE), (integer(1), text("2"))]:
			with self.subTest(bogon):
				with self.assertRaises(TypeMismatch):
					greater(*bogon)


class RenderTests(unittest.TestCase):

	def test_render(self):
		self.assertEqual("15", render(integer(15)))
		self.assertEqual("2.5", render(real(2.5)))
		self.assertEqual("Hello, World!", render(text("Hello, World!")))
		self.assertEqual("true", render(TRUE))
		self.assertEqual("false", render(FALSE))


if __name__ == '__main__':
	unittest.main()
