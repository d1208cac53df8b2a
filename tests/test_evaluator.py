import math
import unittest

from reckon import evaluate, Calculator, ExpressionError, INT8, INT16, INT32, INT64, FLOAT32, FLOAT64
from reckon.symbols import SymbolTable

class IntegerArithmetic(unittest.TestCase):

	def expect(self, cases, numeric_type=INT32):
		for text, value in cases:
			with self.subTest(text):
				self.assertEqual(value, evaluate(text, numeric_type))

	def test_basic_arithmetic(self):
		self.expect([
			("1 + 2", 3), ("4 - 3", 1), ("2 * 3", 6), ("6 / 2", 3),
			("7 % 3", 1), ("7 / 3", 2),
		])

	def test_truncation_toward_zero(self):
		self.expect([
			("7 / 2", 3), ("-7 / 2", -3), ("7 / -2", -3), ("-7 / -2", 3),
			("-7 / 3", -2), ("7 / -3", -2),
		])

	def test_remainder_takes_sign_of_dividend(self):
		self.expect([("-7 % 3", -1), ("7 % -3", 1), ("-7 % -3", -1)])

	def test_bitwise_operators(self):
		self.expect([
			("5 | 3", 7), ("5 ^ 3", 6), ("5 & 3", 1), ("5 << 1", 10), ("5 >> 1", 2),
			("(5 | 3) & (7 ^ 2)", 5), ("~(5 & 3) | (2 << 1)", -2), ("-16 >> 2", -4),
		])

	def test_unary_operators(self):
		self.expect([("~0", -1), ("~5", -6), ("+5", 5), ("-5", -5), ("--5", 5), ("-~5", 6)])

	def test_parentheses(self):
		self.expect([("(1 + 2) * 3", 9), ("2 * (3 + 4)", 14), ("(1 + (2 - 3)) * 4", 0), ("((7))", 7)])

	def test_precedence(self):
		self.expect([
			("1 + 2 * 3", 7), ("2 * 3 + 1", 7), ("1 + 6 / 3 - 1", 2),
			("1 << 2 + 1", 8), ("6 & 3 | 8", 10), ("1 | 6 ^ 3 & 5", 7),
		])

	def test_power(self):
		self.expect([
			("2 ** 3", 8), ("2 ** 3 ** 2", 512), ("(2 ** 3) ** 2", 64),
			("2 * 3 ** 2", 18), ("-2 ** 2", 4), ("2 ** 0", 1), ("0 ** 0", 1),
		])

	def test_negative_integral_exponent(self):
		self.expect([("2 ** -1", 0), ("1 ** -5", 1), ("(-1) ** -3", -1), ("(-1) ** -2", 1)])

	def test_hexadecimal(self):
		self.expect([("0x0", 0), ("0x1", 1), ("0xA", 10), ("0xF", 15), ("0xFF", 255), ("0xff + 1", 256)])

	def test_whitespace(self):
		self.expect([("1 + 2", 3), ("1+2", 3), (" 1 + 2 ", 3), ("\t1\n+\r2\v", 3)])

	def test_wrapping(self):
		self.expect([("2147483647 + 1", -2147483648), ("0x7FFFFFFF * 2", -2)])
		self.expect([("127 + 1", -128), ("-(127) - 2", 127), ("16 * 16", 0)], INT8)
		self.expect([("1 << 40", 0), ("-1 >> 40", -1), ("1 >> 40", 0)])

	def test_large_numbers(self):
		self.expect([
			("1000000000 + 1000000000", 2000000000),
			("1000000000 * 1000000000", 1000000000000000000),
		], INT64)
		self.assertEqual(32767, evaluate("32767", INT16))

	def test_literal_limits(self):
		self.assertEqual(2147483647, evaluate("2147483647", INT32))
		self.assertEqual(2000000000, evaluate("2000000000", INT32))
		self.assertEqual(127, evaluate("0x7f", INT8))

	def test_results_are_ints(self):
		self.assertIs(int, type(evaluate("7 / 2", INT32)))


class FloatingArithmetic(unittest.TestCase):

	def expect(self, cases, numeric_type=FLOAT64):
		for text, value in cases:
			with self.subTest(text):
				self.assertAlmostEqual(value, evaluate(text, numeric_type), places=12)

	def test_literals(self):
		self.expect([
			("1.5", 1.5), ("1.5e0", 1.5), ("1.5e+0", 1.5), ("1.5e-0", 1.5),
			("1.5e-1", 0.15), ("1.5e2", 150.0), ("2.5E-3", 0.0025), (".5", 0.5), ("2.", 2.0),
			("0xFF", 255.0), ("1e3", 1000.0),
		])

	def test_scenario(self):
		self.assertEqual(0.15, evaluate("1.5e-1", FLOAT64))

	def test_arithmetic(self):
		self.expect([
			("0 * 1", 0), ("1.5 + 2.5", 4.0), ("2.1+1.5", 3.6), ("2.1+ 1.5", 3.6), ("2.1 +1.5", 3.6),
			("1.5 - 2.5", -1.0), ("2.5 * 3.5", 8.75), ("7.5 / 2.5", 3.0),
			("2.5 ** 3.5", 24.705294220065465), ("-2.5", -2.5), ("+2.5", 2.5),
			("(1.5 + 2.5) * 3.5", 14.0), ("2.5 * (1.5 + 2.5)", 10.0),
			("10.0 / 4", 2.5), ("7 / 2", 3.5), ("2.0 ** -1", 0.5), ("16.0 ** 0.5", 4.0),
		])

	def test_default_type_is_double(self):
		self.assertEqual(2.5, evaluate("+2.5"))
		self.assertIsInstance(evaluate("1 + 1"), float)

	def test_pow_like_c(self):
		self.assertTrue(math.isnan(evaluate("(-8) ** (1 / 3)")))
		self.assertEqual(math.inf, evaluate("10 ** 400"))
		self.assertEqual(-math.inf, evaluate("(-10) ** 401"))
		self.assertEqual(math.inf, evaluate("0 ** -1"))
		self.assertEqual(-math.inf, evaluate("(-0.0) ** -1"))

	def test_overflow_is_infinite(self):
		self.assertEqual(math.inf, evaluate("1e308 * 10"))

	def test_single_precision(self):
		third = evaluate("1.0 / 3.0", FLOAT32)
		self.assertNotEqual(evaluate("1.0 / 3.0", FLOAT64), third)
		self.assertAlmostEqual(1/3, third, places=6)
		self.assertEqual(3.0, evaluate("1 + 2", FLOAT32))
		self.assertEqual(16777216.0, evaluate("16777216.0 + 1.0", FLOAT32))
		self.assertEqual(math.inf, evaluate("3e38 * 10", FLOAT32))


class Laws(unittest.TestCase):
	""" Properties that should hold of any well-formed expression. """

	SAMPLES = [
		"1 + 2 * 3", "2 ** 3 ** 2", "(1 + 2) * 3", "7 / 2 - 1", "-7 % 3", "~5 & 3 | 8",
		"1 << 3 >> 1", "0xFF ^ 0x0F", "- - 4", "2 * (3 + 4) ** 2",
	]

	def test_parenthesization_identity(self):
		for text in self.SAMPLES:
			with self.subTest(text):
				self.assertEqual(evaluate(text, INT64), evaluate("(%s)"%text, INT64))
				self.assertEqual(evaluate(text, INT64), evaluate("((%s))"%text, INT64))

	def test_unbalanced_parentheses_always_fail(self):
		for text in ["(1 + 2) * 3", "2 * (3 + 4)", "(1 + (2 - 3)) * 4", "((7))", "f((1))"]:
			for i, c in enumerate(text):
				if c in "()":
					broken = text[:i] + text[i+1:]
					with self.subTest(broken):
						calc = Calculator(INT32)
						calc.set("f", lambda x: x)
						with self.assertRaises(ExpressionError) as cm:
							calc.evaluate(broken)
						self.assertIn("Syntax error", str(cm.exception))


class Symbols(unittest.TestCase):

	def test_variables(self):
		calc = Calculator(FLOAT64)
		calc.set("x", 5.0)
		self.assertEqual(10.0, calc.evaluate("x+x"))

	def test_last_write_wins(self):
		calc = Calculator(INT32)
		calc.set("x", 1)
		calc.set("x", 2)
		self.assertEqual(2, calc.evaluate("x"))
		calc.set("x", lambda v: v * 10)
		self.assertEqual(30, calc.evaluate("x(3)"))
		calc.set("x", 4)
		self.assertEqual(4, calc.evaluate("x"))

	def test_functions(self):
		calc = Calculator(FLOAT64)
		calc.set("sqrt", math.sqrt)
		calc.set("pi", math.pi)
		self.assertEqual(3.0, calc.evaluate("sqrt(9)"))
		self.assertEqual(5.0, calc.evaluate("sqrt(3 ** 2 + 4 ** 2)"))
		self.assertEqual(4.0, calc.evaluate("sqrt(sqrt(256))"))
		self.assertAlmostEqual(2 * math.pi, calc.evaluate("2 * pi"))

	def test_case_sensitive(self):
		calc = Calculator(INT32)
		calc.set("x", 1)
		calc.set("X", 2)
		self.assertEqual(20, calc.evaluate("X * 10 / (x + x) + X * 5"))

	def test_function_results_join_the_type(self):
		calc = Calculator(FLOAT32)
		calc.set("third", lambda v: v / 3)
		self.assertEqual(evaluate("1.0 / 3.0", FLOAT32), calc.evaluate("third(1)"))

	def test_arguments_evaluate_in_textual_order(self):
		seen = []
		calc = Calculator(INT32)
		calc.set("note", lambda v: seen.append(v) or v)
		self.assertEqual(7, calc.evaluate("note(1) + note(2) * note(3)"))
		self.assertEqual([1, 2, 3], seen)

	def test_evaluation_does_not_change_symbols(self):
		calc = Calculator(INT32)
		calc.set("x", 1)
		with self.assertRaises(ExpressionError):
			calc.evaluate("x + y")
		self.assertEqual(1, calc.get("x"))
		self.assertIsNone(calc.resolve("y"))

	def test_symbol_table_must_match_the_type(self):
		with self.assertRaises(ValueError):
			Calculator(INT32, SymbolTable(FLOAT64))
		table = SymbolTable(INT64)
		self.assertIs(table, Calculator(INT64, table).symbols)

	def test_clone_is_independent(self):
		template = Calculator(INT32)
		template.set("x", 1)
		clone = template.clone()
		clone.set("x", 2)
		clone.set("y", 3)
		self.assertEqual(1, template.evaluate("x"))
		self.assertEqual(5, clone.evaluate("x + y"))
		self.assertIsNone(template.resolve("y"))

	def test_function_exceptions_pass_through(self):
		calc = Calculator(FLOAT64)
		def boom(x): raise ZeroDivisionError("mine")
		calc.set("boom", boom)
		with self.assertRaises(ZeroDivisionError):
			calc.evaluate("1 + boom(2)")


if __name__ == '__main__':
	unittest.main()
