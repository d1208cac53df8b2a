"""
The arithmetic of each numeric type an evaluator can target.

The parser is written once, against the NumericType interface. Each concrete
type decides how literals read, which values it will accept from outside, and
what the operators actually do. Integral types also admit the bitwise
operators and modulo; floating types do not.

Methods here raise diagnostics.Fault, which carries no position.
The evaluator attaches the position of whatever token caused the trouble.
"""
import sys, math, struct, numbers
from .diagnostics import Fault, TYPE, RUNTIME, CAPACITY

DECIMAL, HEX, SCIENTIFIC = "decimal", "hex", "scientific"

# Operator glyph to the name of the method that implements it.
BINARY = {
	"+": "add", "-": "sub", "*": "mul", "/": "div", "%": "mod", "**": "pow",
	"<<": "shl", ">>": "shr", "&": "bit_and", "^": "bit_xor", "|": "bit_or",
}
UNARY = {"+": "pos", "-": "neg", "~": "invert"}
INTEGRAL_ONLY = frozenset(["%", "<<", ">>", "&", "^", "|", "~"])

def _division_by_zero():
	return Fault(RUNTIME, "division by 0")

def _too_large(text):
	return Fault(CAPACITY, "number too large: %s"%text)

class NumericType:
	name: str
	bits: int
	is_integral: bool
	zero: object
	one: object

	def __repr__(self): return "<%s>"%self.name
	def __str__(self): return self.name

	def literal(self, text:str, form:str): raise NotImplementedError(type(self))
	def accept(self, value): raise NotImplementedError(type(self))
	def render(self, value) -> str: return repr(value)

	def pos(self, a): return a

	def supports(self, glyph:str) -> bool:
		return self.is_integral or glyph not in INTEGRAL_ONLY

	def _check_divisor(self, b):
		if b == self.zero:
			raise _division_by_zero()


class Integral(NumericType):
	""" Fixed-width two's-complement integers. Results wrap to the width. """
	is_integral = True
	zero = 0
	one = 1

	def __init__(self, name:str, bits:int):
		self.name, self.bits = name, bits
		self.min = -(1 << (bits - 1))
		self.max = (1 << (bits - 1)) - 1
		self._mask = (1 << bits) - 1

	def wrap(self, n:int) -> int:
		n &= self._mask
		return n - (self._mask + 1) if n > self.max else n

	def literal(self, text:str, form:str) -> int:
		if form == HEX:
			n = int(text[2:], 16)
		elif form == DECIMAL and "." not in text:
			n = int(text)
		else:
			raise Fault(TYPE, "floating literal %s in integer context"%text)
		if n > self.max:
			raise _too_large(text)
		return n

	def accept(self, value) -> int:
		if not isinstance(value, numbers.Integral):
			raise Fault(TYPE, "%r is not a value of type %s"%(value, self.name))
		value = int(value)
		if not self.min <= value <= self.max:
			raise _too_large(value)
		return value

	def add(self, a, b): return self.wrap(a + b)
	def sub(self, a, b): return self.wrap(a - b)
	def mul(self, a, b): return self.wrap(a * b)
	def neg(self, a): return self.wrap(-a)
	def invert(self, a): return ~a

	def div(self, a, b):
		""" Truncates toward zero, as C does. """
		self._check_divisor(b)
		q = abs(a) // abs(b)
		return self.wrap(-q if (a < 0) != (b < 0) else q)

	def mod(self, a, b):
		""" The remainder takes the sign of the dividend. """
		self._check_divisor(b)
		r = abs(a) % abs(b)
		return -r if a < 0 else r

	def pow(self, a, b):
		if b < 0:
			# 1 / a**|b|, truncated toward zero.
			if a == 0: raise _division_by_zero()
			if a == 1: return 1
			if a == -1: return -1 if b % 2 else 1
			return 0
		return self.wrap(pow(a, b, self._mask + 1))

	def shl(self, a, b):
		self._check_shift(b)
		return 0 if b >= self.bits else self.wrap(a << b)

	def shr(self, a, b):
		self._check_shift(b)
		if b >= self.bits: return -1 if a < 0 else 0
		return a >> b

	@staticmethod
	def _check_shift(b):
		if b < 0:
			raise Fault(RUNTIME, "negative shift count %d"%b)

	def bit_and(self, a, b): return self.wrap(a & b)
	def bit_xor(self, a, b): return self.wrap(a ^ b)
	def bit_or(self, a, b): return self.wrap(a | b)


class Floating(NumericType):
	""" IEEE-754 binary floating point, either single or double precision. """
	is_integral = False
	zero = 0.0
	one = 1.0

	def __init__(self, name:str, bits:int, code:str):
		self.name, self.bits = name, bits
		self._code = code
		self.max = sys.float_info.max if code == 'd' else struct.unpack('<f', b'\xff\xff\x7f\x7f')[0]

	def round(self, x:float) -> float:
		""" Bring a Python float to this type's precision. """
		if self._code == 'd':
			return x
		try: return struct.unpack(self._code, struct.pack(self._code, x))[0]
		except OverflowError: return math.copysign(math.inf, x)

	def literal(self, text:str, form:str) -> float:
		try:
			x = float(int(text[2:], 16)) if form == HEX else float(text)
		except OverflowError:
			raise _too_large(text) from None
		x = self.round(x)
		if math.isinf(x):
			raise _too_large(text)
		return x

	def accept(self, value) -> float:
		if not isinstance(value, numbers.Real):
			raise Fault(TYPE, "%r is not a value of type %s"%(value, self.name))
		try: x = float(value)
		except OverflowError: raise _too_large(value) from None
		return self.round(x)

	def render(self, value) -> str:
		return repr(value) if self._code == 'd' else "%.9g"%value

	def add(self, a, b): return self.round(a + b)
	def sub(self, a, b): return self.round(a - b)
	def mul(self, a, b): return self.round(a * b)
	def neg(self, a): return -a

	def div(self, a, b):
		self._check_divisor(b)
		return self.round(a / b)

	def pow(self, a, b):
		""" Behaves as C's pow() would, rather than promoting to complex. """
		try:
			return self.round(math.pow(a, b))
		except OverflowError:
			return -math.inf if a < 0 and _odd_integer(b) else math.inf
		except ValueError:
			# Zero to a negative power keeps the sign of the zero only for odd powers.
			if a == 0: return math.copysign(math.inf, a) if _odd_integer(b) else math.inf
			return math.nan

def _odd_integer(x:float) -> bool:
	return math.isfinite(x) and x == math.floor(x) and math.fmod(x, 2) != 0

INT8 = Integral("int8", 8)
INT16 = Integral("int16", 16)
INT32 = Integral("int32", 32)
INT64 = Integral("int64", 64)
FLOAT32 = Floating("float32", 32, 'f')
FLOAT64 = Floating("float64", 64, 'd')

DEFAULT = FLOAT64

TYPES = {t.name: t for t in (INT8, INT16, INT32, INT64, FLOAT32, FLOAT64)}
ALIASES = {"int": INT32, "long": INT64, "float": FLOAT32, "double": FLOAT64}

def lookup(name:str) -> NumericType:
	""" Find a numeric type by name or by its C-like alias. Raises KeyError. """
	try: return TYPES[name]
	except KeyError: return ALIASES[name]
