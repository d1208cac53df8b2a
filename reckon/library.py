"""
Ready-made bindings a collaborator may choose to register.

The evaluator itself knows no functions and no constants. These are the ones
people kept registering by hand, so here they are in one place.
Domain trouble (sqrt of a negative, log of zero) answers NaN or infinity,
the way the C library would, rather than raising.
"""
import math

def _ieee(fn):
	def wrapper(x):
		try: return fn(x)
		except OverflowError: return math.copysign(math.inf, x)
		except ValueError: return -math.inf if x == 0 else math.nan
	wrapper.__name__ = fn.__name__
	return wrapper

FUNCTIONS = {
	"sqrt": _ieee(math.sqrt),
	"sin": _ieee(math.sin),
	"cos": _ieee(math.cos),
	"tan": _ieee(math.tan),
	"exp": _ieee(math.exp),
	"log": _ieee(math.log),
	"abs": abs,
	"floor": _ieee(math.floor),
	"ceil": _ieee(math.ceil),
}

CONSTANTS = {
	"pi": math.pi,
	"e": math.e,
}

def install_math(calculator):
	"""
	Floating calculators get all of the above.
	Integral ones only get `abs`, since nothing else maps integers to integers.
	"""
	if calculator.numeric.is_integral:
		calculator.set("abs", abs)
		return
	for name, fn in FUNCTIONS.items():
		calculator.set(name, fn)
	for name, value in CONSTANTS.items():
		calculator.set(name, value)
