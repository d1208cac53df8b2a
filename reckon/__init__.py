"""
A generic arithmetic-expression evaluator.

	>>> from reckon import evaluate, INT32
	>>> evaluate("2 ** 3 ** 2", INT32)
	512
"""
from .diagnostics import ExpressionError, categorize
from .numeric import NumericType, INT8, INT16, INT32, INT64, FLOAT32, FLOAT64, DEFAULT
from .evaluator import Calculator, evaluate
