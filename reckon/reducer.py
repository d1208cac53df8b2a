"""
Operator-precedence reduction, with no opinion about what the operands are.

The parser feeds operands and binary operators in the order they appear.
Whenever an incoming operator binds no tighter than the one on top of the
stack (or, for a right-associative operator, strictly looser), the stacked
operator gets applied to the two operands beneath it right away. Nothing is
kept around once it is folded, so there is never a tree to speak of.

The `apply` callback decides what folding means. The evaluator folds numbers;
a test can just as well fold tuples to see the shape of the reduction.
"""
from typing import Any, Callable, NamedTuple

class Binding(NamedTuple):
	power: int
	right: bool = False

BINDING = {
	"|": Binding(1),
	"^": Binding(2),
	"&": Binding(3),
	"<<": Binding(4), ">>": Binding(4),
	"+": Binding(5), "-": Binding(5),
	"*": Binding(6), "/": Binding(6), "%": Binding(6),
	"**": Binding(7, right=True),
}

APPLY = Callable[[str, Any, Any, Any], Any]

class Reducer:
	""" One of these per (sub-)expression. """
	def __init__(self, apply:APPLY):
		self._apply = apply
		self._values = []
		self._operators = []

	def operand(self, value):
		self._values.append(value)

	def operator(self, glyph:str, site=None):
		"""
		Site is whatever the caller wants handed back to `apply` with this operator;
		the evaluator passes the token, so errors can point at it.
		"""
		incoming = BINDING[glyph]
		while self._operators and self._yields(incoming):
			self._reduce()
		self._operators.append((glyph, site))

	def result(self):
		while self._operators:
			self._reduce()
		assert len(self._values) == 1, self._values
		return self._values.pop()

	def _yields(self, incoming:Binding) -> bool:
		stacked = BINDING[self._operators[-1][0]]
		if incoming.right:
			return stacked.power > incoming.power
		return stacked.power >= incoming.power

	def _reduce(self):
		glyph, site = self._operators.pop()
		rhs = self._values.pop()
		lhs = self._values.pop()
		self._values.append(self._apply(glyph, lhs, rhs, site))
