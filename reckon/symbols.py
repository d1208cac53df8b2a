"""
The name-to-meaning registry each Calculator owns.

A name means either a variable (a stored value of the calculator's numeric type)
or a single-argument function. Setting a name again replaces whatever it meant
before, in either role. Nothing is ever removed: to forget, make a new table.

Any non-empty string is a legal key, but an expression can only ever mention
names that start with a letter and continue with letters, digits, or underscores.
Something registered as "_x" or "2x" is stored faithfully and never found.
"""
from typing import Callable, NamedTuple, Optional, Union
from .diagnostics import Fault, complaint
from .numeric import NumericType

class Variable(NamedTuple):
	value: object

class Function(NamedTuple):
	fn: Callable

ENTRY = Union[Variable, Function]

class SymbolTable:
	_entries: dict[str, ENTRY]

	def __init__(self, numeric:NumericType):
		self.numeric = numeric
		self._entries = {}

	def set(self, name:str, value):
		""" Bind a name to a value (checked against the numeric type) or to a callable. """
		if not isinstance(name, str):
			raise TypeError("Symbol names are strings, not %s"%type(name).__name__)
		if not name:
			raise ValueError("A symbol needs a non-empty name.")
		if callable(value):
			entry = Function(value)
		else:
			try: entry = Variable(self.numeric.accept(value))
			except Fault as ex: raise complaint(ex.category, "cannot set %s: %s"%(name, ex.detail)) from None
		self._entries[name] = entry

	def resolve(self, name:str) -> Optional[ENTRY]:
		return self._entries.get(name)

	def get(self, name:str):
		""" The stored value or callable. Raises KeyError for unknown names. """
		return self._entries[name][0]

	def __contains__(self, name:str) -> bool:
		return name in self._entries

	def __len__(self):
		return len(self._entries)

	def names(self):
		return sorted(self._entries)

	def copy(self) -> "SymbolTable":
		twin = SymbolTable(self.numeric)
		twin._entries.update(self._entries)
		return twin
