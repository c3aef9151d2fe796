"""
The run-time datum of Gorth is a small closed union: integers, floats, text, and flags.
Every other module speaks in terms of these, so they live apart from the rest
to avoid various circular-import scenarios.
"""
from enum import Enum
from typing import NamedTuple, Union

class Kind(Enum):
	INTEGER = "int"
	FLOAT = "float"
	TEXT = "string"
	BOOLEAN = "bool"

	def __str__(self): return self.value

NUMERIC = frozenset([Kind.INTEGER, Kind.FLOAT])

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

def wrap_int64(n:int) -> int:
	""" Reduce to the signed 64-bit range the way machine arithmetic does. """
	n &= 0xFFFF_FFFF_FFFF_FFFF
	return n - (1 << 64) if n > INT64_MAX else n

class Value(NamedTuple):
	""" Immutable once built. Operators only ever make new ones. """
	kind: Kind
	datum: Union[int, float, str, bool]

	def __str__(self): return render(self)

def integer(n:int) -> Value: return Value(Kind.INTEGER, wrap_int64(int(n)))
def real(x:float) -> Value: return Value(Kind.FLOAT, float(x))
def text(s:str) -> Value: return Value(Kind.TEXT, s)
def flag(b:bool) -> Value: return Value(Kind.BOOLEAN, bool(b))

TRUE = flag(True)
FALSE = flag(False)

def render(value:Value) -> str:
	""" The way dump and print show a value to the world. """
	if value.kind is Kind.BOOLEAN:
		return "true" if value.datum else "false"
	if value.kind is Kind.FLOAT:
		return repr(value.datum)
	return str(value.datum)

def show(value:Value) -> str:
	""" Like render, but text gets quotes so stack listings stay legible. """
	if value.kind is Kind.TEXT:
		return '"%s"' % value.datum
	return render(value)
