"""
What the operators mean, in terms of values alone.

Nothing here knows about stacks or variables: each function takes
fully-resolved values and either returns a fresh value or raises.
Binary functions take (lhs, rhs) in program order, so `a b -` means sub(a, b).
"""
import math
import operator
from typing import Callable
from .ontology import Kind, Value, NUMERIC, integer, real, text, flag, show
from .syntax import OpCode, SPELLING
from .diagnostics import TypeMismatch, DivisionByZero, NumericOverflow

INTEGER, FLOAT, TEXT, BOOLEAN = Kind.INTEGER, Kind.FLOAT, Kind.TEXT, Kind.BOOLEAN

# Longest text that concatenation or repetition may build.
MAX_TEXT_LENGTH = 1 << 24

def _mismatch(code:OpCode, *operands:Value) -> TypeMismatch:
	kinds = " and ".join("%s %s" % (v.kind, show(v)) for v in operands)
	return TypeMismatch("cannot perform %s on %s" % (SPELLING[code], kinds))

def _numbers(code:OpCode, lhs:Value, rhs:Value) -> Kind:
	""" The kind both operands promote to, or a complaint if either is not a number. """
	if lhs.kind not in NUMERIC or rhs.kind not in NUMERIC:
		raise _mismatch(code, lhs, rhs)
	return INTEGER if lhs.kind is rhs.kind is INTEGER else FLOAT

def _truncated_quotient(a:int, b:int) -> int:
	q = abs(a) // abs(b)
	return q if (a < 0) == (b < 0) else -q

def _truncated_remainder(a:int, b:int) -> int:
	return a - b * _truncated_quotient(a, b)

def _check_length(code:OpCode, size:int):
	if size > MAX_TEXT_LENGTH:
		raise NumericOverflow("%s would build text of %d characters (limit %d)" % (SPELLING[code], size, MAX_TEXT_LENGTH))

###############################################################################

def add(lhs:Value, rhs:Value) -> Value:
	if lhs.kind is rhs.kind is TEXT:
		# Concatenation puts the top of the stack first.
		_check_length(OpCode.ADD, len(lhs.datum) + len(rhs.datum))
		return text(rhs.datum + lhs.datum)
	kind = _numbers(OpCode.ADD, lhs, rhs)
	total = lhs.datum + rhs.datum
	return integer(total) if kind is INTEGER else real(total)

def sub(lhs:Value, rhs:Value) -> Value:
	kind = _numbers(OpCode.SUB, lhs, rhs)
	difference = lhs.datum - rhs.datum
	return integer(difference) if kind is INTEGER else real(difference)

def _repeat(s:str, count:int) -> Value:
	count = max(count, 0)
	_check_length(OpCode.MUL, len(s) * count)
	return text(s * count)

def mul(lhs:Value, rhs:Value) -> Value:
	if lhs.kind is TEXT and rhs.kind is INTEGER:
		return _repeat(lhs.datum, rhs.datum)
	if lhs.kind is INTEGER and rhs.kind is TEXT:
		return _repeat(rhs.datum, lhs.datum)
	kind = _numbers(OpCode.MUL, lhs, rhs)
	product = lhs.datum * rhs.datum
	return integer(product) if kind is INTEGER else real(product)

def div(lhs:Value, rhs:Value) -> Value:
	kind = _numbers(OpCode.DIV, lhs, rhs)
	if rhs.datum == 0:
		raise DivisionByZero("cannot divide %s by zero" % show(lhs))
	if kind is INTEGER:
		return integer(_truncated_quotient(lhs.datum, rhs.datum))
	return real(lhs.datum / rhs.datum)

def mod(lhs:Value, rhs:Value) -> Value:
	if not lhs.kind is rhs.kind is INTEGER:
		raise _mismatch(OpCode.MOD, lhs, rhs)
	if rhs.datum == 0:
		raise DivisionByZero("cannot take %s modulo zero" % show(lhs))
	return integer(_truncated_remainder(lhs.datum, rhs.datum))

def exp(lhs:Value, rhs:Value) -> Value:
	kind = _numbers(OpCode.EXP, lhs, rhs)
	if lhs.datum == 0 and rhs.datum < 0:
		raise DivisionByZero("cannot raise zero to the negative power %s" % show(rhs))
	try:
		power = math.pow(lhs.datum, rhs.datum)
	except OverflowError:
		raise NumericOverflow("%s ^ %s is out of range" % (show(lhs), show(rhs))) from None
	except ValueError:
		# A negative base with a fractional exponent has no real answer.
		power = math.nan
	if kind is INTEGER:
		if math.isinf(power) or abs(power) >= 2.0 ** 63:
			raise NumericOverflow("%s ^ %s does not fit in an integer" % (show(lhs), show(rhs)))
		return integer(math.trunc(power))
	return real(power)

ARITHMETIC : dict[OpCode, Callable[[Value, Value], Value]] = {
	OpCode.ADD: add,
	OpCode.SUB: sub,
	OpCode.MUL: mul,
	OpCode.DIV: div,
	OpCode.MOD: mod,
	OpCode.EXP: exp,
}

###############################################################################

def _stepper(code:OpCode, delta:int):
	def step(value:Value) -> Value:
		if value.kind is INTEGER: return integer(value.datum + delta)
		if value.kind is FLOAT: return real(value.datum + delta)
		raise _mismatch(code, value)
	return step

increment = _stepper(OpCode.INC, 1)
decrement = _stepper(OpCode.DEC, -1)

def negate(value:Value) -> Value:
	if value.kind is INTEGER: return integer(-value.datum)
	if value.kind is FLOAT: return real(-value.datum)
	raise _mismatch(OpCode.NEG, value)

STEPS : dict[OpCode, Callable[[Value], Value]] = {
	OpCode.INC: increment,
	OpCode.DEC: decrement,
	OpCode.NEG: negate,
}

###############################################################################

def _flags(code:OpCode, *operands:Value):
	if any(v.kind is not BOOLEAN for v in operands):
		raise _mismatch(code, *operands)

def logical_and(lhs:Value, rhs:Value) -> Value:
	_flags(OpCode.AND, lhs, rhs)
	return flag(lhs.datum and rhs.datum)

def logical_or(lhs:Value, rhs:Value) -> Value:
	_flags(OpCode.OR, lhs, rhs)
	return flag(lhs.datum or rhs.datum)

def logical_not(value:Value) -> Value:
	_flags(OpCode.NOT, value)
	return flag(not value.datum)

def equal(lhs:Value, rhs:Value) -> Value:
	""" Values of different kinds are simply unequal. That is a feature. """
	return flag(lhs.kind is rhs.kind and lhs.datum == rhs.datum)

def equal_type(lhs:Value, rhs:Value) -> Value:
	return flag(lhs.kind is rhs.kind)

RELATIONS = {
	OpCode.GREATER: operator.gt,
	OpCode.LESS: operator.lt,
	OpCode.GREATER_EQUAL: operator.ge,
	OpCode.LESS_EQUAL: operator.le,
}

def _relation(code:OpCode):
	def relate(lhs:Value, rhs:Value) -> Value:
		_numbers(code, lhs, rhs)
		return flag(RELATIONS[code](lhs.datum, rhs.datum))
	return relate

COMPARISONS : dict[OpCode, Callable[[Value, Value], Value]] = {
	OpCode.AND: logical_and,
	OpCode.OR: logical_or,
	OpCode.EQUAL: equal,
	OpCode.EQUAL_TYPE: equal_type,
	**{code: _relation(code) for code in RELATIONS},
}
