"""
The operand stack. It is bounded, and it can roll itself back
when an operator fails half-way through.
"""
from contextlib import contextmanager
from typing import Union
from .ontology import Value
from .syntax import Identifier
from .diagnostics import StackUnderflow, StackOverflow

MAX_STACK_SIZE = 1000

ITEM = Union[Value, Identifier]

class OperandStack:
	_items: list[ITEM]

	def __init__(self, capacity:int=MAX_STACK_SIZE):
		assert capacity >= 0, capacity
		self._items = []
		self.capacity = capacity

	def push(self, item:ITEM):
		if len(self._items) >= self.capacity:
			raise StackOverflow("stack overflow (capacity %d)" % self.capacity)
		self._items.append(item)

	def pop(self) -> ITEM:
		if not self._items:
			raise StackUnderflow("cannot pop from an empty stack")
		return self._items.pop()

	def peek(self) -> ITEM:
		if not self._items:
			raise StackUnderflow("cannot peek at an empty stack")
		return self._items[-1]

	def need(self, n:int, what:str):
		if len(self._items) < n:
			raise StackUnderflow("at least %d elements need to be on stack to perform %s" % (n, what))

	def snapshot(self) -> list[ITEM]: return list(self._items)
	def clear(self): self._items.clear()
	def __len__(self): return len(self._items)
	def __iter__(self): return iter(self._items)
	def __bool__(self): return bool(self._items)

	@contextmanager
	def transaction(self):
		""" Anything that raises inside leaves the stack as it was found. """
		saved = list(self._items)
		try: yield self
		except BaseException:
			self._items[:] = saved
			raise
