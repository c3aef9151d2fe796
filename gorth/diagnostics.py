"""
Everything that can go wrong, and how it gets explained to a human.

The core raises one of the GorthError subclasses and never prints.
The Report class is what the command-line uses to collect and show them.
"""
import sys
from pathlib import Path
from typing import Optional, Sequence
from boozetools.support.failureprone import SourceText, illustration
from .syntax import Token, show_stack

class GorthError(Exception):
	"""
	Root of the error kinds. Beyond the message, the engine fills in
	the token at fault and the stack as it stood when things went wrong.
	"""
	kind = "error"
	span: Optional[slice] = None
	stack: Optional[list] = None

	def __init__(self, message:str, span:slice=None):
		super().__init__(message)
		self.message = message
		self.span = span

	def at(self, token:Token):
		if self.span is None and token is not None:
			self.span = token.span
		return self

	def __str__(self):
		return "ERROR: %s" % self.message

# Lexical trouble
class InvalidToken(GorthError): kind = "invalid token"
class VariableRedeclared(GorthError): kind = "variable redeclared"
class UndeclaredVariable(GorthError): kind = "undeclared variable"
VariableNotDeclared = UndeclaredVariable

# Run-time trouble
class StackUnderflow(GorthError): kind = "stack underflow"
class StackOverflow(GorthError): kind = "stack overflow"
class TypeMismatch(GorthError): kind = "type mismatch"
class DivisionByZero(GorthError): kind = "division by zero"
class NumericOverflow(GorthError): kind = "numeric overflow"
class ConstReassignment(GorthError): kind = "const reassignment"
class UnknownOperator(GorthError): kind = "unknown operator"

class UnconsumedStack(GorthError):
	kind = "unconsumed stack"
	def __init__(self, leftovers:list):
		super().__init__("unconsumed elements remain on the stack\n\t%s" % show_stack(leftovers))
		self.stack = list(leftovers)


class Report:
	""" Collects issues on the way to the console. """
	_issues : list[GorthError]

	def __init__(self, *, verbose:int=0, source:SourceText=None):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self.source = source

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	@property
	def issues(self): return tuple(self._issues)

	def issue(self, it:GorthError):
		assert isinstance(it, GorthError), it
		self._issues.append(it)

	def reset(self):
		self._issues.clear()

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def read(self, path:Path, text:str):
		""" Remember the program text so complaints can illustrate it. """
		self.source = SourceText(text, filename=str(path))

	def explain(self, issue:GorthError) -> str:
		message = "%s: %s" % (issue.kind.capitalize(), issue.message)
		if issue.span is not None and self.source is not None:
			text = self.source.complaint(issue.span, message)
		else:
			text = message
		if issue.stack is not None and not isinstance(issue, UnconsumedStack):
			text += "\nStack at the time: %s" % show_stack(issue.stack)
		return text

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		for issue in self._issues:
			print(self.explain(issue), file=sys.stderr)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(message)


class Tracer:
	"""
	The default debug observer. The engine calls it around each token,
	and it prints how the stack changed, pointing into the source when it can.
	"""
	def __init__(self, source:SourceText=None, file=None):
		self.source = source
		self.file = file

	def __call__(self, token:Token, before:Sequence, after:Sequence):
		out = self.file or sys.stderr
		if token.span is not None and self.source is not None:
			row, col = self.source.find_row_col(token.span.start)
			line = self.source.line_of_text(row)
			width = token.span.stop - token.span.start
			print(illustration(line, col, width, prefix='% 6d |' % row, caption=repr(token)), file=out)
		else:
			print(repr(token), file=out)
		print("\t%s -> %s" % (show_stack(before), show_stack(after)), file=out)

	def bookend(self, caption:str, items:Sequence):
		print("Program stack at %s of execution\n\t%s" % (caption, show_stack(items)), file=self.file or sys.stderr)