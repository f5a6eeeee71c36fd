"""
A very small calculator: one binary operation on two numbers, perhaps in parentheses.
It uses the default hand-rolled scanner, and shows off a few of the finer points:

* A capture group may span several fields: the Operator shape's rule begins in the
  first field and ends in the last, and each literal lands in its own field as a flag.
* Flags: a BOOLEAN field records whether its (optional) literal was seen at all.
* Classes of your own work as targets, so long as they construct without arguments.
"""

import operator

from syntaxer.parsing.shape import Grammar
from syntaxer.parsing.values import ValueKind

class Operator:
	def __init__(self):
		self.plus = self.minus = self.times = self.divide = False

	def function(self):
		if self.plus: return operator.add
		if self.minus: return operator.sub
		if self.times: return operator.mul
		if self.divide: return operator.truediv

class Expression:
	def __init__(self):
		self.left = self.right = False
		self.first = self.second = 0.0
		self.op = None

	def evaluate(self):
		return self.op.function()(self.first, self.second)

calc = Grammar('expression')

calc.shape('Operator', Operator) \
	.field('plus', '@("+"', ValueKind.BOOLEAN) \
	.field('minus', '| "-"', ValueKind.BOOLEAN) \
	.field('times', '| "*"', ValueKind.BOOLEAN) \
	.field('divide', '| "/")', ValueKind.BOOLEAN)

expression = calc.shape('Expression', Expression) \
	.field('left', "(@'(')?", ValueKind.BOOLEAN) \
	.field('first', '@Number', ValueKind.FLOAT) \
	.field('op', '@@', element='Operator') \
	.field('second', '@Number', ValueKind.FLOAT) \
	.field('right', "(@')')?", ValueKind.BOOLEAN)
