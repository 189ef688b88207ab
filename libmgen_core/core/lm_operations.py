# -*- coding: utf-8 -*-
###############################################################################
# This file is part of libmgen
###############################################################################
# MIT License
#
# Copyright (c) 2026 libmgen developers
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
###############################################################################
# created:          Oct 18th, 2026
# last-modified:    Oct 18th, 2026
#
# description: expression model: immutable operation trees describing
#              generated functions, approximation targets and test oracles
###############################################################################

from fractions import Fraction

from .lm_formats import LM_Bool
from .mp_numbers import to_fraction


class LM_Operation(object):
    """ parent to every libmgen operation node

        A node stores its operands in an immutable tuple, new trees are
        built with copy_with_inputs. A node owns its inputs: the same
        node object must not appear twice in a tree """
    name = "LM_Operation"
    arity = None
    str_del = "| "

    def __init__(self, *ops):
        if self.arity is not None and len(ops) != self.arity:
            raise ValueError(
                "{} expects {} operand(s), {} given".format(self.name, self.arity, len(ops)))
        self.inputs = tuple(implicit_op(op) for op in ops)

    def get_inputs(self):
        return self.inputs

    def get_input(self, index):
        return self.inputs[index]

    def get_name(self):
        return self.name

    ## positional arguments passed to the constructor before the operands
    def get_init_args(self):
        return ()

    ## keyword arguments passed to the constructor after the operands
    def get_init_kw(self):
        return {}

    def copy_with_inputs(self, inputs):
        """ return a new node of the same class (and attributes) as @p self
            with @p inputs as operands """
        return self.__class__(*self.get_init_args(), *inputs, **self.get_init_kw())

    def copy(self):
        """ deep copy of the tree rooted at @p self """
        return self.copy_with_inputs([op.copy() for op in self.inputs])

    def get_attribute_str(self):
        return ""

    def get_str(self, depth=None, tab_level=0):
        """ textual (multi-line) description of the tree rooted at @p self,
            two trees are structurally equal iff their descriptions are """
        if depth is not None and depth < 0:
            return ""
        new_depth = None if depth is None else depth - 1
        tab_str = LM_Operation.str_del * tab_level
        return tab_str + "%s%s\n%s" % (
            self.get_name(), self.get_attribute_str(),
            "".join(op.get_str(new_depth, tab_level + 1) for op in self.inputs))

    def __str__(self):
        return self.get_str(depth=2)

    def __neg__(self):
        return Negation(self)

    def __abs__(self):
        return Abs(self)

    def __add__(self, op):
        return Addition(self, op)

    def __radd__(self, op):
        return Addition(op, self)

    def __sub__(self, op):
        return Subtraction(self, op)

    def __rsub__(self, op):
        return Subtraction(op, self)

    def __mul__(self, op):
        return Multiplication(self, op)

    def __rmul__(self, op):
        return Multiplication(op, self)

    def __truediv__(self, op):
        return Division(self, op)

    def __rtruediv__(self, op):
        return Division(op, self)

    def __lt__(self, op):
        return Comparison(self, op, specifier=Comparison.Less)

    def __le__(self, op):
        return Comparison(self, op, specifier=Comparison.LessOrEqual)

    def __gt__(self, op):
        return Comparison(self, op, specifier=Comparison.Greater)

    def __ge__(self, op):
        return Comparison(self, op, specifier=Comparison.GreaterOrEqual)


## implicit operation conversion (from number to Constant when required)
#  @brief This function is called on every operations arguments
#         to legalize them
def implicit_op(op):
    """ implicit constant operand promotion """
    if isinstance(op, LM_Operation):
        return op
    elif isinstance(op, (int, float, str, Fraction)) or hasattr(op, "_mpf_"):
        return Constant(op)
    else:
        raise TypeError("unsupported operand in implicit_op conversion: {} ({})".format(op, op.__class__))


class LM_LeafNode(LM_Operation):
    """ parent to operation without operand """
    arity = 0

    def copy_with_inputs(self, inputs):
        assert len(inputs) == 0
        return self.copy()


class Constant(LM_LeafNode):
    """ exact numerical constant, the value is kept unrounded
        (int, decimal string, Fraction, float or mpmath number) """
    name = "Constant"

    def __init__(self, value):
        LM_LeafNode.__init__(self)
        self.value = value

    def get_value(self):
        return self.value

    def get_fraction(self):
        """ exact value as a Fraction """
        return to_fraction(self.value)

    def get_attribute_str(self):
        return "(%s)" % self.value

    def copy(self):
        return Constant(self.value)


class MathConstant(LM_LeafNode):
    """ symbolic mathematical constant (e.g. pi), evaluated at the
        working precision of its consumer """
    name = "MathConstant"

    def __init__(self, constant_name):
        LM_LeafNode.__init__(self)
        self.constant_name = constant_name

    def get_attribute_str(self):
        return "(%s)" % self.constant_name

    def copy(self):
        return MathConstant(self.constant_name)


class BitPattern(LM_LeafNode):
    """ integer encoding of a floating-point number """
    name = "BitPattern"

    def __init__(self, value):
        LM_LeafNode.__init__(self)
        self.value = int(value)

    def get_value(self):
        return self.value

    def get_attribute_str(self):
        return "(%#x)" % self.value

    def copy(self):
        return BitPattern(self.value)


class Variable(LM_LeafNode):
    """ named value: function argument, local variable or
        bound variable of an approximation target """
    name = "Variable"

    def __init__(self, var_name, precision=None):
        LM_LeafNode.__init__(self)
        self.var_name = var_name
        self.precision = precision

    def get_tag(self):
        return self.var_name

    def get_precision(self):
        return self.precision

    def get_attribute_str(self):
        return "(%s)" % self.var_name

    def copy(self):
        return Variable(self.var_name, precision=self.precision)


class FormatSpecificOperation(LM_Operation):
    """ operation bound to a specific floating-point format """
    def __init__(self, *ops, precision=None):
        LM_Operation.__init__(self, *ops)
        self.precision = precision

    def get_precision(self):
        return self.precision

    def get_init_kw(self):
        return {"precision": self.precision}

    def get_attribute_str(self):
        return "[%s]" % self.precision


class FromBits(FormatSpecificOperation):
    """ reinterpret a BitPattern as a number of the format precision """
    name = "FromBits"
    arity = 1


class Splat(FormatSpecificOperation):
    """ broadcast a scalar value across every vector lane """
    name = "Splat"
    arity = 1


class Conversion(FormatSpecificOperation):
    """ round a value to the format precision """
    name = "Conversion"
    arity = 1


class Negation(LM_Operation):
    name = "Negation"
    arity = 1


class Abs(LM_Operation):
    name = "Abs"
    arity = 1


class NearestInteger(LM_Operation):
    """ round to the nearest integral value, ties to even """
    name = "NearestInteger"
    arity = 1


class Floor(LM_Operation):
    name = "Floor"
    arity = 1


class IsOdd(LM_Operation):
    """ test if an integral value is odd """
    name = "IsOdd"
    arity = 1


class ExponentInsertion(LM_Operation):
    """ 2^k for an integral value k """
    name = "ExponentInsertion"
    arity = 1


class ExponentExtraction(LM_Operation):
    """ floor(log2(|x|)) for a normal number x """
    name = "ExponentExtraction"
    arity = 1


class MantissaExtraction(LM_Operation):
    """ x * 2^-floor(log2(|x|)), of magnitude within [1, 2) for a normal
        number x """
    name = "MantissaExtraction"
    arity = 1


class Addition(LM_Operation):
    name = "Addition"
    arity = 2


class Subtraction(LM_Operation):
    name = "Subtraction"
    arity = 2


class Multiplication(LM_Operation):
    name = "Multiplication"
    arity = 2


class Division(LM_Operation):
    name = "Division"
    arity = 2


class FusedMultiplyAdd(LM_Operation):
    """ op0 * op1 + op2 """
    name = "FusedMultiplyAdd"
    arity = 3


class Comparison(LM_Operation):
    name = "Comparison"
    arity = 2

    class Specifier(object):
        symbol = None

    class Less(Specifier):
        symbol = "<"

    class LessOrEqual(Specifier):
        symbol = "<="

    class Greater(Specifier):
        symbol = ">"

    class GreaterOrEqual(Specifier):
        symbol = ">="

    def __init__(self, lhs, rhs, specifier=Greater):
        LM_Operation.__init__(self, lhs, rhs)
        self.specifier = specifier

    def get_precision(self):
        return LM_Bool

    def get_init_kw(self):
        return {"specifier": self.specifier}

    def get_attribute_str(self):
        return "(%s)" % self.specifier.symbol


class Select(LM_Operation):
    """ op1 if op0 else op2 """
    name = "Select"
    arity = 3


class SpecifierCall(LM_Operation):
    """ call to a named function """
    def __init__(self, function_name, *ops):
        LM_Operation.__init__(self, *ops)
        self.function_name = function_name

    def get_function_name(self):
        return self.function_name

    def get_init_args(self):
        return (self.function_name,)

    def get_attribute_str(self):
        return "(%s)" % self.function_name


class MathFunction(SpecifierCall):
    """ exact mathematical function (e.g. sin, ln), used by reference
        evaluations and approximation targets """
    name = "MathFunction"


class FunctionCall(SpecifierCall):
    """ call to a generated function """
    name = "FunctionCall"


class Tuple(LM_Operation):
    name = "Tuple"


class TupleSelection(LM_Operation):
    """ extract the index-th value of a Tuple valued operation """
    name = "TupleSelection"
    arity = 1

    def __init__(self, op, index=0):
        LM_Operation.__init__(self, op)
        self.index = index

    def get_init_kw(self):
        return {"index": self.index}

    def get_attribute_str(self):
        return "[%d]" % self.index


class Assignment(LM_Operation):
    """ bind a Variable (op0) to a value (op1) """
    name = "Assignment"
    arity = 2


class Return(LM_Operation):
    name = "Return"
    arity = 1


class Statement(LM_Operation):
    """ ordered sequence of Assignment and Return """
    name = "Statement"


## helper to build a chain of nested FusedMultiplyAdd
def mul_add(a, b, c):
    return FusedMultiplyAdd(a, b, c)
