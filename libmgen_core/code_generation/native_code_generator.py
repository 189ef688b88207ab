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
# description: Python (numpy based) source generation, through the host
#              abstract syntax tree
###############################################################################

import ast

from ..core.lm_operations import (
    Constant, MathConstant, FromBits, Splat, Conversion, Variable,
    Negation, Abs, NearestInteger, Floor, IsOdd,
    ExponentInsertion, ExponentExtraction, MantissaExtraction,
    Addition, Subtraction, Multiplication, Division, FusedMultiplyAdd,
    Comparison, Select, MathFunction, FunctionCall, Tuple, TupleSelection,
    Assignment, Return, Statement,
)
from ..core.test_oracle import RelativeError

from .code_constant import Native_Code
from .code_generator import CodeGenerator, RegisterCodeGenerator


NATIVE_PREAMBLE = '''\
import math
import numpy as np


def from_bits32(bits):
    return np.array(bits, dtype=np.uint32).view(np.float32)[()]


def from_bits64(bits):
    return np.array(bits, dtype=np.uint64).view(np.float64)[()]


def splat(value):
    return np.asarray(value)


def mul_add(a, b, c):
    return a * b + c


def is_odd(k):
    return np.fmod(k, 2) != 0


def exponent_insertion(k, dtype):
    return np.ldexp(dtype(1), np.asarray(k).astype(np.int64))


def exponent(x):
    return (np.frexp(x)[1] - 1).astype(x.dtype)


def mantissa(x):
    return np.frexp(x)[0] * 2


def ulp_scale(reference, field_size, emin, relative):
    if not relative:
        return math.ldexp(1.0, -field_size)
    magnitude = max(abs(float(reference)), math.ldexp(1.0, emin))
    return math.ldexp(1.0, math.frexp(magnitude)[1] - 1 - field_size)
'''

## test function template, upper case names are placeholders
NATIVE_TEST_TEMPLATE = '''\
def TEST_NAME():
    lo = LO
    hi = HI
    max_error = 0.0
    for sample in np.linspace(lo, hi, NUM_SAMPLES):
        VAR = DTYPE(sample)
        reference = REFERENCE
        candidate = CANDIDATE
        scale = ulp_scale(reference, FIELD_SIZE, EMIN, RELATIVE)
        error = abs(float(candidate) - float(reference)) / scale
        if math.isnan(error) or error > max_error:
            max_error = error
    assert max_error <= MAX_ULPS, MESSAGE
'''

## numpy implementation of each MathFunction
NP_FUNCTION_MAP = {
    "sin": "sin", "cos": "cos", "tan": "tan",
    "asin": "arcsin", "acos": "arccos", "atan": "arctan",
    "exp": "exp", "exp2": "exp2", "ln": "log", "log2": "log2", "log10": "log10",
    "sinh": "sinh", "cosh": "cosh", "tanh": "tanh", "atanh": "arctanh",
    "sqrt": "sqrt", "hypot": "hypot",
}

## name of the bit-pattern decoding helper of each format, by bit size
FROM_BITS_HELPER = {32: "from_bits32", 64: "from_bits64"}

BINARY_OPERATOR_MAP = {
    Addition: ast.Add,
    Subtraction: ast.Sub,
    Multiplication: ast.Mult,
    Division: ast.Div,
}

COMPARISON_OPERATOR_MAP = {
    Comparison.Less: ast.Lt,
    Comparison.LessOrEqual: ast.LtE,
    Comparison.Greater: ast.Gt,
    Comparison.GreaterOrEqual: ast.GtE,
}


def load(name):
    return ast.Name(id=name, ctx=ast.Load())


def np_attribute(name):
    return ast.Attribute(value=load("np"), attr=name, ctx=ast.Load())


def call(func, *args):
    if isinstance(func, str):
        func = load(func)
    return ast.Call(func=func, args=list(args), keywords=[])


class PlaceholderSubstitution(ast.NodeTransformer):
    """ replace placeholder names of a parsed template by syntax nodes
        (or by other names when mapped to a string) """
    def __init__(self, mapping):
        self.mapping = mapping

    def visit_Name(self, node):
        if node.id not in self.mapping:
            return node
        value = self.mapping[node.id]
        if isinstance(value, str):
            return ast.Name(id=value, ctx=node.ctx)
        return value


@RegisterCodeGenerator([Native_Code])
class NativeCodeGenerator(CodeGenerator):
    """ Python module generation: every generated function becomes a
        numpy-typed Python function and every test an assert-based
        test_<name> function """
    language = Native_Code

    def get_dtype_name(self, precision=None):
        precision = self.precision if precision is None else precision
        return precision.get_numpy_dtype().__name__

    def generate_expr(self, node, reference=False):
        """ Python expression (ast node) of @p node, in @p reference mode
            variables are promoted to binary64 before evaluation """
        def gen(op):
            return self.generate_expr(op, reference)

        if isinstance(node, FromBits):
            bit_size = node.get_precision().get_bit_size()
            return call(FROM_BITS_HELPER[bit_size], ast.Constant(value=node.get_input(0).get_value()))
        elif isinstance(node, Splat):
            return call("splat", gen(node.get_input(0)))
        elif isinstance(node, (Constant, MathConstant)):
            self.unsupported(node, " (constants must be quantized before code generation)")
        elif isinstance(node, Conversion):
            return call(np_attribute(self.get_dtype_name(node.get_precision())), gen(node.get_input(0)))
        elif isinstance(node, Variable):
            if reference:
                return call(np_attribute("float64"), load(node.get_tag()))
            return load(node.get_tag())
        elif isinstance(node, Negation):
            return ast.UnaryOp(op=ast.USub(), operand=gen(node.get_input(0)))
        elif isinstance(node, Abs):
            return call(np_attribute("abs"), gen(node.get_input(0)))
        elif isinstance(node, NearestInteger):
            return call(np_attribute("rint"), gen(node.get_input(0)))
        elif isinstance(node, Floor):
            return call(np_attribute("floor"), gen(node.get_input(0)))
        elif isinstance(node, IsOdd):
            return call("is_odd", gen(node.get_input(0)))
        elif isinstance(node, ExponentInsertion):
            return call("exponent_insertion", gen(node.get_input(0)), np_attribute(self.get_dtype_name()))
        elif isinstance(node, ExponentExtraction):
            return call("exponent", gen(node.get_input(0)))
        elif isinstance(node, MantissaExtraction):
            return call("mantissa", gen(node.get_input(0)))
        elif node.__class__ in BINARY_OPERATOR_MAP:
            return ast.BinOp(left=gen(node.get_input(0)), op=BINARY_OPERATOR_MAP[node.__class__](),
                             right=gen(node.get_input(1)))
        elif isinstance(node, Comparison):
            return ast.Compare(left=gen(node.get_input(0)), ops=[COMPARISON_OPERATOR_MAP[node.specifier]()],
                               comparators=[gen(node.get_input(1))])
        elif isinstance(node, FusedMultiplyAdd):
            return call("mul_add", *(gen(op) for op in node.get_inputs()))
        elif isinstance(node, Select):
            cond, if_value, else_value = (gen(op) for op in node.get_inputs())
            if self.number_type.is_vector():
                return call(np_attribute("where"), cond, if_value, else_value)
            return ast.IfExp(test=cond, body=if_value, orelse=else_value)
        elif isinstance(node, MathFunction):
            name = node.get_function_name()
            if name not in NP_FUNCTION_MAP:
                self.unsupported(node, " ({} has no numpy counterpart)".format(name))
            return call(np_attribute(NP_FUNCTION_MAP[name]), *(gen(op) for op in node.get_inputs()))
        elif isinstance(node, FunctionCall):
            return call(node.get_function_name(), *(gen(op) for op in node.get_inputs()))
        elif isinstance(node, Tuple):
            return ast.Tuple(elts=[gen(op) for op in node.get_inputs()], ctx=ast.Load())
        elif isinstance(node, TupleSelection):
            return ast.Subscript(value=gen(node.get_input(0)), slice=ast.Constant(value=node.index), ctx=ast.Load())
        self.unsupported(node)

    def generate_statement(self, node):
        """ list of Python statements (ast nodes) implementing @p node """
        if isinstance(node, Statement):
            return [stmt for op in node.get_inputs() for stmt in self.generate_statement(op)]
        elif isinstance(node, Assignment):
            target = ast.Name(id=node.get_input(0).get_tag(), ctx=ast.Store())
            return [ast.Assign(targets=[target], value=self.generate_expr(node.get_input(1)))]
        elif isinstance(node, Return):
            return [ast.Return(value=self.generate_expr(node.get_input(0)))]
        self.unsupported(node, " (not a statement)")

    def generate_function(self, fct):
        arg_names = ", ".join(arg.get_tag() for arg in fct.get_arg_list())
        function_def = ast.parse("def %s(%s):\n    pass\n" % (fct.get_name(), arg_names)).body[0]
        function_def.body = self.generate_statement(fct.get_body())
        return function_def

    def generate_test(self, test_case):
        template = ast.parse(NATIVE_TEST_TEMPLATE).body[0]
        mapping = {
            "LO": self.generate_expr(test_case.lo),
            "HI": self.generate_expr(test_case.hi),
            "NUM_SAMPLES": ast.Constant(value=test_case.num_samples),
            "VAR": test_case.var_name,
            "DTYPE": np_attribute(self.get_dtype_name()),
            "REFERENCE": self.generate_expr(test_case.reference, reference=True),
            "CANDIDATE": self.generate_expr(test_case.candidate),
            "FIELD_SIZE": ast.Constant(value=self.precision.get_field_size()),
            "EMIN": ast.Constant(value=self.precision.get_emin_normal()),
            "RELATIVE": ast.Constant(value=test_case.error_mode is RelativeError),
            "MAX_ULPS": ast.Constant(value=float(test_case.max_ulps)),
            "MESSAGE": ast.Constant(value="{} exceeds {} ulp(s)".format(test_case.name, test_case.max_ulps)),
        }
        test_def = PlaceholderSubstitution(mapping).visit(template)
        test_def.name = "test_%s" % test_case.name
        return test_def

    def render(self, functions, tests):
        body = ast.parse(NATIVE_PREAMBLE).body
        body += [self.generate_function(fct) for fct in functions]
        body += [self.generate_test(test_case) for test_case in tests]
        module = ast.Module(body=body, type_ignores=[])
        return ast.unparse(ast.fix_missing_locations(module)) + "\n"
