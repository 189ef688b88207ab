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
# description: expression evaluators, in arbitrary precision (mpmath) and
#              emulating a binary format arithmetic (numpy scalars)
###############################################################################

from fractions import Fraction

import numpy as np

from .lm_operations import (
    Constant, MathConstant, BitPattern, FromBits, Splat, Conversion, Variable,
    Negation, Abs, NearestInteger, Floor, IsOdd,
    ExponentInsertion, ExponentExtraction, MantissaExtraction,
    Addition, Subtraction, Multiplication, Division, FusedMultiplyAdd,
    Comparison, Select, MathFunction, FunctionCall, Tuple, TupleSelection,
    Assignment, Return, Statement,
)
from .mp_numbers import (
    to_fraction, to_mpf, floor_log2, math_constant_value, round_to_format,
    get_value_from_integer_coding, get_integer_coding, decode_bits,
    new_context,
)

from ..utility.log_report import Log


class EvaluationError(Exception):
    """ an operation tree can not be evaluated """
    pass


## mpmath implementation of MathFunction names
MP_FUNCTION_MAP = {
    "sin": lambda ctx, x: ctx.sin(x),
    "cos": lambda ctx, x: ctx.cos(x),
    "tan": lambda ctx, x: ctx.tan(x),
    "asin": lambda ctx, x: ctx.asin(x),
    "acos": lambda ctx, x: ctx.acos(x),
    "atan": lambda ctx, x: ctx.atan(x),
    "exp": lambda ctx, x: ctx.exp(x),
    "exp2": lambda ctx, x: ctx.power(2, x),
    "ln": lambda ctx, x: ctx.ln(x),
    "log2": lambda ctx, x: ctx.log(x, 2),
    "log10": lambda ctx, x: ctx.log10(x),
    "sinh": lambda ctx, x: ctx.sinh(x),
    "cosh": lambda ctx, x: ctx.cosh(x),
    "tanh": lambda ctx, x: ctx.tanh(x),
    "atanh": lambda ctx, x: ctx.atanh(x),
    "sqrt": lambda ctx, x: ctx.sqrt(x),
    "hypot": lambda ctx, x, y: ctx.hypot(x, y),
}


def compare(specifier, lhs, rhs):
    if specifier is Comparison.Less:
        return lhs < rhs
    elif specifier is Comparison.LessOrEqual:
        return lhs <= rhs
    elif specifier is Comparison.Greater:
        return lhs > rhs
    elif specifier is Comparison.GreaterOrEqual:
        return lhs >= rhs
    raise NotImplementedError


class Evaluator(object):
    """ common statement and control evaluation, the numeric
        operations are implemented by the sub-classes """
    def __init__(self, functions=None):
        # map name -> GeneratedFunction, used to evaluate FunctionCall
        self.functions = {} if functions is None else functions

    def evaluate_function(self, fct, args):
        """ evaluate the generated function @p fct on @p args """
        bindings = {
            arg.get_tag(): self.convert_argument(value) for arg, value in zip(fct.get_arg_list(), args)
        }
        return self.evaluate(fct.get_body(), bindings)

    def convert_argument(self, value):
        return value

    def evaluate(self, node, bindings):
        if isinstance(node, Statement):
            for statement in node.get_inputs():
                if isinstance(statement, Return):
                    return self.evaluate(statement.get_input(0), bindings)
                self.evaluate(statement, bindings)
            return None
        elif isinstance(node, Assignment):
            bindings[node.get_input(0).get_tag()] = self.evaluate(node.get_input(1), bindings)
            return None
        elif isinstance(node, Return):
            return self.evaluate(node.get_input(0), bindings)
        elif isinstance(node, Variable):
            try:
                return bindings[node.get_tag()]
            except KeyError:
                Log.report(Log.Error, "unbound variable {}", node.get_tag(),
                           error=EvaluationError(node.get_tag()))
        elif isinstance(node, Select):
            cond = self.evaluate(node.get_input(0), bindings)
            if_value = self.evaluate(node.get_input(1), bindings)
            else_value = self.evaluate(node.get_input(2), bindings)
            return if_value if cond else else_value
        elif isinstance(node, Comparison):
            lhs, rhs = (self.evaluate(op, bindings) for op in node.get_inputs())
            return bool(compare(node.specifier, lhs, rhs))
        elif isinstance(node, Tuple):
            return tuple(self.evaluate(op, bindings) for op in node.get_inputs())
        elif isinstance(node, TupleSelection):
            return self.evaluate(node.get_input(0), bindings)[node.index]
        elif isinstance(node, FunctionCall):
            name = node.get_function_name()
            if name not in self.functions:
                Log.report(Log.Error, "call to unknown function {}", name, error=EvaluationError(name))
            args = [self.evaluate(op, bindings) for op in node.get_inputs()]
            return self.evaluate_function(self.functions[name], args)
        else:
            args = [self.evaluate(op, bindings) for op in node.get_inputs()]
            return self.evaluate_operation(node, args)

    def evaluate_operation(self, node, args):
        raise NotImplementedError


class MPEvaluator(Evaluator):
    """ arbitrary precision evaluation within an mpmath context """
    def __init__(self, ctx, functions=None):
        Evaluator.__init__(self, functions)
        self.ctx = ctx

    def convert_argument(self, value):
        return to_mpf(self.ctx, to_fraction(value))

    def evaluate_operation(self, node, args):
        ctx = self.ctx
        if isinstance(node, Constant):
            return to_mpf(ctx, node.get_fraction())
        elif isinstance(node, MathConstant):
            return math_constant_value(ctx, node.constant_name)
        elif isinstance(node, FromBits):
            return to_mpf(ctx, get_value_from_integer_coding(node.get_input(0).get_value(), node.get_precision()))
        elif isinstance(node, BitPattern):
            return node.get_value()
        elif isinstance(node, Splat):
            return args[0]
        elif isinstance(node, Conversion):
            return to_mpf(ctx, round_to_format(args[0], node.get_precision()))
        elif isinstance(node, Negation):
            return -args[0]
        elif isinstance(node, Abs):
            return abs(args[0])
        elif isinstance(node, NearestInteger):
            # Fraction rounding breaks ties to even
            return ctx.mpf(round(to_fraction(args[0])))
        elif isinstance(node, Floor):
            return ctx.floor(args[0])
        elif isinstance(node, IsOdd):
            return int(args[0]) % 2 == 1
        elif isinstance(node, ExponentInsertion):
            return ctx.ldexp(1, int(args[0]))
        elif isinstance(node, ExponentExtraction):
            return ctx.mpf(floor_log2(abs(to_fraction(args[0]))))
        elif isinstance(node, MantissaExtraction):
            return ctx.ldexp(args[0], -floor_log2(abs(to_fraction(args[0]))))
        elif isinstance(node, Addition):
            return args[0] + args[1]
        elif isinstance(node, Subtraction):
            return args[0] - args[1]
        elif isinstance(node, Multiplication):
            return args[0] * args[1]
        elif isinstance(node, Division):
            return args[0] / args[1]
        elif isinstance(node, FusedMultiplyAdd):
            return ctx.fadd(ctx.fmul(args[0], args[1], exact=True), args[2])
        elif isinstance(node, MathFunction):
            name = node.get_function_name()
            if name not in MP_FUNCTION_MAP:
                Log.report(Log.Error, "unknown mathematical function {}", name, error=EvaluationError(name))
            return MP_FUNCTION_MAP[name](ctx, *args)
        Log.report(Log.Error, "MPEvaluator does not support {}", node.get_name(),
                   error=EvaluationError(node.get_name()))


class FormatEvaluator(Evaluator):
    """ evaluation emulating the arithmetic of a binary format: every
        operation result is rounded to the format (numpy scalars),
        a FusedMultiplyAdd is evaluated with two roundings as the
        emitted mul_add helper """
    def __init__(self, precision, functions=None):
        Evaluator.__init__(self, functions)
        self.precision = precision
        self.dtype = precision.get_numpy_dtype()

    def convert_argument(self, value):
        return self.dtype(value)

    def evaluate(self, node, bindings):
        with np.errstate(all="ignore"):
            return Evaluator.evaluate(self, node, bindings)

    def round_value(self, value):
        """ nearest number of self.precision to the exact @p value """
        return decode_bits(get_integer_coding(to_fraction(value), self.precision), self.precision)

    def evaluate_operation(self, node, args):
        dtype = self.dtype
        if isinstance(node, Constant):
            return self.round_value(node.get_value())
        elif isinstance(node, MathConstant):
            return self.round_value(math_constant_value(new_context(40), node.constant_name))
        elif isinstance(node, FromBits):
            return decode_bits(node.get_input(0).get_value(), node.get_precision())
        elif isinstance(node, BitPattern):
            return node.get_value()
        elif isinstance(node, Splat):
            return args[0]
        elif isinstance(node, Conversion):
            return node.get_precision().get_numpy_dtype()(args[0])
        elif isinstance(node, Negation):
            return -args[0]
        elif isinstance(node, Abs):
            return np.abs(args[0])
        elif isinstance(node, NearestInteger):
            return np.rint(args[0])
        elif isinstance(node, Floor):
            return np.floor(args[0])
        elif isinstance(node, IsOdd):
            return bool(np.fmod(args[0], 2) != 0)
        elif isinstance(node, ExponentInsertion):
            return np.ldexp(dtype(1), int(args[0]))
        elif isinstance(node, ExponentExtraction):
            return dtype(np.frexp(args[0])[1] - 1)
        elif isinstance(node, MantissaExtraction):
            return np.frexp(args[0])[0] * dtype(2)
        elif isinstance(node, Addition):
            return args[0] + args[1]
        elif isinstance(node, Subtraction):
            return args[0] - args[1]
        elif isinstance(node, Multiplication):
            return args[0] * args[1]
        elif isinstance(node, Division):
            return args[0] / args[1]
        elif isinstance(node, FusedMultiplyAdd):
            return args[0] * args[1] + args[2]
        elif isinstance(node, MathFunction):
            ctx = new_context(40)
            name = node.get_function_name()
            exact = MP_FUNCTION_MAP[name](ctx, *(to_mpf(ctx, to_fraction(arg)) for arg in args))
            return self.round_value(exact)
        Log.report(Log.Error, "FormatEvaluator does not support {}", node.get_name(),
                   error=EvaluationError(node.get_name()))


def get_ulp_error(candidate, reference, error_mode, precision):
    """ |candidate - reference| in units of the last place of @p precision
        (absolute: ulp of 1, relative: ulp at the magnitude of reference) """
    error = abs(to_fraction(candidate) - to_fraction(reference))
    scale = error_mode.get_ulp_scale(to_fraction(reference), precision)
    return error / scale


def evaluate_test_case(test_case, functions, samples=None, precision=None):
    """ maximal error (in ulps, as a Fraction) of @p test_case on @p samples
        (default: the test case sampling), the candidate is evaluated by
        format emulation and the reference in arbitrary precision """
    precision = test_case.precision if precision is None else precision
    function_map = {fct.get_name(): fct for fct in functions}
    format_evaluator = FormatEvaluator(precision, function_map)
    ctx = new_context(2 * precision.get_bit_size())
    reference_evaluator = MPEvaluator(ctx)
    if samples is None:
        samples = test_case.get_samples()
    max_error = Fraction(0)
    for sample in samples:
        x = precision.get_numpy_dtype()(sample)
        reference = reference_evaluator.evaluate(test_case.reference, {test_case.var_name: to_mpf(ctx, to_fraction(x))})
        candidate = format_evaluator.evaluate(test_case.candidate, {test_case.var_name: x})
        if not np.isfinite(candidate):
            Log.report(Log.Error, "{} is not finite for x={}", test_case.name, x,
                       error=EvaluationError(test_case.name))
        max_error = max(max_error, get_ulp_error(candidate, reference, test_case.error_mode, precision))
    return max_error
