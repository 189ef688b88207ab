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
# description: exponential and logarithm generators
###############################################################################

from libmgen_core.core.lm_operations import (
    Variable, MathFunction, FunctionCall,
    NearestInteger, ExponentInsertion, ExponentExtraction, MantissaExtraction,
    Select, Assignment, Return, mul_add,
)
from libmgen_core.core.mp_numbers import to_fraction
from libmgen_core.core.polynomials import Parity
from libmgen_core.core.test_oracle import gen_test, RelativeError

from .helpers import (
    FunctionBuilder, fit, get_constant, get_num_terms, get_precision,
    truncate_constant, EXP_TERMS, LOG_TERMS,
)


## number of bits of the quotient k of the exponential range reduction,
#  k * ln2_hi must be exact
EXP_QUOTIENT_BITS = 11

## bound of t = (m - 1) / (m + 1) for m within [sqrt(2)/2, sqrt(2)]
#  (3 - 2 sqrt(2) = 0.17157...)
LOG_REDUCED_BOUND = "0.1716"


def gen_exp(num_terms, num_bits, number_type):
    """ exp(x) = 2^k exp(r) with k = rint(x / ln2) and
        r = (x - k ln2_hi) - k ln2_lo (Cody-Waite reduction) """
    ln2 = to_fraction(get_constant("ln2"))
    ln2_hi = truncate_constant(ln2, get_precision(num_bits).get_mantissa_size() - EXP_QUOTIENT_BITS)
    ln2_lo = ln2 - ln2_hi
    exp_approx = fit(MathFunction("exp", Variable("r")), num_terms,
                     get_constant(lambda ctx: -ctx.ln2 / 2), get_constant(lambda ctx: ctx.ln2 / 2),
                     "r", Parity.NONE, num_bits)
    builder = FunctionBuilder("exp", number_type, ["arg"])
    var = builder.var
    return builder.build([
        Assignment(var("k"), NearestInteger(var("arg") * get_constant("log2e"))),
        Assignment(var("r"), (var("arg") - var("k") * ln2_hi) - var("k") * ln2_lo),
        Assignment(var("p"), exp_approx.get_expression()),
        Return(var("p") * ExponentInsertion(var("k"))),
    ], approximations=[exp_approx])


def gen_exp2(num_terms, num_bits, number_type):
    """ 2^x = 2^k 2^r with k = rint(x) """
    exp2_approx = fit(MathFunction("exp2", Variable("r")),
                      num_terms, "-0.5", "0.5", "r", Parity.NONE, num_bits)
    builder = FunctionBuilder("exp2", number_type, ["arg"])
    var = builder.var
    return builder.build([
        Assignment(var("k"), NearestInteger(var("arg"))),
        Assignment(var("r"), var("arg") - var("k")),
        Assignment(var("p"), exp2_approx.get_expression()),
        Return(var("p") * ExponentInsertion(var("k"))),
    ], approximations=[exp2_approx])


## logarithm bases: function name -> (mathematical function, log_b(2))
LOG_BASES = {
    "ln": ("ln", lambda ctx: ctx.ln2),
    "log2": ("log2", lambda ctx: ctx.one),
    "log10": ("log10", lambda ctx: ctx.log10(2)),
}


def gen_log(name, num_terms, num_bits, number_type):
    """ log_b(x) = e log_b(2) + log_b((1 + t) / (1 - t)) where
        x = 2^e m, m within [sqrt(2)/2, sqrt(2)] and t = (m - 1) / (m + 1) """
    math_function, log_b_2 = LOG_BASES[name]
    t = Variable("t")
    log_approx = fit(MathFunction(math_function, (1 + t) / (1 - Variable("t"))),
                     num_terms, "-" + LOG_REDUCED_BOUND, LOG_REDUCED_BOUND, "t", Parity.ODD, num_bits)
    builder = FunctionBuilder(name, number_type, ["arg"])
    var = builder.var
    return builder.build([
        Assignment(var("e"), ExponentExtraction(var("arg"))),
        Assignment(var("m"), MantissaExtraction(var("arg"))),
        Assignment(var("big"), var("m") > get_constant("sqrt2")),
        Assignment(var("m"), Select(var("big"), var("m") * 0.5, var("m"))),
        Assignment(var("e"), Select(var("big"), var("e") + 1, var("e"))),
        Assignment(var("t"), (var("m") - 1) / (var("m") + 1)),
        Assignment(var("p"), log_approx.get_expression()),
        Return(mul_add(var("e"), get_constant(log_b_2), var("p"))),
    ], approximations=[log_approx])


def gen_log_exp(num_bits, number_type):
    """ exp, exp2, ln, log2 and log10 functions and their tests """
    exp_terms = get_num_terms(EXP_TERMS, num_bits)
    log_terms = get_num_terms(LOG_TERMS, num_bits)
    functions = [
        gen_exp(exp_terms, num_bits, number_type),
        gen_exp2(exp_terms, num_bits, number_type),
        gen_log("ln", log_terms, num_bits, number_type),
        gen_log("log2", log_terms, num_bits, number_type),
        gen_log("log10", log_terms, num_bits, number_type),
    ]

    def x():
        return Variable("x")

    tests = [
        gen_test("exp", MathFunction("exp", x()), FunctionCall("exp", x()),
                 4, -10, 10, number_type, error_mode=RelativeError),
        gen_test("exp2", MathFunction("exp2", x()), FunctionCall("exp2", x()),
                 4, -10, 10, number_type, error_mode=RelativeError),
    ] + [
        gen_test(name, MathFunction(LOG_BASES[name][0], x()), FunctionCall(name, x()),
                 max_ulps, "1e-3", "1e3", number_type, error_mode=RelativeError)
        for name, max_ulps in [("ln", 4), ("log2", 4), ("log10", 6)]
    ]
    return functions, tests
