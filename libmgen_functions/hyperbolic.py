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
# description: hyperbolic sine, cosine and tangent generators
###############################################################################

from libmgen_core.core.lm_operations import (
    Variable, MathFunction, FunctionCall, Abs, Select, Assignment, Return,
)
from libmgen_core.core.polynomials import Parity
from libmgen_core.core.test_oracle import gen_test, RelativeError

from .helpers import (
    FunctionBuilder, fit, get_num_terms, SINH_TERMS, COSH_TERMS, TANH_TERMS,
)

## bound of the tanh polynomial approximation domain
TANH_BOUND = "0.625"


def gen_sinh(num_terms, num_bits, number_type):
    """ polynomial on [-1, 1], (exp(x) - exp(-x)) / 2 beyond """
    sinh_approx = fit(MathFunction("sinh", Variable("arg")),
                      num_terms, "-1", "1", "arg", Parity.ODD, num_bits)
    builder = FunctionBuilder("sinh", number_type, ["arg"])
    var = builder.var
    return builder.build([
        Assignment(var("p"), sinh_approx.get_expression()),
        Assignment(var("q"), (FunctionCall("exp", var("arg")) - FunctionCall("exp", -var("arg"))) * 0.5),
        Return(Select(Abs(var("arg")) <= 1, var("p"), var("q"))),
    ], approximations=[sinh_approx])


def gen_cosh(num_terms, num_bits, number_type):
    """ polynomial on [-1, 1], (exp(x) + exp(-x)) / 2 beyond """
    cosh_approx = fit(MathFunction("cosh", Variable("arg")),
                      num_terms, "-1", "1", "arg", Parity.EVEN, num_bits)
    builder = FunctionBuilder("cosh", number_type, ["arg"])
    var = builder.var
    return builder.build([
        Assignment(var("p"), cosh_approx.get_expression()),
        Assignment(var("q"), (FunctionCall("exp", var("arg")) + FunctionCall("exp", -var("arg"))) * 0.5),
        Return(Select(Abs(var("arg")) <= 1, var("p"), var("q"))),
    ], approximations=[cosh_approx])


def gen_tanh(num_terms, num_bits, number_type):
    """ polynomial on [-0.625, 0.625], 1 - 2 / (exp(2|x|) + 1) beyond
        (with the sign of x) """
    tanh_approx = fit(MathFunction("tanh", Variable("arg")),
                      num_terms, "-" + TANH_BOUND, TANH_BOUND, "arg", Parity.ODD, num_bits)
    builder = FunctionBuilder("tanh", number_type, ["arg"])
    var = builder.var
    return builder.build([
        Assignment(var("ax"), Abs(var("arg"))),
        Assignment(var("p"), tanh_approx.get_expression()),
        Assignment(var("q"), 1.0 - 2.0 / (FunctionCall("exp", 2.0 * var("ax")) + 1.0)),
        Assignment(var("q"), Select(var("arg") < 0, -var("q"), var("q"))),
        Return(Select(var("ax") <= TANH_BOUND, var("p"), var("q"))),
    ], approximations=[tanh_approx])


def gen_hyperbolic(num_bits, number_type):
    """ sinh, cosh and tanh functions and their tests, the large
        arguments call the generated exp """
    functions = [
        gen_sinh(get_num_terms(SINH_TERMS, num_bits), num_bits, number_type),
        gen_cosh(get_num_terms(COSH_TERMS, num_bits), num_bits, number_type),
        gen_tanh(get_num_terms(TANH_TERMS, num_bits), num_bits, number_type),
    ]
    tests = [
        gen_test(name, MathFunction(name, Variable("x")), FunctionCall(name, Variable("x")),
                 6, -10, 10, number_type, error_mode=RelativeError)
        for name in ["sinh", "cosh", "tanh"]
    ]
    return functions, tests
