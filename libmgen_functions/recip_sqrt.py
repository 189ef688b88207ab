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
# description: reciprocal, reciprocal square root and square root generators
#              (polynomial seed refined by Newton-Raphson iterations)
###############################################################################

from libmgen_core.core.lm_operations import (
    Constant, Variable, MathFunction, FunctionCall, Abs, Floor,
    ExponentInsertion, ExponentExtraction, MantissaExtraction,
    Select, Assignment, Return,
)
from libmgen_core.core.polynomials import Parity
from libmgen_core.core.test_oracle import gen_test, RelativeError

from .helpers import (
    FunctionBuilder, fit, get_num_terms,
    RECIP_SEED_TERMS, RSQRT_SEED_TERMS, RECIP_ITERATIONS, RSQRT_ITERATIONS,
)


def gen_recip(num_bits, number_type):
    """ 1/x = 2^-e / m with x = 2^e m, the seed y ~ 1/|m| is refined by
        y <- y (2 - |m| y) """
    seed = fit(1 / Variable("am"), get_num_terms(RECIP_SEED_TERMS, num_bits),
               "1", "2", "am", Parity.NONE, num_bits)
    builder = FunctionBuilder("recip", number_type, ["arg"])
    var = builder.var
    statements = [
        Assignment(var("e"), ExponentExtraction(var("arg"))),
        Assignment(var("m"), MantissaExtraction(var("arg"))),
        Assignment(var("am"), Abs(var("m"))),
        Assignment(var("y"), seed.get_expression()),
    ]
    for _ in range(get_num_terms(RECIP_ITERATIONS, num_bits)):
        statements.append(Assignment(var("y"), var("y") * (2.0 - var("am") * var("y"))))
    statements += [
        Assignment(var("y"), Select(var("m") < 0, -var("y"), var("y"))),
        Return(var("y") * ExponentInsertion(-var("e"))),
    ]
    return builder.build(statements, approximations=[seed])


def rsqrt_statements(var, seed, num_iterations):
    """ x = 2^(2h) m with m within [1, 4), y ~ 1/sqrt(m) is refined by
        y <- y (1.5 - 0.5 m y^2) """
    statements = [
        Assignment(var("e"), ExponentExtraction(var("arg"))),
        Assignment(var("h"), Floor(var("e") * 0.5)),
        Assignment(var("m"), MantissaExtraction(var("arg")) * ExponentInsertion(var("e") - 2.0 * var("h"))),
        Assignment(var("y"), seed.get_expression()),
    ]
    for _ in range(num_iterations):
        statements.append(
            Assignment(var("y"), var("y") * (1.5 - 0.5 * var("m") * var("y") * var("y"))))
    return statements


def gen_rsqrt_seed(num_bits):
    return fit(1 / MathFunction("sqrt", Variable("m")), get_num_terms(RSQRT_SEED_TERMS, num_bits),
               "1", "4", "m", Parity.NONE, num_bits)


def gen_recip_sqrt(num_bits, number_type):
    seed = gen_rsqrt_seed(num_bits)
    builder = FunctionBuilder("recip_sqrt", number_type, ["arg"])
    var = builder.var
    statements = rsqrt_statements(var, seed, get_num_terms(RSQRT_ITERATIONS, num_bits))
    statements.append(Return(var("y") * ExponentInsertion(-var("h"))))
    return builder.build(statements, approximations=[seed])


def gen_sqrt(num_bits, number_type):
    """ sqrt(x) = m * (1/sqrt(m)) * 2^h """
    seed = gen_rsqrt_seed(num_bits)
    builder = FunctionBuilder("sqrt", number_type, ["arg"])
    var = builder.var
    statements = rsqrt_statements(var, seed, get_num_terms(RSQRT_ITERATIONS, num_bits))
    statements.append(Return(var("m") * var("y") * ExponentInsertion(var("h"))))
    return builder.build(statements, approximations=[seed])


def gen_recip_sqrt_family(num_bits, number_type):
    """ recip, recip_sqrt and sqrt functions and their tests """
    functions = [
        gen_recip(num_bits, number_type),
        gen_recip_sqrt(num_bits, number_type),
        gen_sqrt(num_bits, number_type),
    ]

    def x():
        return Variable("x")

    tests = [
        gen_test("recip", Constant(1) / x(), FunctionCall("recip", x()),
                 4, "1e-3", "1e3", number_type, error_mode=RelativeError),
        gen_test("recip_sqrt", 1 / MathFunction("sqrt", x()), FunctionCall("recip_sqrt", x()),
                 4, "1e-3", "1e3", number_type, error_mode=RelativeError),
        gen_test("sqrt", MathFunction("sqrt", x()), FunctionCall("sqrt", x()),
                 4, "1e-3", "1e3", number_type, error_mode=RelativeError),
    ]
    return functions, tests
