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
# description: arc-tangent, arc-sine and arc-cosine generators
###############################################################################

from libmgen_core.core.lm_operations import (
    Constant, Variable, MathFunction, FunctionCall, Abs, Select, Assignment, Return,
)
from libmgen_core.core.polynomials import Parity
from libmgen_core.core.test_oracle import gen_test

from .helpers import (
    FunctionBuilder, fit, get_constant, get_num_terms, ATAN_TERMS, ASIN_TERMS,
)


def gen_atan(num_terms, num_bits, number_type):
    """ atan(x) = pi/2 - atan(1/x) for x > 1 """
    atan_approx = fit(MathFunction("atan", Variable("t")),
                      num_terms, "-1", "1", "t", Parity.ODD, num_bits)
    half_pi = Constant(get_constant(lambda ctx: ctx.pi / 2))
    builder = FunctionBuilder("atan", number_type, ["arg"])
    var = builder.var
    return builder.build([
        Assignment(var("ax"), Abs(var("arg"))),
        Assignment(var("big"), var("ax") > 1),
        Assignment(var("t"), Select(var("big"), 1.0 / var("ax"), var("ax"))),
        Assignment(var("p"), atan_approx.get_expression()),
        Assignment(var("r"), Select(var("big"), half_pi - var("p"), var("p"))),
        Return(Select(var("arg") < 0, -var("r"), var("r"))),
    ], approximations=[atan_approx])


def gen_asin_approx(num_terms, num_bits):
    return fit(MathFunction("asin", Variable("t")),
               num_terms, "-0.5", "0.5", "t", Parity.ODD, num_bits)


def gen_asin(num_terms, num_bits, number_type):
    """ asin(x) = pi/2 - 2 asin(sqrt((1 - x) / 2)) for x > 0.5 """
    asin_approx = gen_asin_approx(num_terms, num_bits)
    half_pi = Constant(get_constant(lambda ctx: ctx.pi / 2))
    builder = FunctionBuilder("asin", number_type, ["arg"])
    var = builder.var
    return builder.build([
        Assignment(var("ax"), Abs(var("arg"))),
        Assignment(var("small"), var("ax") <= 0.5),
        Assignment(var("t"), Select(var("small"), var("ax"),
                                    FunctionCall("sqrt", (1.0 - var("ax")) * 0.5))),
        Assignment(var("p"), asin_approx.get_expression()),
        Assignment(var("r"), Select(var("small"), var("p"), half_pi - 2.0 * var("p"))),
        Return(Select(var("arg") < 0, -var("r"), var("r"))),
    ], approximations=[asin_approx])


def gen_acos(num_terms, num_bits, number_type):
    """ acos(x) = pi/2 - asin(x) for |x| <= 0.5,
        2 asin(sqrt((1 - x) / 2)) for x > 0.5 and
        pi - 2 asin(sqrt((1 + x) / 2)) for x < -0.5 """
    asin_approx = gen_asin_approx(num_terms, num_bits)
    pi = Constant(get_constant("pi"))
    half_pi = Constant(get_constant(lambda ctx: ctx.pi / 2))
    builder = FunctionBuilder("acos", number_type, ["arg"])
    var = builder.var
    return builder.build([
        Assignment(var("ax"), Abs(var("arg"))),
        Assignment(var("small"), var("ax") <= 0.5),
        Assignment(var("t"), Select(var("small"), var("arg"),
                                    FunctionCall("sqrt", (1.0 - var("ax")) * 0.5))),
        Assignment(var("p"), asin_approx.get_expression()),
        Assignment(var("large"), Select(var("arg") < 0, pi - 2.0 * var("p"), 2.0 * var("p"))),
        Return(Select(var("small"), half_pi - var("p"), var("large"))),
    ], approximations=[asin_approx])


def gen_inv_trig(num_bits, number_type):
    """ atan, asin and acos functions and their tests, asin and acos
        call the generated sqrt """
    asin_terms = get_num_terms(ASIN_TERMS, num_bits)
    functions = [
        gen_atan(get_num_terms(ATAN_TERMS, num_bits), num_bits, number_type),
        gen_asin(asin_terms, num_bits, number_type),
        gen_acos(asin_terms, num_bits, number_type),
    ]

    def x():
        return Variable("x")

    tests = [
        gen_test("atan", MathFunction("atan", x()), FunctionCall("atan", x()),
                 6, -10, 10, number_type),
        gen_test("asin", MathFunction("asin", x()), FunctionCall("asin", x()),
                 8, "-0.999", "0.999", number_type),
        gen_test("acos", MathFunction("acos", x()), FunctionCall("acos", x()),
                 8, "-0.999", "0.999", number_type),
    ]
    return functions, tests
