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
# description: auxiliary functions called by the other families
###############################################################################

from libmgen_core.core.lm_operations import (
    Variable, MathConstant, MathFunction, FunctionCall, NearestInteger, IsOdd,
    Select, Assignment, Return, mul_add,
)
from libmgen_core.core.test_oracle import gen_test, RelativeError

from .helpers import FunctionBuilder


def gen_negate_on_odd(num_bits, number_type):
    """ -v if the integral value k is odd, v otherwise """
    builder = FunctionBuilder("negate_on_odd", number_type, ["k", "v"])
    var = builder.var
    return builder.build([
        Return(Select(IsOdd(var("k")), -var("v"), var("v"))),
    ])


def gen_hypot(num_bits, number_type):
    """ sqrt(x^2 + y^2), calls the generated sqrt """
    builder = FunctionBuilder("hypot", number_type, ["x", "y"])
    var = builder.var
    return builder.build([
        Assignment(var("s"), mul_add(var("x"), var("x"), var("y") * var("y"))),
        Return(FunctionCall("sqrt", var("s"))),
    ])


def gen_aux(num_bits, number_type):
    """ negate_on_odd and hypot functions and their tests """
    functions = [
        gen_negate_on_odd(num_bits, number_type),
        gen_hypot(num_bits, number_type),
    ]

    def x():
        return Variable("x")

    tests = [
        # cos(pi k) = (-1)^k
        gen_test("negate_on_odd",
                 MathFunction("cos", MathConstant("pi") * NearestInteger(x())),
                 FunctionCall("negate_on_odd", NearestInteger(x()), 1.0),
                 1, -10, 10, number_type),
        gen_test("hypot",
                 MathFunction("hypot", x(), 0.5 * x()),
                 FunctionCall("hypot", x(), 0.5 * x()),
                 6, "1e-3", "1e3", number_type, error_mode=RelativeError),
    ]
    return functions, tests
