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
# description: sine, cosine, tangent and sin_cos generators
###############################################################################

from libmgen_core.core.lm_operations import (
    Variable, MathConstant, MathFunction, FunctionCall, NearestInteger, Abs,
    Select, Tuple, TupleSelection, Assignment, Return,
)
from libmgen_core.core.polynomials import Parity
from libmgen_core.core.test_oracle import gen_test

from .helpers import (
    FunctionBuilder, fit, get_constant, get_num_terms,
    SINGLE_PASS_TERMS, QUADRANT_TERMS, TAN_TERMS,
)


def gen_single_pass_sin(num_terms, num_bits, number_type):
    """ sin(arg) = sin(2 pi x) with x = arg / (2 pi) - rint(arg / (2 pi)) """
    x = Variable("x")
    sin_approx = fit(MathFunction("sin", x * MathConstant("pi") * 2),
                     num_terms, "-0.5", "0.5", "x", Parity.ODD, num_bits)
    builder = FunctionBuilder("sin", number_type, ["arg"])
    var = builder.var
    return builder.build([
        Assignment(var("scaled"), var("arg") * get_constant(lambda ctx: 1 / (2 * ctx.pi))),
        Assignment(var("x"), var("scaled") - NearestInteger(var("scaled"))),
        Return(sin_approx.get_expression()),
    ], approximations=[sin_approx])


def gen_single_pass_cos(num_terms, num_bits, number_type):
    x = Variable("x")
    cos_approx = fit(MathFunction("cos", x * MathConstant("pi") * 2),
                     num_terms, "-0.5", "0.5", "x", Parity.EVEN, num_bits)
    builder = FunctionBuilder("cos", number_type, ["arg"])
    var = builder.var
    return builder.build([
        Assignment(var("scaled"), var("arg") * get_constant(lambda ctx: 1 / (2 * ctx.pi))),
        Assignment(var("x"), var("scaled") - NearestInteger(var("scaled"))),
        Return(cos_approx.get_expression()),
    ], approximations=[cos_approx])


def gen_quadrant_approximations(num_terms, num_bits):
    """ sin(pi s) and cos(pi c) fits over a quarter period """
    s = Variable("s")
    c = Variable("c")
    sin_approx = fit(MathFunction("sin", s * MathConstant("pi")),
                     num_terms, "-0.25", "0.25", "s", Parity.ODD, num_bits)
    cos_approx = fit(MathFunction("cos", c * MathConstant("pi")),
                     num_terms + 1, "-0.25", "0.25", "c", Parity.EVEN, num_bits)
    return sin_approx, cos_approx


def quadrant_reduction(var):
    """ x = arg / pi is split twice: x = xr + s and x + 0.5 = xhr + c,
        with xr and xhr integers, s and c in [-0.5, 0.5] and at least one
        of them in [-0.25, 0.25] """
    return [
        Assignment(var("x"), var("arg") * get_constant(lambda ctx: 1 / ctx.pi)),
        Assignment(var("xh"), var("x") + 0.5),
        Assignment(var("xr"), NearestInteger(var("x"))),
        Assignment(var("xhr"), NearestInteger(var("xh"))),
    ]


def gen_quadrant_sin(num_terms, num_bits, number_type):
    """ sin(pi x) = (-1)^xr sin(pi s) = -(-1)^xhr cos(pi c) """
    sin_approx, cos_approx = gen_quadrant_approximations(num_terms, num_bits)
    builder = FunctionBuilder("sin", number_type, ["arg"])
    var = builder.var
    return builder.build(quadrant_reduction(var) + [
        Assignment(var("s"), var("x") - var("xr")),
        Assignment(var("c"), var("xh") - var("xhr")),
        Assignment(var("sr"), sin_approx.get_expression()),
        Assignment(var("cr"), -cos_approx.get_expression()),
        Assignment(var("ss"), FunctionCall("negate_on_odd", var("xr"), var("sr"))),
        Assignment(var("cs"), FunctionCall("negate_on_odd", var("xhr"), var("cr"))),
        Return(Select(Abs(var("s")) <= 0.25, var("ss"), var("cs"))),
    ], approximations=[sin_approx, cos_approx])


def gen_quadrant_cos(num_terms, num_bits, number_type):
    """ cos(pi x) = (-1)^xr cos(pi c) = (-1)^xhr sin(pi s) """
    sin_approx, cos_approx = gen_quadrant_approximations(num_terms, num_bits)
    builder = FunctionBuilder("cos", number_type, ["arg"])
    var = builder.var
    return builder.build(quadrant_reduction(var) + [
        Assignment(var("c"), var("x") - var("xr")),
        Assignment(var("s"), var("xh") - var("xhr")),
        Assignment(var("sr"), sin_approx.get_expression()),
        Assignment(var("cr"), cos_approx.get_expression()),
        Assignment(var("ss"), FunctionCall("negate_on_odd", var("xhr"), var("sr"))),
        Assignment(var("cs"), FunctionCall("negate_on_odd", var("xr"), var("cr"))),
        Return(Select(Abs(var("c")) <= 0.25, var("cs"), var("ss"))),
    ], approximations=[sin_approx, cos_approx])


def gen_tan(num_terms, num_bits, number_type):
    """ tan(arg) = tan(pi x), the approximated tan(pi x) * (x^2 - 0.25)
        has no pole on [-0.5, 0.5] """
    x = Variable("x")
    tan_approx = fit(MathFunction("tan", x * MathConstant("pi")) * (Variable("x") * Variable("x") - 0.25),
                     num_terms, "-0.499999", "0.499999", "x", Parity.ODD, num_bits)
    builder = FunctionBuilder("tan", number_type, ["arg"])
    var = builder.var
    return builder.build([
        Assignment(var("scaled"), var("arg") * get_constant(lambda ctx: 1 / ctx.pi)),
        Assignment(var("x"), var("scaled") - NearestInteger(var("scaled"))),
        Assignment(var("recip"), 1.0 / (var("x") * var("x") - 0.25)),
        Assignment(var("y"), tan_approx.get_expression()),
        Return(var("y") * var("recip")),
    ], approximations=[tan_approx])


def gen_sin_cos(num_bits, number_type):
    builder = FunctionBuilder("sin_cos", number_type, ["arg"])
    var = builder.var
    return builder.build([
        Return(Tuple(FunctionCall("sin", var("arg")), FunctionCall("cos", var("arg")))),
    ], output_arity=2)


def gen_trig_tests(num_bits, number_type, sin_cos_ulps):
    """ sin, cos, tan and sin_cos tests, sin and cos (also through sin_cos)
        are tested with the error bounds @p sin_cos_ulps """
    sin_ulps, cos_ulps = sin_cos_ulps
    pi = get_constant("pi")
    quarter_pi = get_constant(lambda ctx: ctx.pi / 4)

    def x():
        return Variable("x")

    return [
        gen_test("sin", MathFunction("sin", x()), FunctionCall("sin", x()),
                 sin_ulps, -pi, pi, number_type),
        gen_test("cos", MathFunction("cos", x()), FunctionCall("cos", x()),
                 cos_ulps, -pi, pi, number_type),
        gen_test("tan", MathFunction("tan", x()), FunctionCall("tan", x()),
                 6, -quarter_pi, quarter_pi, number_type),
        gen_test("sin_cos_1", MathFunction("sin", x()), TupleSelection(FunctionCall("sin_cos", x()), index=0),
                 sin_ulps, -pi, pi, number_type),
        gen_test("sin_cos_2", MathFunction("cos", x()), TupleSelection(FunctionCall("sin_cos", x()), index=1),
                 cos_ulps, -pi, pi, number_type),
    ]


def gen_single_pass_trig(num_bits, number_type):
    """ sin, cos (single range reduction over a whole period), tan and
        sin_cos functions and their tests """
    num_terms = get_num_terms(SINGLE_PASS_TERMS, num_bits)
    functions = [
        gen_single_pass_sin(num_terms, num_bits, number_type),
        gen_single_pass_cos(num_terms + 1, num_bits, number_type),
        gen_tan(get_num_terms(TAN_TERMS, num_bits), num_bits, number_type),
        gen_sin_cos(num_bits, number_type),
    ]
    return functions, gen_trig_tests(num_bits, number_type, (8, 8))


def gen_quadrant_trig(num_bits, number_type):
    """ sin, cos (quarter period approximations, sign restored by
        negate_on_odd), tan and sin_cos functions and their tests """
    num_terms = get_num_terms(QUADRANT_TERMS, num_bits)
    functions = [
        gen_quadrant_sin(num_terms, num_bits, number_type),
        gen_quadrant_cos(num_terms, num_bits, number_type),
        gen_tan(get_num_terms(TAN_TERMS, num_bits), num_bits, number_type),
        gen_sin_cos(num_bits, number_type),
    ]
    return functions, gen_trig_tests(num_bits, number_type, (3, 4))
