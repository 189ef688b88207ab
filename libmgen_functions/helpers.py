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
# description: common building blocks of the function family generators
###############################################################################

import math
from fractions import Fraction

from libmgen_core.core.lm_formats import format_from_bit_size
from libmgen_core.core.lm_operations import Variable, Statement
from libmgen_core.core.approximation import (
    ApproximationSpec, fit_approximation, num_digits_for,
)
from libmgen_core.core.mp_numbers import evaluate_constant, floor_log2, pow2, to_fraction
from libmgen_core.core.passes import Pass
from libmgen_core.code_generation.code_function import GeneratedFunction
from libmgen_core.utility.log_report import Log

# import optimization passes
from libmgen_core.opt import *


## number of terms of the single pass sine approximation
#  (cosine uses one more)
SINGLE_PASS_TERMS = {32: 7, 64: 11}
## number of terms of the quadrant sine approximation
#  (cosine uses one more)
QUADRANT_TERMS = {32: 5, 64: 8}
TAN_TERMS = {32: 8, 64: 14}
ATAN_TERMS = {32: 11, 64: 23}
ASIN_TERMS = {32: 8, 64: 16}
EXP_TERMS = {32: 7, 64: 12}
LOG_TERMS = {32: 6, 64: 11}
SINH_TERMS = {32: 5, 64: 9}
COSH_TERMS = {32: 6, 64: 10}
TANH_TERMS = {32: 7, 64: 13}
RECIP_SEED_TERMS = {32: 4, 64: 4}
RSQRT_SEED_TERMS = {32: 5, 64: 5}
## number of Newton-Raphson iterations refining the reciprocal seed
RECIP_ITERATIONS = {32: 2, 64: 3}
## number of Newton-Raphson iterations refining the reciprocal square
#  root seed
RSQRT_ITERATIONS = {32: 3, 64: 4}


def get_precision(num_bits):
    return format_from_bit_size[num_bits]


def get_num_terms(term_map, num_bits):
    if num_bits not in term_map:
        Log.report(Log.Error, "no term count for {}-bit approximations", num_bits,
                   error=KeyError(num_bits))
    return term_map[num_bits]


def get_constant(name_or_fct):
    """ exact (high precision) value of a symbolic constant """
    return evaluate_constant(name_or_fct)


def truncate_constant(value, num_bits):
    """ @p value truncated to its @p num_bits most significant bits,
        as an exact Fraction """
    value = to_fraction(value)
    quantum = pow2(floor_log2(abs(value)) - num_bits + 1)
    return Fraction(math.floor(value / quantum)) * quantum


def fit(target, num_terms, xmin, xmax, variable, parity, num_bits):
    """ minimax approximation (ApproximationResult) of @p target, at the
        working precision of @p num_bits wide functions """
    spec = ApproximationSpec(target, variable, num_terms, xmin, xmax,
                             parity=parity, num_digits=num_digits_for(num_bits))
    return fit_approximation(spec)


class FunctionBuilder(object):
    """ builder of a generated function body, variables are created on
        demand (a new node for each use) """
    def __init__(self, name, number_type, arg_names):
        self.name = name
        self.number_type = number_type
        self.precision = number_type.get_scalar_format()
        self.arg_names = list(arg_names)

    def var(self, name):
        return Variable(name, precision=self.precision)

    def build(self, statements, approximations=None, output_arity=1):
        """ return the GeneratedFunction whose body is the sequence
            @p statements, with every constant quantized """
        fct = GeneratedFunction(
            self.name, self.number_type,
            [self.var(name) for name in self.arg_names],
            Statement(*statements),
            output_arity=output_arity, approximations=approximations)
        quantization = Pass.get_pass_by_tag("use_number_type")(self.number_type)
        return quantization.execute_on_function(fct)
