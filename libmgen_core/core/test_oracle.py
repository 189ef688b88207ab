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
# description: bounded-error test descriptors comparing a generated function
#              against a reference evaluation
###############################################################################

import numpy as np

from .lm_formats import NT_F64_HEX
from .lm_operations import Constant, LM_Operation
from .mp_numbers import to_fraction, pow2, floor_log2, get_value_from_integer_coding

from ..opt.p_use_number_type import use_number_type
from ..utility.log_report import Log, LOG_ORACLE_INFO


class ErrorMode(object):
    """ unit in which the error of a test is measured """
    tag = None

    @staticmethod
    def get_ulp_scale(reference, precision):
        raise NotImplementedError


class AbsoluteError(ErrorMode):
    """ error measured in ulps of 1 (2^-field_size) """
    tag = "absolute"

    @staticmethod
    def get_ulp_scale(reference, precision):
        return pow2(-precision.get_field_size())


class RelativeError(ErrorMode):
    """ error measured in ulps at the magnitude of the reference,
        the scale saturates at the smallest normal number """
    tag = "relative"

    @staticmethod
    def get_ulp_scale(reference, precision):
        magnitude = max(abs(to_fraction(reference)), pow2(precision.get_emin_normal()))
        return pow2(floor_log2(magnitude) - precision.get_field_size())


ErrorMode.ABSOLUTE = AbsoluteError
ErrorMode.RELATIVE = RelativeError

## number of evenly spaced samples tested by default
DEFAULT_NUM_SAMPLES = 1000


def get_bound_value(bound):
    """ exact value of a quantized domain bound """
    return get_value_from_integer_coding(bound.get_input(0).get_value(), bound.get_precision())


class TestCase(object):
    """ bounded error test: for every sample x of [lo, hi] (rounded to the
        target format), |candidate(x) - reference(x)| must not exceed
        max_ulps ulps of the target format """
    # prevent test runners from collecting this class
    __test__ = False

    def __init__(self, name, reference, candidate, max_ulps, lo, hi,
                 number_type, error_mode=AbsoluteError,
                 num_samples=DEFAULT_NUM_SAMPLES, var_name="x"):
        self.name = name
        self.reference = reference
        self.candidate = candidate
        self.max_ulps = max_ulps
        self.lo = lo
        self.hi = hi
        self.number_type = number_type
        self.precision = number_type.get_scalar_format()
        self.error_mode = error_mode
        self.num_samples = num_samples
        self.var_name = var_name

    def get_name(self):
        return self.name

    def get_domain(self):
        return get_bound_value(self.lo), get_bound_value(self.hi)

    def get_samples(self):
        lo, hi = self.get_domain()
        return np.linspace(float(lo), float(hi), self.num_samples)

    def __str__(self):
        lo, hi = self.get_domain()
        return "TestCase({}, max_ulps={}, {}, [{}, {}])".format(
            self.name, self.max_ulps, self.error_mode.tag, float(lo), float(hi))


def gen_test(name, reference, candidate, max_ulps, lo, hi, number_type,
             error_mode=AbsoluteError, num_samples=DEFAULT_NUM_SAMPLES,
             var_name="x"):
    """ build a TestCase, the reference and the domain bounds are quantized
        as binary64, the candidate for @p number_type """
    if not max_ulps > 0:
        Log.report(Log.Error, "test {} requires a positive error bound, not {}", name, max_ulps,
                   error=ValueError(max_ulps))

    def bound(value):
        if not isinstance(value, LM_Operation):
            value = Constant(value)
        return use_number_type(value, NT_F64_HEX)

    lo_node, hi_node = bound(lo), bound(hi)
    if not get_bound_value(lo_node) < get_bound_value(hi_node):
        Log.report(Log.Error, "test {} has an empty domain", name, error=ValueError(name))
    Log.report(LOG_ORACLE_INFO, "test {} on [{}, {}] within {} ulp(s) ({})", name,
               float(get_bound_value(lo_node)), float(get_bound_value(hi_node)), max_ulps, error_mode.tag)
    return TestCase(
        name,
        use_number_type(reference, NT_F64_HEX),
        use_number_type(candidate, number_type),
        max_ulps, lo_node, hi_node, number_type,
        error_mode=error_mode, num_samples=num_samples, var_name=var_name)
