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
# description: narrow exact-numeric interface: decimal parsing, exact
#              conversion, round-to-nearest-even to binary formats and
#              bit-pattern coding/decoding
###############################################################################

from fractions import Fraction

import mpmath
import numpy as np


## precision (in bits) used to evaluate symbolic constants before
#  they are rounded to a binary format
CONSTANT_PRECISION = 256


def new_context(num_digits):
    """ build a private mpmath context working with @p num_digits
        decimal digits """
    ctx = mpmath.MPContext()
    ctx.dps = num_digits
    return ctx


def is_finite(value):
    """ test if a numeric value (int, Fraction, float, mpf) is finite """
    if isinstance(value, (int, Fraction, str)):
        return True
    elif isinstance(value, (float, np.floating)):
        return bool(np.isfinite(value))
    return bool(mpmath.isfinite(value))


def to_fraction(value):
    """ exact conversion of @p value to a Fraction

        @p value may be an int, a Fraction, a float, a decimal
        string (e.g. "-0.499999", "1e-3") or an mpmath mpf """
    if isinstance(value, Fraction):
        return value
    elif isinstance(value, (int, str)):
        return Fraction(value)
    elif isinstance(value, (float, np.floating)):
        if not np.isfinite(value):
            raise ValueError("non-finite value {} has no exact value".format(value))
        return Fraction(float(value))
    elif hasattr(value, "_mpf_"):
        if not mpmath.isfinite(value):
            raise ValueError("non-finite value {} has no exact value".format(value))
        sign, man, exp, _ = value._mpf_
        result = Fraction(man) * pow2(exp)
        return -result if sign else result
    raise TypeError("unsupported numeric value {} ({})".format(value, type(value)))


def to_mpf(ctx, value):
    """ convert @p value into an mpf of context @p ctx """
    if isinstance(value, Fraction):
        return ctx.mpf(value.numerator) / value.denominator
    elif isinstance(value, str):
        return to_mpf(ctx, Fraction(value))
    return ctx.mpf(value)


def pow2(exp):
    """ exact 2^exp as a Fraction """
    if exp >= 0:
        return Fraction(2**exp)
    return Fraction(1, 2**(-exp))


def floor_log2(value):
    """ floor(log2(value)) for a positive Fraction """
    exp = value.numerator.bit_length() - value.denominator.bit_length()
    if value < pow2(exp):
        exp -= 1
    return exp


def round_to_format(value, fmt):
    """ round @p value to the nearest @p fmt number (ties to even),
        subnormal numbers included, no overflow check """
    value = to_fraction(value)
    if value == 0:
        return Fraction(0)
    sign = -1 if value < 0 else 1
    abs_value = abs(value)
    exp = max(floor_log2(abs_value), fmt.get_emin_normal())
    quantum = pow2(exp - fmt.get_field_size())
    scaled = abs_value / quantum
    integral = scaled.numerator // scaled.denominator
    remainder = scaled - integral
    if remainder > Fraction(1, 2) or (remainder == Fraction(1, 2) and integral % 2 == 1):
        integral += 1
    return sign * integral * quantum


def get_max_value(fmt):
    """ largest finite number of format @p fmt """
    return pow2(fmt.get_emax()) * (2 - pow2(-fmt.get_field_size()))


def get_integer_coding(value, fmt):
    """ return the integer coding of the @p fmt number nearest to @p value

        raises OverflowError if the rounded value is not finite in @p fmt """
    rounded = round_to_format(value, fmt)
    if abs(rounded) > get_max_value(fmt):
        raise OverflowError("{} overflows {}".format(value, fmt))
    sign = 1 if rounded < 0 else 0
    abs_value = abs(rounded)
    if abs_value == 0:
        exp_biased = 0
        mant = 0
    else:
        exp = floor_log2(abs_value)
        if exp < fmt.get_emin_normal():
            exp_biased = 0
            mant = abs_value / pow2(fmt.get_emin_subnormal())
        else:
            exp_biased = exp - fmt.get_bias()
            mant = abs_value / pow2(exp - fmt.get_field_size()) - 2**fmt.get_field_size()
        assert mant.denominator == 1
        mant = mant.numerator
    return mant | (exp_biased << fmt.get_field_size()) | (sign << (fmt.get_field_size() + fmt.get_exponent_size()))


def get_value_from_integer_coding(coding, fmt):
    """ exact value (as a Fraction) of the finite @p fmt number encoded
        by the integer @p coding """
    field_size = fmt.get_field_size()
    exponent_field = (coding >> field_size) & (2**fmt.get_exponent_size() - 1)
    mantissa = coding & (2**field_size - 1)
    sign_bit = coding >> (field_size + fmt.get_exponent_size())
    if exponent_field == fmt.get_nanorinf_exp_field():
        raise ValueError("coding {:#x} is not a finite {} number".format(coding, fmt))
    if exponent_field == 0:
        value = mantissa * pow2(fmt.get_emin_subnormal())
    else:
        value = (2**field_size + mantissa) * pow2(exponent_field + fmt.get_bias() - field_size)
    return -value if sign_bit else value


def decode_bits(coding, fmt):
    """ reinterpret the integer @p coding as a @p fmt numpy scalar """
    return np.array(coding, dtype=fmt.np_int_dtype).view(fmt.np_dtype)[()]


def evaluate_constant(name_or_fct):
    """ evaluate a symbolic constant at CONSTANT_PRECISION bits,
        @p name_or_fct is either a MathConstant name or a function
        of an mpmath context """
    ctx = mpmath.MPContext()
    ctx.prec = CONSTANT_PRECISION
    if callable(name_or_fct):
        return name_or_fct(ctx)
    return math_constant_value(ctx, name_or_fct)


## symbolic constants known to the generator
MATH_CONSTANTS = {
    "pi": lambda ctx: ctx.pi,
    "e": lambda ctx: ctx.e,
    "ln2": lambda ctx: ctx.ln2,
    "ln10": lambda ctx: ctx.ln10,
    "log2e": lambda ctx: 1 / ctx.ln2,
    "sqrt2": lambda ctx: ctx.sqrt(2),
}


def math_constant_value(ctx, name):
    """ value of the symbolic constant @p name in context @p ctx """
    return MATH_CONSTANTS[name](ctx)
