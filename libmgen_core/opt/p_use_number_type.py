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
# description: quantization pass, every numerical constant is rounded to the
#              target format and replaced by its exact bit-pattern
###############################################################################

from libmgen_core.core.passes import Pass
from libmgen_core.core.lm_operations import (
    Constant, MathConstant, BitPattern, FromBits, Splat,
)
from libmgen_core.core.mp_numbers import (
    evaluate_constant, get_integer_coding, is_finite, to_fraction,
)
from libmgen_core.opt.node_transformation import (
    Pass_NodeTransformation, TransformationError,
)
from libmgen_core.utility.log_report import Log, LOG_QUANTIZATION_INFO


class QuantizationError(TransformationError):
    """ a constant can not be represented in the target format """
    pass


def quantize_constant(value, number_type):
    """ return the FromBits (wrapped in Splat for vector number types)
        node encoding the value nearest to @p value """
    scalar_format = number_type.get_scalar_format()
    if not is_finite(value):
        Log.report(Log.Error, "constant {} is not finite and can not be encoded as {}",
                   value, number_type, error=QuantizationError(str(value)))
    try:
        coding = get_integer_coding(to_fraction(value), scalar_format)
    except OverflowError:
        Log.report(Log.Error, "constant {} overflows {}", value, number_type,
                   error=QuantizationError(str(value)))
    Log.report(LOG_QUANTIZATION_INFO, "quantizing {} to {:#x}", value, coding)
    result = FromBits(BitPattern(coding), precision=scalar_format)
    if number_type.is_vector():
        result = Splat(result, precision=scalar_format)
    return result


@Pass.register
class Pass_UseNumberType(Pass_NodeTransformation):
    """ replace each Constant and MathConstant by the exact bit-pattern of its
        nearest number in the scalar format of number_type """
    pass_tag = "use_number_type"

    def __init__(self, number_type):
        Pass_NodeTransformation.__init__(self)
        self.number_type = number_type

    def transform_node(self, node):
        if isinstance(node, Constant):
            return quantize_constant(node.get_value(), self.number_type)
        elif isinstance(node, MathConstant):
            return quantize_constant(evaluate_constant(node.constant_name), self.number_type)
        return node


def use_number_type(optree, number_type):
    """ quantize every constant of @p optree for @p number_type """
    return Pass_UseNumberType(number_type).transform(optree)
