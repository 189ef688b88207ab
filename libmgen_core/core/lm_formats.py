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
# description: floating-point formats and numeric representation tags
#              (NumberType) targeted by the generator
###############################################################################

import numpy as np


## Ancestor class for libmgen's format classes
class LM_Format(object):
    """ parent to every libmgen's format class """
    def __init__(self, name):
        self.name = name

    def get_name(self):
        return self.name

    def __str__(self):
        return self.name

    def __repr__(self):
        return self.name

    def get_bit_size(self):
        raise NotImplementedError


class LM_BoolFormat(LM_Format):
    """ result format of comparisons and parity tests """
    def get_bit_size(self):
        return 1


## Standard (as defined in IEEE-754) binary floating-point format
class LM_Std_FP_Format(LM_Format):
    """ standard floating-point format base class """
    def __init__(self, bit_size, exponent_size, field_size, c_name,
                 c_suffix, c_int_name, c_hex_suffix, np_dtype, np_int_dtype):
        LM_Format.__init__(self, "binary%d" % bit_size)
        self.bit_size = bit_size
        self.exponent_size = exponent_size
        self.field_size = field_size
        self.c_name = c_name
        ## suffix of C floating-point literals (e.g. "f" for float)
        self.c_suffix = c_suffix
        ## unsigned integer type of the same width, in C
        self.c_int_name = c_int_name
        ## suffix of C hexadecimal bit-pattern literals
        self.c_hex_suffix = c_hex_suffix
        self.np_dtype = np_dtype
        self.np_int_dtype = np_int_dtype

    def get_bit_size(self):
        """ return the format bit size """
        return self.bit_size

    def get_exponent_size(self):
        return self.exponent_size

    ## return the size of the mantissa bitfield (excluding implicit bit)
    def get_field_size(self):
        return self.field_size

    ## Return the complete mantissa size (including implicit bit)
    def get_mantissa_size(self):
        return self.field_size + 1

    def get_bias(self):
        return - 2**(self.get_exponent_size() - 1) + 1

    def get_emax(self):
        return 2**self.get_exponent_size() - 2 + self.get_bias()

    ## Return the minimal exponent for a normal number
    def get_emin_normal(self):
        return 1 + self.get_bias()

    ## Return the minimal exponent for a subnormal number
    def get_emin_subnormal(self):
        return 1 - self.get_field_size() + self.get_bias()

    ## return the exponent field corresponding to
    #  a special value (inf or NaN)
    def get_nanorinf_exp_field(self):
        return 2**self.get_exponent_size() - 1

    def get_c_name(self):
        return self.c_name

    def get_numpy_dtype(self):
        return self.np_dtype


LM_Bool = LM_BoolFormat("bool")

LM_Binary32 = LM_Std_FP_Format(
    32, 8, 23, "f32", "f", "unsigned", "u", np.float32, np.uint32)
LM_Binary64 = LM_Std_FP_Format(
    64, 11, 52, "f64", "", "unsigned long long", "ull", np.float64, np.uint64)


class NumberType(object):
    """ numeric representation targeted by a generated function:
        a scalar format, either used as such or replicated
        across the lanes of a vector """
    def __init__(self, tag, scalar_format, vector=False):
        self.tag = tag
        self.scalar_format = scalar_format
        self.vector = vector

    def get_scalar_format(self):
        return self.scalar_format

    def is_vector(self):
        return self.vector

    def get_bit_size(self):
        return self.scalar_format.get_bit_size()

    def __str__(self):
        return self.tag

    def __repr__(self):
        return "NumberType(%s)" % self.tag


NT_F32_HEX = NumberType("f32_hex", LM_Binary32)
NT_F32_SIMD = NumberType("f32_simd", LM_Binary32, vector=True)
NT_F64_HEX = NumberType("f64_hex", LM_Binary64)
NT_F64_SIMD = NumberType("f64_simd", LM_Binary64, vector=True)

number_type_map = {
    nt.tag: nt for nt in [NT_F32_HEX, NT_F32_SIMD, NT_F64_HEX, NT_F64_SIMD]
}

## binary scalar format associated with each supported width
format_from_bit_size = {
    32: LM_Binary32,
    64: LM_Binary64,
}
