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
# description: unit-tests for generation settings and command-line parsing
###############################################################################
import unittest

from libmgen_core.core.lm_formats import NT_F32_HEX, NT_F64_HEX, NT_F64_SIMD
from libmgen_core.code_generation.code_constant import C_Code, Native_Code
from libmgen_core.code_generation.code_generator import UnsupportedLanguageError
from libmgen_core.utility.lm_template import (
    ConfigurationError, LM_ArgTemplate, check_configuration, get_default_args,
    language_parser, number_type_parser,
)


class UT_LMTemplate(unittest.TestCase):
    def test_parsers(self):
        self.assertIs(language_parser("c"), C_Code)
        self.assertIs(language_parser("python"), Native_Code)
        self.assertIs(number_type_parser("f64_simd"), NT_F64_SIMD)
        with self.assertRaises(UnsupportedLanguageError):
            language_parser("fortran")
        with self.assertRaises(ConfigurationError):
            number_type_parser("f16_hex")

    def test_check_configuration(self):
        check_configuration(32, NT_F32_HEX)
        check_configuration(64, NT_F64_HEX, "quadrant")
        with self.assertRaises(ConfigurationError):
            check_configuration(32, NT_F64_HEX)
        with self.assertRaises(ConfigurationError):
            check_configuration(16, NT_F32_HEX)
        with self.assertRaises(ConfigurationError):
            check_configuration(32, NT_F32_HEX, "table")

    def test_default_args(self):
        args = get_default_args(num_bits=64, number_type=NT_F64_HEX)
        self.assertEqual(args.num_bits, 64)
        self.assertIs(args.number_type, NT_F64_HEX)
        self.assertIs(args.language, C_Code)
        self.assertEqual(args.strategy, "single_pass")

    def test_arg_extraction(self):
        args = LM_ArgTemplate().arg_extraction([
            "--num-bits", "64", "--number-type", "f64_hex", "--language", "native",
            "--strategy", "quadrant", "--output", "libm.py",
        ])
        self.assertEqual(args.num_bits, 64)
        self.assertIs(args.number_type, NT_F64_HEX)
        self.assertIs(args.language, Native_Code)
        self.assertEqual(args.strategy, "quadrant")
        self.assertEqual(args.output_file, "libm.py")
        self.assertIsNone(args.dump_axf)


if __name__ == '__main__':
    unittest.main()
