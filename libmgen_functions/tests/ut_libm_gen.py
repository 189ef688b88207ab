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
# description: unit-tests for the libm generation driver
###############################################################################
import ast
import math
import os
import tempfile
import unittest

import numpy as np

from libmgen_core.core.lm_formats import NT_F32_HEX, NT_F64_HEX, NT_F32_SIMD, NT_F64_SIMD
from libmgen_core.code_generation.code_constant import C_Code, Native_Code
from libmgen_core.code_generation.code_generator import UnsupportedLanguageError
from libmgen_core.code_generation.c_code_generator import C_PREAMBLE_BINARY32
from libmgen_core.code_generation.native_code_generator import NativeCodeGenerator
from libmgen_core.utility.axf_utils import AXF_JSON_Importer, SimplePolyApprox, TestCaseDescriptor
from libmgen_core.utility.lm_template import ConfigurationError

from libmgen_functions.libm_gen import generate_libm, main


FUNCTION_ORDER = [
    "sin", "cos", "tan", "sin_cos",
    "atan", "asin", "acos",
    "exp", "exp2", "ln", "log2", "log10",
    "sinh", "cosh", "tanh",
    "recip", "recip_sqrt", "sqrt",
    "negate_on_odd", "hypot",
]


class UT_LibmGenErrors(unittest.TestCase):
    def test_unsupported_language(self):
        with self.assertRaises(UnsupportedLanguageError):
            generate_libm(32, NT_F32_HEX, "fortran")

    def test_configuration_mismatch(self):
        with self.assertRaises(ConfigurationError):
            generate_libm(32, NT_F64_HEX, C_Code)
        with self.assertRaises(ConfigurationError):
            generate_libm(32, NT_F32_HEX, C_Code, strategy="table")

    def test_main_unsupported_language(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            output_file = os.path.join(tmp_dir, "libm.f90")
            with self.assertRaises(SystemExit) as context:
                main(["--language", "fortran", "--output", output_file])
            self.assertEqual(context.exception.code, 1)
            self.assertFalse(os.path.exists(output_file))


class UT_LibmGen(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.descriptors = []
        cls.source = generate_libm(32, NT_F32_HEX, C_Code, descriptors=cls.descriptors)

    def test_c_preamble(self):
        self.assertTrue(self.source.startswith(C_PREAMBLE_BINARY32))

    def test_function_order(self):
        functions, tests = self.descriptors[0]
        self.assertEqual([fct.get_name() for fct in functions], FUNCTION_ORDER)
        self.assertEqual([test.get_name() for test in tests][:5],
                         ["sin", "cos", "tan", "sin_cos_1", "sin_cos_2"])
        self.assertEqual(tests[-1].get_name(), "hypot")
        positions = [self.source.index("\n%s(" % self.get_definition_prefix(name)) for name in FUNCTION_ORDER]
        self.assertEqual(positions, sorted(positions))
        # every function is defined before the first test
        self.assertTrue(positions[-1] < self.source.index("int test_sin(void)"))

    def get_definition_prefix(self, name):
        if name == "sin_cos":
            return "sin_cos_result sin_cos"
        return "f32 %s" % name

    def test_c_tests(self):
        _, tests = self.descriptors[0]
        for test_case in tests:
            self.assertIn("int test_%s(void)" % test_case.get_name(), self.source)
        self.assertIn("typedef struct { f32 v0; f32 v1; } sin_cos_result;", self.source)
        self.assertIn("f32 hypot(f32 x, f32 y);", self.source)

    def test_native_rendering(self):
        functions, tests = self.descriptors[0]
        source = NativeCodeGenerator(NT_F32_HEX).render(functions, tests)
        ast.parse(source)
        namespace = {}
        exec(compile(source, "<libm>", "exec"), namespace)
        self.assertEqual(namespace["sin"](np.float32(0.0)), 0)
        self.assertEqual(namespace["log2"](np.float32(0.5)), -1)
        self.assertTrue(abs(float(namespace["sqrt"](np.float32(2.0))) - 2**0.5) < 1e-6)
        sin_value, cos_value = namespace["sin_cos"](np.float32(0.5))
        self.assertEqual(sin_value, namespace["sin"](np.float32(0.5)))
        self.assertEqual(cos_value, namespace["cos"](np.float32(0.5)))
        namespace["test_negate_on_odd"]()

    def test_main(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            output_file = os.path.join(tmp_dir, "libm.py")
            axf_file = os.path.join(tmp_dir, "libm.json")
            main(["--language", "native", "--output", output_file, "--dump-axf", axf_file])
            with open(output_file) as stream:
                ast.parse(stream.read())
            objects = AXF_JSON_Importer.from_file(axf_file)
        functions, tests = self.descriptors[0]
        num_approximations = sum(len(fct.get_approximations()) for fct in functions)
        self.assertEqual(len([obj for obj in objects if isinstance(obj, SimplePolyApprox)]), num_approximations)
        self.assertEqual(len([obj for obj in objects if isinstance(obj, TestCaseDescriptor)]), len(tests))


class UT_NativeLibm(unittest.TestCase):
    def check_native_module(self, num_bits, number_type, strategy="single_pass"):
        descriptors = []
        source = generate_libm(num_bits, number_type, Native_Code, strategy=strategy, descriptors=descriptors)
        namespace = {}
        exec(compile(source, "<libm_%s>" % number_type, "exec"), namespace)
        _, tests = descriptors[0]
        for test_case in tests:
            with self.subTest(number_type=str(number_type), test=test_case.get_name()):
                namespace["test_%s" % test_case.get_name()]()
        return namespace

    def test_f32_simd(self):
        namespace = self.check_native_module(32, NT_F32_SIMD)
        value = namespace["exp"](np.float32(1.0))
        self.assertTrue(abs(float(value) - math.e) < 1e-6)

    def test_f64_simd(self):
        self.check_native_module(64, NT_F64_SIMD)

    def test_f64_quadrant(self):
        self.check_native_module(64, NT_F64_HEX, strategy="quadrant")


if __name__ == '__main__':
    unittest.main()
