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
# description: unit-tests for approximation and test descriptor export
###############################################################################
import os
import tempfile
import unittest
from fractions import Fraction

from libmgen_core.core.lm_formats import NT_F64_HEX
from libmgen_core.core.lm_operations import (
    Variable, MathFunction, FunctionCall, Statement, Return,
)
from libmgen_core.core.polynomials import Parity
from libmgen_core.core.approximation import ApproximationSpec, fit_approximation
from libmgen_core.core.test_oracle import gen_test
from libmgen_core.code_generation.code_function import GeneratedFunction
from libmgen_core.utility.axf_utils import (
    AXF_Exporter, AXF_Importer, AXF_JSON_Exporter, AXF_JSON_Importer,
    SimplePolyApprox, TestCaseDescriptor, get_axf_descriptors,
    export_descriptors,
)


class UT_AXF(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        spec = ApproximationSpec(MathFunction("exp", Variable("x")), "x", 3, 0, 1,
                                 parity=Parity.NONE, num_digits=20)
        cls.result = fit_approximation(spec)
        fct = GeneratedFunction("f", NT_F64_HEX, [Variable("x")], Statement(Return(Variable("x"))),
                                approximations=[cls.result])
        test_case = gen_test("f", Variable("x"), FunctionCall("f", Variable("x")),
                             2, "-0.5", "0.5", NT_F64_HEX)
        cls.functions = [fct]
        cls.tests = [test_case]

    def check_descriptors(self, objects):
        self.assertEqual(len(objects), 2)
        approx, test_desc = objects
        self.assertIsInstance(approx, SimplePolyApprox)
        self.assertEqual(approx.function, "f")
        self.assertEqual(approx.degree_list, [0, 1, 2])
        self.assertIs(approx.parity, Parity.NONE)
        self.assertEqual(approx.interval, (0, 1))
        self.assertAlmostEqual(float(approx.approx_error.value), float(self.result.approx_error), places=12)
        for degree in range(3):
            self.assertAlmostEqual(float(approx.poly.get_coeff(degree)),
                                   float(self.result.polynomial.get_coeff(degree)), places=12)
        self.assertIsInstance(test_desc, TestCaseDescriptor)
        self.assertEqual(test_desc.name, "f")
        self.assertEqual(test_desc.max_ulps, 2)
        self.assertEqual(test_desc.error_mode, "absolute")
        self.assertEqual(test_desc.interval, (Fraction(-1, 2), Fraction(1, 2)))
        self.assertEqual(test_desc.num_samples, 1000)
        self.assertEqual(test_desc.number_type, "f64_hex")

    def test_yaml(self):
        descriptors = get_axf_descriptors(self.functions, self.tests)
        axf_str = AXF_Exporter(descriptors).export()
        self.assertIn("!SimplePolyApprox", axf_str)
        self.assertIn("!TestCase", axf_str)
        self.check_descriptors(AXF_Importer.from_str(axf_str))

    def test_json(self):
        descriptors = get_axf_descriptors(self.functions, self.tests)
        json_str = AXF_JSON_Exporter.to_str([axf.serialize_to_dict() for axf in descriptors])
        self.check_descriptors(AXF_JSON_Importer.from_str(json_str))

    def test_unknown_class(self):
        with self.assertRaises(KeyError):
            AXF_JSON_Importer.from_str('{"class": "!Unknown"}')

    def test_export_files(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            yaml_file = os.path.join(tmp_dir, "descriptors.yaml")
            json_file = os.path.join(tmp_dir, "descriptors.json")
            export_descriptors(self.functions, self.tests, yaml_file)
            export_descriptors(self.functions, self.tests, json_file)
            self.check_descriptors(AXF_Importer.from_file(yaml_file))
            self.check_descriptors(AXF_JSON_Importer.from_file(json_file))


if __name__ == '__main__':
    unittest.main()
