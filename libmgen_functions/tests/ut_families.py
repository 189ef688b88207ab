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
# description: unit-tests for the inverse trigonometric, logarithmic,
#              exponential, hyperbolic, reciprocal and auxiliary generators
###############################################################################
import unittest

import numpy as np

from libmgen_core.core.lm_formats import LM_Binary32, LM_Binary64, NT_F32_HEX, NT_F64_HEX
from libmgen_core.core.lm_operations import FunctionCall
from libmgen_core.core.evaluation import FormatEvaluator, evaluate_test_case
from libmgen_core.core.test_oracle import AbsoluteError, RelativeError

from libmgen_functions.inv_trig import gen_inv_trig
from libmgen_functions.log_exp import gen_log_exp
from libmgen_functions.hyperbolic import gen_hyperbolic
from libmgen_functions.recip_sqrt import gen_recip_sqrt_family
from libmgen_functions.aux_funcs import gen_aux


FAMILIES = [
    ("inv_trig", gen_inv_trig, ["atan", "asin", "acos"]),
    ("log_exp", gen_log_exp, ["exp", "exp2", "ln", "log2", "log10"]),
    ("hyperbolic", gen_hyperbolic, ["sinh", "cosh", "tanh"]),
    ("recip_sqrt", gen_recip_sqrt_family, ["recip", "recip_sqrt", "sqrt"]),
    ("aux", gen_aux, ["negate_on_odd", "hypot"]),
]


def contains_call(node, name):
    if isinstance(node, FunctionCall) and node.get_function_name() == name:
        return True
    return any(contains_call(op, name) for op in node.get_inputs())


class UT_Families(unittest.TestCase):
    num_bits = 32
    number_type = NT_F32_HEX
    precision = LM_Binary32

    @classmethod
    def setUpClass(cls):
        cls.family_map = {}
        cls.functions = []
        cls.tests = []
        for family_name, family, _ in FAMILIES:
            functions, tests = family(cls.num_bits, cls.number_type)
            cls.family_map[family_name] = (functions, tests)
            cls.functions += functions
            cls.tests += tests
        cls.function_map = {fct.get_name(): fct for fct in cls.functions}
        cls.test_map = {test.get_name(): test for test in cls.tests}

    def check_samples(self, name, samples):
        test_case = self.test_map[name]
        error = evaluate_test_case(test_case, self.functions, samples=samples)
        self.assertTrue(error <= test_case.max_ulps, "{}: {} ulp(s)".format(name, float(error)))

    def evaluate(self, name, *args):
        evaluator = FormatEvaluator(self.precision, self.function_map)
        dtype = self.precision.get_numpy_dtype()
        return evaluator.evaluate_function(self.function_map[name], [dtype(arg) for arg in args])

    def test_names(self):
        for family_name, _, names in FAMILIES:
            functions, tests = self.family_map[family_name]
            self.assertEqual([fct.get_name() for fct in functions], names)
            self.assertEqual([test.get_name() for test in tests], names)

    def test_error_modes(self):
        for name in ["atan", "asin", "acos", "negate_on_odd"]:
            self.assertIs(self.test_map[name].error_mode, AbsoluteError)
        for name in ["exp", "ln", "log10", "sinh", "tanh", "recip", "sqrt", "hypot"]:
            self.assertIs(self.test_map[name].error_mode, RelativeError)

    def test_cross_family_calls(self):
        self.assertTrue(contains_call(self.function_map["asin"].get_body(), "sqrt"))
        self.assertTrue(contains_call(self.function_map["acos"].get_body(), "sqrt"))
        self.assertTrue(contains_call(self.function_map["sinh"].get_body(), "exp"))
        self.assertTrue(contains_call(self.function_map["hypot"].get_body(), "sqrt"))

    def test_inv_trig(self):
        self.check_samples("atan", [-3.0, -0.5, 0.25, 2.0])
        self.check_samples("asin", [-0.9, -0.3, 0.1, 0.7])
        self.check_samples("acos", [-0.9, -0.3, 0.1, 0.7])

    def test_log_exp(self):
        self.check_samples("exp", [-5.0, -0.3, 0.7, 8.0])
        self.check_samples("exp2", [-5.5, 0.3, 7.25])
        for name in ["ln", "log2", "log10"]:
            self.check_samples(name, [0.01, 0.5, 1.7, 300.0])

    def test_exact_values(self):
        self.assertEqual(self.evaluate("log2", 0.5), -1)
        self.assertEqual(self.evaluate("exp2", 3.0), 8)
        self.assertEqual(self.evaluate("recip", 4.0), 0.25)

    def test_hyperbolic(self):
        for name in ["sinh", "cosh", "tanh"]:
            self.check_samples(name, [-4.0, -0.5, 0.3, 2.5])

    def test_recip_sqrt(self):
        for name in ["recip", "recip_sqrt", "sqrt"]:
            self.check_samples(name, [0.003, 0.7, 2.0, 900.0])
        self.assertEqual(self.evaluate("recip", -2.0), -self.evaluate("recip", 2.0))

    def test_aux(self):
        self.check_samples("negate_on_odd", [-3.2, 0.4, 5.0])
        self.check_samples("hypot", [0.01, 3.0, 500.0])
        self.assertEqual(self.evaluate("negate_on_odd", 3.0, 1.5), -1.5)
        self.assertEqual(self.evaluate("negate_on_odd", -2.0, 1.5), 1.5)

    def test_declared_domains(self):
        for test_case in self.tests:
            error = evaluate_test_case(test_case, self.functions)
            self.assertTrue(error <= test_case.max_ulps, "{}: {} ulp(s)".format(test_case.get_name(), float(error)))


class UT_Families64(UT_Families):
    num_bits = 64
    number_type = NT_F64_HEX
    precision = LM_Binary64

    def test_declared_domains(self):
        for test_case in self.tests:
            lo, hi = test_case.get_domain()
            self.check_samples(test_case.get_name(), np.linspace(float(lo), float(hi), 33))


if __name__ == '__main__':
    unittest.main()
