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
# description: unit-tests for the C and native code generators and the
#              test oracle
###############################################################################
import ast
import unittest
from fractions import Fraction

import numpy as np

from libmgen_core.core.lm_formats import (
    LM_Binary32, NT_F32_HEX, NT_F32_SIMD, NT_F64_HEX,
)
from libmgen_core.core.lm_operations import (
    Constant, Variable, Conversion, Select, Tuple, TupleSelection,
    FunctionCall, Statement, Assignment, Return,
)
from libmgen_core.core.evaluation import (
    FormatEvaluator, MPEvaluator, evaluate_test_case,
)
from libmgen_core.core.mp_numbers import new_context
from libmgen_core.core.test_oracle import gen_test, RelativeError
from libmgen_core.opt.p_use_number_type import use_number_type
from libmgen_core.code_generation.code_constant import C_Code, Native_Code
from libmgen_core.code_generation.code_function import GeneratedFunction
from libmgen_core.code_generation.code_generator import (
    get_code_generator, UnsupportedNodeError, UnsupportedLanguageError,
)
from libmgen_core.code_generation.c_code_generator import CCodeGenerator
from libmgen_core.code_generation.native_code_generator import NativeCodeGenerator


def build_function(name, number_type, statements, output_arity=1):
    precision = number_type.get_scalar_format()
    body = use_number_type(Statement(*statements), number_type)
    return GeneratedFunction(name, number_type, [Variable("x", precision=precision)], body,
                             output_arity=output_arity)


def build_twice(number_type):
    """ twice(x) = x * 2, rounded to the function format """
    precision = number_type.get_scalar_format()
    return build_function("twice", number_type, [
        Assignment(Variable("y"), Variable("x") * 2),
        Return(Conversion(Variable("y"), precision=precision)),
    ])


def build_abs(number_type):
    return build_function("select_abs", number_type, [
        Return(Select(Variable("x") > 0, Variable("x"), -Variable("x"))),
    ])


def build_pair(number_type):
    return build_function("pair", number_type, [
        Return(Tuple(FunctionCall("twice", Variable("x")), Variable("x"))),
    ], output_arity=2)


def build_twice_test(number_type):
    return gen_test("twice", 2 * Variable("x"), FunctionCall("twice", Variable("x")),
                    1, -1, 1, number_type)


class UT_CCodeGenerator(unittest.TestCase):
    def test_registry(self):
        self.assertIs(get_code_generator(C_Code), CCodeGenerator)
        self.assertIs(get_code_generator(Native_Code), NativeCodeGenerator)
        with self.assertRaises(UnsupportedLanguageError):
            get_code_generator("fortran")

    def test_binary32(self):
        source = CCodeGenerator(NT_F32_HEX).render([build_twice(NT_F32_HEX)], [build_twice_test(NT_F32_HEX)])
        self.assertTrue(source.startswith("#include<math.h>\n"))
        self.assertIn("inline float mul_add(float a, float b, float c)", source)
        self.assertIn("inline float from_bits(unsigned x)", source)
        self.assertIn("typedef float f32;", source)
        self.assertIn("f32 twice(f32 x);", source)
        self.assertIn("f32 y = (x * from_bits(0x40000000u));", source)
        self.assertIn("return ((float) y);", source)

    def test_binary64(self):
        source = CCodeGenerator(NT_F64_HEX).render([build_twice(NT_F64_HEX)], [])
        self.assertIn("inline double from_bits(unsigned long long x)", source)
        self.assertIn("typedef double f64;", source)
        self.assertIn("f64 y = (x * from_bits(0x4000000000000000ull));", source)
        self.assertIn("return ((double) y);", source)

    def test_test_definition(self):
        source = CCodeGenerator(NT_F32_HEX).render([build_twice(NT_F32_HEX)], [build_twice_test(NT_F32_HEX)])
        self.assertIn("int test_twice(void)", source)
        # binary64 test constants are exact hexadecimal literals
        self.assertIn("double lo = (-0x1.0000000000000p+0);", source)
        self.assertIn("double hi = 0x1.0000000000000p+0;", source)
        self.assertIn("long double reference = (0x1.0000000000000p+1 * x);", source)
        self.assertIn("long double candidate = twice(x);", source)
        self.assertIn("return max_error <= 1.0;", source)

    def test_relative_test(self):
        test_case = gen_test("twice", 2 * Variable("x"), FunctionCall("twice", Variable("x")),
                             2, "0.5", 4, NT_F32_HEX, error_mode=RelativeError)
        source = CCodeGenerator(NT_F32_HEX).render([build_twice(NT_F32_HEX)], [test_case])
        self.assertIn("ilogbl(fmaxl(fabsl(reference), 0x1p-126L)) - 23", source)

    def test_tuple(self):
        functions = [build_twice(NT_F32_HEX), build_pair(NT_F32_HEX)]
        test_case = gen_test("pair_1", Variable("x"), TupleSelection(FunctionCall("pair", Variable("x")), index=1),
                             1, -1, 1, NT_F32_HEX)
        source = CCodeGenerator(NT_F32_HEX).render(functions, [test_case])
        self.assertIn("typedef struct { f32 v0; f32 v1; } pair_result;", source)
        self.assertIn("pair_result pair(f32 x);", source)
        self.assertIn("return (pair_result) {twice(x), x};", source)
        self.assertIn("long double candidate = pair(x).v1;", source)

    def test_unsupported_nodes(self):
        with self.assertRaises(UnsupportedNodeError):
            CCodeGenerator(NT_F32_SIMD).render([build_twice(NT_F32_SIMD)], [])
        with self.assertRaises(UnsupportedNodeError):
            CCodeGenerator(NT_F32_HEX).generate_expr(Constant(1))


class UT_NativeCodeGenerator(unittest.TestCase):
    def execute(self, source):
        namespace = {}
        exec(compile(source, "<generated>", "exec"), namespace)
        return namespace

    def test_scalar(self):
        source = NativeCodeGenerator(NT_F32_HEX).render(
            [build_twice(NT_F32_HEX), build_abs(NT_F32_HEX)], [build_twice_test(NT_F32_HEX)])
        ast.parse(source)
        self.assertIn("def twice(x):", source)
        self.assertIn("def test_twice():", source)
        self.assertIn("from_bits32(1073741824)", source)
        self.assertNotIn("negate_if", source)
        namespace = self.execute(source)
        result = namespace["twice"](np.float32(1.5))
        self.assertEqual(result, np.float32(3.0))
        self.assertEqual(result.dtype, np.float32)
        self.assertEqual(namespace["select_abs"](np.float32(-2.5)), np.float32(2.5))
        # generated assert-based test
        namespace["test_twice"]()

    def test_vector(self):
        source = NativeCodeGenerator(NT_F32_SIMD).render([build_twice(NT_F32_SIMD), build_abs(NT_F32_SIMD)], [])
        self.assertIn("splat(", source)
        self.assertIn("np.where(", source)
        namespace = self.execute(source)
        values = np.array([-1.0, 0.5, 2.0], dtype=np.float32)
        np.testing.assert_array_equal(namespace["twice"](values), 2 * values)
        np.testing.assert_array_equal(namespace["select_abs"](values), np.abs(values))

    def test_tuple(self):
        source = NativeCodeGenerator(NT_F64_HEX).render([build_twice(NT_F64_HEX), build_pair(NT_F64_HEX)], [])
        namespace = self.execute(source)
        self.assertEqual(namespace["pair"](np.float64(0.25)), (0.5, 0.25))

    def test_unsupported_nodes(self):
        with self.assertRaises(UnsupportedNodeError):
            NativeCodeGenerator(NT_F32_HEX).generate_expr(Constant(1))


class UT_TestOracle(unittest.TestCase):
    def test_exact_candidate(self):
        functions = [build_twice(NT_F32_HEX)]
        self.assertEqual(evaluate_test_case(build_twice_test(NT_F32_HEX), functions), 0)

    def test_measured_error(self):
        functions = [build_twice(NT_F32_HEX)]
        test_case = gen_test("twice", 2 * Variable("x") + Fraction(1, 2**20), FunctionCall("twice", Variable("x")),
                             8, -1, 1, NT_F32_HEX, num_samples=11)
        # 2^-20 is 8 ulps of 1 in binary32
        self.assertEqual(evaluate_test_case(test_case, functions), 8)

    def test_invalid_tests(self):
        with self.assertRaises(ValueError):
            gen_test("twice", Variable("x"), Variable("x"), 0, -1, 1, NT_F32_HEX)
        with self.assertRaises(ValueError):
            gen_test("twice", Variable("x"), Variable("x"), 1, 1, -1, NT_F32_HEX)

    def test_conversion(self):
        node = Conversion(Variable("x"), precision=LM_Binary32)
        value = FormatEvaluator(NT_F64_HEX.get_scalar_format()).evaluate(node, {"x": np.float64(0.1)})
        self.assertEqual(value, np.float32(0.1))
        ctx = new_context(40)
        value = MPEvaluator(ctx).evaluate(node, {"x": ctx.mpf("0.1")})
        self.assertEqual(float(value), float(np.float32(0.1)))


if __name__ == '__main__':
    unittest.main()
