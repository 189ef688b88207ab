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
# description: C transliteration of generated functions and tests
###############################################################################

from ..core.lm_operations import (
    Constant, MathConstant, FromBits, Splat, Conversion, Variable,
    Negation, Abs, NearestInteger, Floor, IsOdd,
    ExponentInsertion, ExponentExtraction, MantissaExtraction,
    Addition, Subtraction, Multiplication, Division, FusedMultiplyAdd,
    Comparison, Select, MathFunction, FunctionCall, Tuple, TupleSelection,
    Assignment, Return, Statement,
)
from ..core.lm_formats import LM_Binary32
from ..core.mp_numbers import get_value_from_integer_coding
from ..core.test_oracle import RelativeError

from .code_constant import C_Code
from .code_generator import CodeGenerator, RegisterCodeGenerator
from .code_object import CodeObject


C_PREAMBLE_BINARY32 = """\
#include<math.h>

inline float mul_add(float a, float b, float c) {
    return a * b + c;
}

inline float from_bits(unsigned x) {
    union {
        float f;
        unsigned x;
    } u;
    u.x = x;
    return u.f;
}

typedef float f32;

"""

C_PREAMBLE_BINARY64 = """\
#include<math.h>

inline double mul_add(double a, double b, double c) {
    return a * b + c;
}

inline double from_bits(unsigned long long x) {
    union {
        double f;
        unsigned long long x;
    } u;
    u.x = x;
    return u.f;
}

typedef double f64;

"""

## name of the C math library function evaluating each MathFunction
#  (the long double variant is obtained by appending "l")
C_MATH_FUNCTION_MAP = {
    "sin": "sin", "cos": "cos", "tan": "tan",
    "asin": "asin", "acos": "acos", "atan": "atan",
    "exp": "exp", "exp2": "exp2", "ln": "log", "log2": "log2", "log10": "log10",
    "sinh": "sinh", "cosh": "cosh", "tanh": "tanh", "atanh": "atanh",
    "sqrt": "sqrt", "hypot": "hypot",
}

## C standard type of each binary format, by bit size
C_SCALAR_TYPE_MAP = {32: "float", 64: "double"}

## suffix of the long double variant of C math functions
LONG_DOUBLE_SUFFIX = "l"


@RegisterCodeGenerator([C_Code])
class CCodeGenerator(CodeGenerator):
    """ C source generation, scalar number types only """
    language = C_Code

    def get_preamble(self):
        if self.precision is LM_Binary32:
            return C_PREAMBLE_BINARY32
        return C_PREAMBLE_BINARY64

    def get_type_name(self):
        return self.precision.get_c_name()

    def get_result_type_name(self, fct):
        if fct.get_output_arity() > 1:
            return "%s_result" % fct.get_name()
        return self.get_type_name()

    def get_function_declaration(self, fct):
        arg_list = ", ".join("%s %s" % (self.get_type_name(), arg.get_tag()) for arg in fct.get_arg_list())
        return "%s %s(%s)" % (self.get_result_type_name(fct), fct.get_name(), arg_list)

    def get_cst(self, node):
        """ C code for a quantized constant, a constant of another format
            than the generated functions is written as an exact
            hexadecimal literal """
        coding = node.get_input(0).get_value()
        fmt = node.get_precision()
        if fmt is self.precision:
            return "from_bits(%#x%s)" % (coding, fmt.c_hex_suffix)
        value = float(get_value_from_integer_coding(coding, fmt)).hex()
        return "(%s)" % value if value.startswith("-") else value

    def generate_expr(self, node, suffix=None):
        """ C expression of @p node, @p suffix selects the variant of the
            math library functions (float, double or long double) """
        suffix = self.precision.c_suffix if suffix is None else suffix

        def gen(op):
            return self.generate_expr(op, suffix)

        def binary(symbol):
            return "(%s %s %s)" % (gen(node.get_input(0)), symbol, gen(node.get_input(1)))

        if isinstance(node, FromBits):
            return self.get_cst(node)
        elif isinstance(node, Splat):
            self.unsupported(node, " (vector number types are not supported in C)")
        elif isinstance(node, (Constant, MathConstant)):
            self.unsupported(node, " (constants must be quantized before code generation)")
        elif isinstance(node, Conversion):
            return "((%s) %s)" % (C_SCALAR_TYPE_MAP[node.get_precision().get_bit_size()], gen(node.get_input(0)))
        elif isinstance(node, Variable):
            return node.get_tag()
        elif isinstance(node, Negation):
            return "(-%s)" % gen(node.get_input(0))
        elif isinstance(node, Abs):
            return "fabs%s(%s)" % (suffix, gen(node.get_input(0)))
        elif isinstance(node, NearestInteger):
            return "rint%s(%s)" % (suffix, gen(node.get_input(0)))
        elif isinstance(node, Floor):
            return "floor%s(%s)" % (suffix, gen(node.get_input(0)))
        elif isinstance(node, IsOdd):
            return "(((long long) %s) & 1)" % gen(node.get_input(0))
        elif isinstance(node, ExponentInsertion):
            return "ldexp%s(1.0%s, (int) %s)" % (suffix, suffix.upper() if suffix == "l" else suffix, gen(node.get_input(0)))
        elif isinstance(node, ExponentExtraction):
            return "logb%s(%s)" % (suffix, gen(node.get_input(0)))
        elif isinstance(node, MantissaExtraction):
            op = gen(node.get_input(0))
            return "scalbn%s(%s, -ilogb%s(%s))" % (suffix, op, suffix, op)
        elif isinstance(node, Addition):
            return binary("+")
        elif isinstance(node, Subtraction):
            return binary("-")
        elif isinstance(node, Multiplication):
            return binary("*")
        elif isinstance(node, Division):
            return binary("/")
        elif isinstance(node, Comparison):
            return binary(node.specifier.symbol)
        elif isinstance(node, FusedMultiplyAdd):
            return "mul_add(%s)" % ", ".join(gen(op) for op in node.get_inputs())
        elif isinstance(node, Select):
            return "(%s ? %s : %s)" % tuple(gen(op) for op in node.get_inputs())
        elif isinstance(node, MathFunction):
            name = node.get_function_name()
            if name not in C_MATH_FUNCTION_MAP:
                self.unsupported(node, " ({} has no C counterpart)".format(name))
            return "%s%s(%s)" % (C_MATH_FUNCTION_MAP[name], LONG_DOUBLE_SUFFIX, ", ".join(gen(op) for op in node.get_inputs()))
        elif isinstance(node, FunctionCall):
            return "%s(%s)" % (node.get_function_name(), ", ".join(gen(op) for op in node.get_inputs()))
        elif isinstance(node, TupleSelection):
            return "%s.v%d" % (gen(node.get_input(0)), node.index)
        self.unsupported(node)

    def generate_statement(self, code_object, node, fct):
        if isinstance(node, Statement):
            for statement in node.get_inputs():
                self.generate_statement(code_object, statement, fct)
        elif isinstance(node, Assignment):
            var_name = node.get_input(0).get_tag()
            value = node.get_input(1)
            value_code = self.generate_expr(value)
            if code_object.is_declared(var_name):
                code_object << "%s = %s;\n" % (var_name, value_code)
            else:
                var_type = "int" if isinstance(value, (Comparison, IsOdd)) else self.get_type_name()
                code_object.declare_var_name(var_name, node.get_input(0))
                code_object << "%s %s = %s;\n" % (var_type, var_name, value_code)
        elif isinstance(node, Return):
            value = node.get_input(0)
            if isinstance(value, Tuple):
                code_object << "return (%s) {%s};\n" % (
                    self.get_result_type_name(fct), ", ".join(self.generate_expr(op) for op in value.get_inputs()))
            else:
                code_object << "return %s;\n" % self.generate_expr(value)
        else:
            self.unsupported(node, " (not a statement)")

    def add_function_definition(self, code_object, fct):
        code_object << self.get_function_declaration(fct) + " "
        code_object.open_level()
        for arg in fct.get_arg_list():
            code_object.declare_var_name(arg.get_tag(), arg)
        self.generate_statement(code_object, fct.get_body(), fct)
        code_object.close_level()

    def add_test_definition(self, code_object, test_case):
        """ int test_<name>(void) returns 1 when the maximal error over the
            test samples does not exceed the test bound """
        field_size = self.precision.get_field_size()
        var_name = test_case.var_name
        code_object << "int test_%s(void) " % test_case.name
        code_object.open_level()
        code_object << "double lo = %s;\n" % self.generate_expr(test_case.lo)
        code_object << "double hi = %s;\n" % self.generate_expr(test_case.hi)
        code_object << "long double max_error = 0.0L;\n"
        code_object << "for (int i = 0; i < %d; ++i) " % test_case.num_samples
        code_object.open_level()
        code_object << "%s %s = (%s) (lo + (hi - lo) * i / %d);\n" % (
            self.get_type_name(), var_name, self.get_type_name(), max(test_case.num_samples - 1, 1))
        code_object << "long double reference = %s;\n" % self.generate_expr(test_case.reference, suffix=LONG_DOUBLE_SUFFIX)
        code_object << "long double candidate = %s;\n" % self.generate_expr(test_case.candidate)
        if test_case.error_mode is RelativeError:
            code_object << "long double scale = ldexpl(1.0L, ilogbl(fmaxl(fabsl(reference), 0x1p%dL)) - %d);\n" % (
                self.precision.get_emin_normal(), field_size)
        else:
            code_object << "long double scale = 0x1p-%dL;\n" % field_size
        code_object << "long double error = fabsl(candidate - reference) / scale;\n"
        code_object << "if (isnan(error) || error > max_error) max_error = error;\n"
        code_object.close_level()
        code_object << "return max_error <= %s;\n" % repr(float(test_case.max_ulps))
        code_object.close_level()

    def render(self, functions, tests):
        code_object = CodeObject(self.language)
        code_object << self.get_preamble()
        for fct in functions:
            if fct.get_output_arity() > 1:
                fields = " ".join("%s v%d;" % (self.get_type_name(), index) for index in range(fct.get_output_arity()))
                code_object << "typedef struct { %s } %s;\n" % (fields, self.get_result_type_name(fct))
        for fct in functions:
            code_object << self.get_function_declaration(fct) + ";\n"
        for fct in functions:
            code_object << "\n"
            self.add_function_definition(code_object, fct)
        for test_case in tests:
            code_object << "\n"
            self.add_test_definition(code_object, test_case)
        return code_object.get()
