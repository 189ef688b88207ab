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
# description: polynomial objects and evaluation scheme generation
###############################################################################

from enum import Enum

from .lm_operations import Constant, Variable, Multiplication, FusedMultiplyAdd


class Parity(Enum):
    """ symmetry class of an approximated function """
    ODD = "odd"
    EVEN = "even"
    NONE = "none"

    def get_degree_list(self, num_terms):
        """ degrees of the monomials available to a @p num_terms approximation """
        if self is Parity.ODD:
            return [2 * i + 1 for i in range(num_terms)]
        elif self is Parity.EVEN:
            return [2 * i for i in range(num_terms)]
        return list(range(num_terms))


class Polynomial(object):
    """ Mathematical polynomial object class """
    def __init__(self, coeff_map=None):
        # map degree -> coefficient (mpmath number or exact value)
        self.coeff_map = {} if coeff_map is None else dict(coeff_map)

    def get_degree(self):
        return max(self.coeff_map.keys()) if self.coeff_map else 0

    def get_degree_list(self):
        return sorted(self.coeff_map.keys())

    def get_coeff(self, index):
        return self.coeff_map.get(index, 0)

    def get_ordered_coeff_list(self):
        """ list of (degree, coeff) by increasing degree """
        return [(index, self.coeff_map[index]) for index in self.get_degree_list()]

    def sub_poly_cond(self, monomial_cond=lambda i, c: True, offset=0):
        """ polynomial built from the monomials verifying @p monomial_cond,
            each degree is shifted by @p offset """
        return Polynomial({
            index + offset: coeff for index, coeff in self.coeff_map.items()
            if monomial_cond(index, coeff)
        })

    def evaluate(self, value):
        """ evaluate the polynomial on @p value (Horner scheme in the
            arithmetic of @p value) """
        result = 0
        for index in range(self.get_degree(), -1, -1):
            result = result * value + self.get_coeff(index)
        return result

    def __str__(self):
        return " + ".join("%s*x^%d" % (coeff, index) for index, coeff in self.get_ordered_coeff_list())


class PolynomialSchemeEvaluator(object):
    """ class for polynomial evaluation scheme generation """
    @staticmethod
    def generate_horner_scheme(polynomial_object, variable, parity=Parity.NONE):
        """ generate a Horner evaluation scheme (nested FusedMultiplyAdd)
            for <polynomial_object> on the variable named <variable>.

            An odd polynomial is evaluated as x * q(x * x), an even one as
            q(x * x). Each operand is a fresh node """
        def var():
            return Variable(variable)

        def square():
            return Multiplication(var(), var())

        if parity is Parity.ODD:
            assert all(index % 2 == 1 for index in polynomial_object.coeff_map)
            inner = polynomial_object.sub_poly_cond(offset=-1)
            inner = Polynomial({index // 2: coeff for index, coeff in inner.coeff_map.items()})
            return Multiplication(var(), PolynomialSchemeEvaluator.generate_dense_horner(inner, square))
        elif parity is Parity.EVEN:
            assert all(index % 2 == 0 for index in polynomial_object.coeff_map)
            inner = Polynomial({index // 2: coeff for index, coeff in polynomial_object.coeff_map.items()})
            return PolynomialSchemeEvaluator.generate_dense_horner(inner, square)
        return PolynomialSchemeEvaluator.generate_dense_horner(polynomial_object, var)

    @staticmethod
    def generate_dense_horner(polynomial_object, power_ctor):
        """ Horner scheme where each step multiplies by a new node built
            by @p power_ctor """
        degree = polynomial_object.get_degree()
        scheme = Constant(polynomial_object.get_coeff(degree))
        for index in range(degree - 1, -1, -1):
            scheme = FusedMultiplyAdd(scheme, power_ctor(), Constant(polynomial_object.get_coeff(index)))
        return scheme
