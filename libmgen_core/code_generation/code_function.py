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
# description: generated function object (name, signature and body)
###############################################################################

from ..core.lm_operations import Statement


class GeneratedFunction(object):
    """ generated function: a body (Statement) over a list of arguments,
        every value is a number_type number """
    def __init__(self, name, number_type, arg_list, body, output_arity=1,
                 approximations=None):
        assert isinstance(body, Statement)
        self.name = name
        self.number_type = number_type
        self.arg_list = list(arg_list)
        self.body = body
        ## number of returned values (a Tuple is returned when > 1)
        self.output_arity = output_arity
        ## ApproximationResult objects the body was built from
        self.approximations = [] if approximations is None else list(approximations)

    def get_name(self):
        return self.name

    def get_number_type(self):
        return self.number_type

    def get_precision(self):
        return self.number_type.get_scalar_format()

    def get_arg_list(self):
        return self.arg_list

    def get_body(self):
        return self.body

    def get_output_arity(self):
        return self.output_arity

    def get_approximations(self):
        return self.approximations

    def copy_with_body(self, body):
        return GeneratedFunction(
            self.name, self.number_type, [arg.copy() for arg in self.arg_list], body,
            output_arity=self.output_arity, approximations=self.approximations)

    def __str__(self):
        return "{}({}) [{}]".format(
            self.name, ", ".join(arg.get_tag() for arg in self.arg_list), self.number_type)
