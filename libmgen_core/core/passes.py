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
# description: pass registry and function-level pass application
###############################################################################

from ..utility.log_report import Log, LOG_PASS_INFO


class Pass:
    """ Parent class for every transformation pass """
    pass_tag = None
    ## map pass_tag -> pass class
    pass_map = {}

    def __init__(self, tag=None):
        self.tag = tag or self.pass_tag

    def __str__(self):
        return self.tag

    @staticmethod
    def register(pass_class):
        """ class decorator: associate @p pass_class with its pass_tag """
        tag = pass_class.pass_tag
        if tag in Pass.pass_map and Pass.pass_map[tag] is not pass_class:
            Log.report(Log.Warning, "pass tag {} is already registered by {}", tag, Pass.pass_map[tag])
        Log.report(LOG_PASS_INFO, "registering pass {} associated to tag {}", pass_class, tag)
        Pass.pass_map[tag] = pass_class
        return pass_class

    @staticmethod
    def get_pass_by_tag(tag):
        if tag not in Pass.pass_map:
            Log.report(Log.Error, "unknown pass tag {} (registered passes are: {})",
                       tag, ", ".join(sorted(Pass.pass_map.keys())), error=KeyError(tag))
        return Pass.pass_map[tag]


class FunctionPass(Pass):
    """ pass applied on the body of a generated function """
    def execute_on_optree(self, optree):
        raise NotImplementedError

    def execute_on_function(self, fct):
        """ return a new function whose body has been processed by @p self """
        Log.report(LOG_PASS_INFO, "executing pass {} on function {}", self, fct.get_name())
        return fct.copy_with_body(self.execute_on_optree(fct.get_body()))
