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
# description: code generator interface and language registry
###############################################################################

from libmgen_core.utility.log_report import Log, LOG_CODEGEN_INFO


class UnsupportedNodeError(Exception):
    """ an operation can not be rendered by a code generator """
    pass


class UnsupportedLanguageError(Exception):
    """ no code generator is registered for a language """
    pass


class CodeGenerator:
    """ render generated functions and their tests into source text """
    # dict (language -> CodeGenerator class)
    code_gen_classes = {}
    language = None

    def __init__(self, number_type):
        self.number_type = number_type
        self.precision = number_type.get_scalar_format()

    def render(self, functions, tests):
        """ return the source text defining every function of @p functions
            followed by every test of @p tests """
        raise NotImplementedError

    def unsupported(self, node, reason=""):
        Log.report(Log.Error, "{} can not generate {}{}", self.__class__.__name__, node.get_name(), reason,
                   error=UnsupportedNodeError(node.get_name()))


def RegisterCodeGenerator(language_list):
    """ associate a specific code generator class to a language """
    def __register(CodeGenClass):
        for language in language_list:
            if language in CodeGenerator.code_gen_classes:
                if CodeGenerator.code_gen_classes[language] == CodeGenClass:
                    Log.report(Log.Warning, "multiple registration of codegenerator {} for {}",
                               CodeGenClass, language)
                else:
                    Log.report(Log.Warning, "language {} has an already registered code generator class {} (when trying to register {})",
                               language, CodeGenerator.code_gen_classes[language], CodeGenClass)
            Log.report(LOG_CODEGEN_INFO, "associating generator {} with language {}", CodeGenClass, language)
            CodeGenerator.code_gen_classes[language] = CodeGenClass
        return CodeGenClass
    return __register


def get_code_generator(language):
    """ return the CodeGenerator class registered for @p language """
    if language not in CodeGenerator.code_gen_classes:
        Log.report(Log.Error, "no code generator registered for language {}", language,
                   error=UnsupportedLanguageError(str(language)))
    return CodeGenerator.code_gen_classes[language]
