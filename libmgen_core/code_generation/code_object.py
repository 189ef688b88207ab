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
# description: source text accumulator with indentation and symbol tracking
###############################################################################

import re


class SymbolTable(object):
    """ names declared within a code block """
    def __init__(self, parent=None):
        self.table = {}
        self.parent = parent

    def is_declared(self, name):
        if name in self.table:
            return True
        return self.parent is not None and self.parent.is_declared(name)

    def declare_symbol(self, name, symbol_object):
        self.table[name] = symbol_object

    def get_free_name(self, prefix="tmp"):
        if not self.is_declared(prefix):
            return prefix
        index = 0
        while self.is_declared("%s%d" % (prefix, index)):
            index += 1
        return "%s%d" % (prefix, index)


class CodeObject(object):
    """ generated source text, indentation is managed through levels """
    tab = "    "
    level_header = "{\n"
    level_footer = "}"

    def __init__(self, language, parent_table=None):
        self.expanded_code = ""
        self.tablevel = 0
        self.language = language
        self.symbol_table = SymbolTable(parent_table)

    def reindent(self, line):
        """ re indent code line <line> with proper current indentation level """
        codeline = re.sub("\n", lambda _: ("\n" + self.tablevel * CodeObject.tab), line)
        # removing trailing whitespaces
        codeline = re.sub(" +\n", "\n", codeline)
        return codeline

    def append_code(self, code):
        self.expanded_code += code
        return self

    def __lshift__(self, added_code):
        """ implicit code insertion through << operator """
        return self.append_code(self.reindent(added_code))

    def inc_level(self):
        """ increase indentation level """
        self.tablevel += 1
        self.expanded_code += CodeObject.tab

    def dec_level(self):
        """ decrease indentation level """
        self.tablevel -= 1
        # deleting last inserted tab
        if self.expanded_code[-len(CodeObject.tab):] == CodeObject.tab:
            self.expanded_code = self.expanded_code[:-len(CodeObject.tab)]

    def open_level(self, header=None):
        """ open nested block """
        self << (self.level_header if header is None else header)
        self.inc_level()
        self.symbol_table = SymbolTable(self.symbol_table)

    def close_level(self, cr="\n", footer=None):
        """ close nested block """
        self.dec_level()
        self.symbol_table = self.symbol_table.parent
        self << "%s%s" % (self.level_footer if footer is None else footer, cr)

    def is_declared(self, name):
        return self.symbol_table.is_declared(name)

    def declare_var_name(self, var_name, var_object=None):
        self.symbol_table.declare_symbol(var_name, var_object)
        return var_name

    def get_free_var_name(self, prefix="tmp"):
        return self.declare_var_name(self.symbol_table.get_free_name(prefix))

    def add_comment(self, comment):
        """ add a full line comment """
        self << ("/* %s */\n" % comment)

    def get(self):
        return self.expanded_code
