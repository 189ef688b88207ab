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
# description: generation settings and command-line argument templates
###############################################################################

""" command-line argument templates """

import sys
import argparse

from .log_report import Log

from ..core.lm_formats import number_type_map, format_from_bit_size, NT_F32_HEX
from ..code_generation.code_constant import C_Code, Native_Code
from ..code_generation.code_generator import UnsupportedLanguageError


class ConfigurationError(Exception):
    """ inconsistent generation settings """
    pass


language_map = {
    "c": C_Code,
    "native": Native_Code,
    # aliases
    "python": Native_Code,
}

## family generation strategies, the strategy only changes the
#  trigonometric family
strategy_list = ["single_pass", "quadrant"]


def language_parser(language_str):
    """ string -> Language object conversion """
    if language_str not in language_map:
        Log.report(Log.Error, "unknown language {} (supported languages are: {})",
                   language_str, ", ".join(language_map.keys()),
                   error=UnsupportedLanguageError(language_str))
    return language_map[language_str]


def number_type_parser(number_type_str):
    """ string -> NumberType conversion """
    if number_type_str not in number_type_map:
        Log.report(Log.Error, "unknown number type {} (supported number types are: {})",
                   number_type_str, ", ".join(number_type_map.keys()),
                   error=ConfigurationError(number_type_str))
    return number_type_map[number_type_str]


def check_configuration(num_bits, number_type, strategy="single_pass"):
    """ raise ConfigurationError if @p num_bits is not the width of
        @p number_type or if @p strategy is unknown """
    if num_bits not in format_from_bit_size:
        Log.report(Log.Error, "unsupported bit width {} (supported widths are: {})",
                   num_bits, ", ".join(str(w) for w in format_from_bit_size),
                   error=ConfigurationError(str(num_bits)))
    if number_type.get_bit_size() != num_bits:
        Log.report(Log.Error, "number type {} does not match bit width {}", number_type, num_bits,
                   error=ConfigurationError(str(number_type)))
    if strategy not in strategy_list:
        Log.report(Log.Error, "unknown strategy {} (supported strategies are: {})",
                   strategy, ", ".join(strategy_list), error=ConfigurationError(strategy))


class VerboseAction(argparse.Action):
    """ enable comma-separated list of level[:sub_level] log levels """
    def __init__(self, option_strings, dest, nargs=None, **kwargs):
        if nargs is not None:
            raise ValueError("nargs not allowed")
        super(VerboseAction, self).__init__(option_strings, dest, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        for level_str in values.split(","):
            if ":" in level_str:
                level, sub_level = level_str.split(":")
            else:
                level, sub_level = level_str, None
            Log.enable_level(level, sub_level=sub_level)


class ExitOnErrorAction(argparse.Action):
    """ Custom action for command-line command --exit-on-error """
    def __init__(self, option_strings, dest, nargs=None, **kwargs):
        super(ExitOnErrorAction, self).__init__(
            option_strings, dest, nargs=0, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        Log.exit_on_error = True


# default argument template to be used when no specific value
#  are given for a specific parameter
class DefaultArgTemplate:
    output_file = "libm.c"
    num_bits = 32
    number_type = NT_F32_HEX
    language = C_Code
    strategy = "single_pass"
    # descriptor export (yaml/json file name, None to disable)
    dump_axf = None

    def __init__(self, **kw):
        for key in kw:
            setattr(self, key, kw[key])


def get_default_args(**kw):
    """ Return a structure containing the generation arguments,
        builtin from a default argument mapping overloaded with @p kw """
    return DefaultArgTemplate(**kw)


# argument template based on argparse module
class LM_ArgTemplate(object):
    def __init__(self, default_arg=DefaultArgTemplate):
        self.parser = argparse.ArgumentParser(" libmgen libm generation script")
        self.parser.add_argument(
            "--output", action="store", dest="output_file",
            default=default_arg.output_file,
            help="set output file")
        self.parser.add_argument(
            "--num-bits", dest="num_bits", type=int,
            default=default_arg.num_bits,
            help="bit width of the generated functions (32 or 64)")
        self.parser.add_argument(
            "--number-type", dest="number_type", type=number_type_parser,
            default=default_arg.number_type,
            help="select numeric representation ({})".format(", ".join(number_type_map)))
        self.parser.add_argument(
            "--language", dest="language", type=language_parser,
            default=default_arg.language,
            help="select language for generated source code")
        self.parser.add_argument(
            "--strategy", dest="strategy", choices=strategy_list,
            default=default_arg.strategy,
            help="select trigonometric range reduction")
        self.parser.add_argument(
            "--dump-axf", dest="dump_axf", action="store",
            default=default_arg.dump_axf,
            help="export approximation and test descriptors (.yaml or .json)")
        self.parser.add_argument(
            "--verbose", dest="verbose_enable", action=VerboseAction,
            const=True, default=False,
            help="enable Verbose log level")
        self.parser.add_argument(
            "--exit-on-error", dest="exit_on_error",
            action=ExitOnErrorAction, const=True,
            default=False,
            help="convert Fatal error to sys exit rather than exception")

    # Extract argument from the command-line (sys.argv)
    def arg_extraction(self, arg_list=None):
        self.args = self.parser.parse_args(sys.argv[1:] if arg_list is None else arg_list)
        return self.args
