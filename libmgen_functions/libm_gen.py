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
# description: libm generation driver: every function family is generated
#              for one configuration and rendered by the selected backend
###############################################################################

import sys

from libmgen_core.code_generation.code_generator import (
    get_code_generator, UnsupportedLanguageError,
)
# backend registration
import libmgen_core.code_generation.c_code_generator
import libmgen_core.code_generation.native_code_generator

from libmgen_core.utility.lm_template import (
    LM_ArgTemplate, DefaultArgTemplate, check_configuration,
)
from libmgen_core.utility.axf_utils import export_descriptors
from libmgen_core.utility.log_report import Log, LOG_DRIVER_INFO

from .trig import gen_single_pass_trig, gen_quadrant_trig
from .inv_trig import gen_inv_trig
from .log_exp import gen_log_exp
from .hyperbolic import gen_hyperbolic
from .recip_sqrt import gen_recip_sqrt_family
from .aux_funcs import gen_aux


## trigonometric family generator of each strategy
TRIG_STRATEGY_MAP = {
    "single_pass": gen_single_pass_trig,
    "quadrant": gen_quadrant_trig,
}


def get_family_list(strategy):
    """ family generators, in output order """
    return [
        TRIG_STRATEGY_MAP[strategy],
        gen_inv_trig,
        gen_log_exp,
        gen_hyperbolic,
        gen_recip_sqrt_family,
        gen_aux,
    ]


def generate_families(num_bits, number_type, strategy="single_pass"):
    """ return (functions, tests) of every family for a configuration """
    check_configuration(num_bits, number_type, strategy)
    functions = []
    tests = []
    for family in get_family_list(strategy):
        Log.report(LOG_DRIVER_INFO, "generating family {}", family.__name__)
        family_functions, family_tests = family(num_bits, number_type)
        functions += family_functions
        tests += family_tests
    return functions, tests


def generate_libm(num_bits, number_type, language, strategy="single_pass", descriptors=None):
    """ return the source text of the whole libm for a configuration

        The language is checked before any generation. When @p descriptors
        is a list, the generated functions and tests are appended to it """
    code_generator_class = get_code_generator(language)
    functions, tests = generate_families(num_bits, number_type, strategy)
    if descriptors is not None:
        descriptors.append((functions, tests))
    Log.report(LOG_DRIVER_INFO, "rendering {} function(s) and {} test(s) as {}",
               len(functions), len(tests), language)
    return code_generator_class(number_type).render(functions, tests)


def main(arg_list=None):
    Log.set_dump_stdout(True)
    if not Log.is_level_enabled(Log.Warning):
        Log.enable_level("Warning")
    arg_template = LM_ArgTemplate(default_arg=DefaultArgTemplate)
    descriptors = []
    try:
        args = arg_template.arg_extraction(arg_list)
        source = generate_libm(args.num_bits, args.number_type, args.language,
                               strategy=args.strategy, descriptors=descriptors)
    except UnsupportedLanguageError as e:
        Log.report(Log.Warning, "unsupported language {}, no output generated", e)
        sys.exit(1)
    with open(args.output_file, "w") as output_stream:
        output_stream.write(source)
    if args.dump_axf is not None:
        functions, tests = descriptors[0]
        export_descriptors(functions, tests, args.dump_axf)


if __name__ == "__main__":
    main()
