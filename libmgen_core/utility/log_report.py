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
# description: message reporting for the libmgen generator, every fatal
#              condition is raised through Log.report(Log.Error, ...) and
#              each generation stage (approximation, quantization, passes,
#              oracle, code generation, driver) traces under its own
#              Info sub-level
###############################################################################

import sys


## generation stages which can be traced individually
#  (--verbose Info:<stage>)
GENERATOR_STAGES = ("approx", "quantization", "passes", "oracle", "codegen", "driver")


class Log(object):
    """ log report class """
    log_stream = None
    dump_stdout = False
    ## exit the process instead of raising when an Error level message
    #  is reported
    exit_on_error = False

    @staticmethod
    def set_dump_stdout(new_dump_stdout):
        Log.dump_stdout = new_dump_stdout

    class LogLevel(object):
        """ log level builder """
        def __init__(self, level_name, sub_level=None):
            self.name = level_name
            self.sub_level = sub_level

        def __str__(self):
            if self.sub_level is None:
                return self.name
            return "%s[%s]" % (self.name, self.sub_level)

    class LogLevelFilter(LogLevel):
        """ filtering log message """
        def match(self, tested_level):
            if tested_level.name != self.name:
                return False
            elif self.sub_level is None or self.sub_level == tested_level.sub_level:
                return True
            else:
                return False

    # log levels definition
    Warning = LogLevelFilter("Warning")
    Info = LogLevelFilter("Info")
    Error = LogLevelFilter("Error")
    Debug = LogLevelFilter("Debug")
    Verbose = LogLevelFilter("Verbose")

    # list of enabled log levels
    enabled_levels = [
        Error,
    ]

    @staticmethod
    def filter_log_level(filter_list, log_level):
        """ Test if log_level matches one of the filters listed in
            filter_list """
        for log_filter in filter_list:
            if log_filter.match(log_level):
                return True
        return False

    @staticmethod
    def is_level_enabled(level):
        return Log.filter_log_level(Log.enabled_levels, level)

    @staticmethod
    def report(level, msg, *args, **kw):
        """ report log message, an Error level message is always raised
            (as @p error when given, as a generic Exception otherwise) """
        error = kw.pop("error", None)
        formatted_msg = msg.format(*args, **kw)
        if Log.is_level_enabled(level):
            if Log.log_stream:
                Log.log_stream.write("%s: %s\n" % (level, formatted_msg))
            if Log.dump_stdout:
                print("%s: %s" % (level, formatted_msg))
        if level is Log.Error:
            if Log.exit_on_error:
                sys.exit(1)
            raise error or Exception(formatted_msg)

    ## enable display of the specific log level
    #  @param level log-level to be enabled
    #  @param sub_level for the Info level, one of GENERATOR_STAGES
    @staticmethod
    def enable_level(level, sub_level=None):
        if level == "Info" and sub_level is not None and sub_level not in GENERATOR_STAGES:
            Log.report(Log.Warning, "unknown generation stage {} (known stages are: {})",
                       sub_level, ", ".join(GENERATOR_STAGES))
        Log.enabled_levels.append(Log.LogLevelFilter(level, sub_level))

    @staticmethod
    def set_log_stream(log_stream):
        Log.log_stream = log_stream


## Info sub-level of each generation stage
LOG_APPROX_INFO = Log.LogLevel("Info", "approx")
LOG_QUANTIZATION_INFO = Log.LogLevel("Info", "quantization")
LOG_PASS_INFO = Log.LogLevel("Info", "passes")
LOG_ORACLE_INFO = Log.LogLevel("Info", "oracle")
LOG_CODEGEN_INFO = Log.LogLevel("Info", "codegen")
LOG_DRIVER_INFO = Log.LogLevel("Info", "driver")
