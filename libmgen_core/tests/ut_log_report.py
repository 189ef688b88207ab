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
# description: unit-tests for message reporting
###############################################################################
import io
import unittest

from libmgen_core.utility.log_report import (
    Log, GENERATOR_STAGES, LOG_APPROX_INFO, LOG_ORACLE_INFO,
)


class UT_LogReport(unittest.TestCase):
    def setUp(self):
        self.stream = io.StringIO()
        Log.set_log_stream(self.stream)

    def tearDown(self):
        Log.set_log_stream(None)

    def test_error_raises(self):
        with self.assertRaises(KeyError):
            Log.report(Log.Error, "missing key {}", "k", error=KeyError("k"))
        self.assertIn("Error: missing key k", self.stream.getvalue())
        with self.assertRaises(Exception):
            Log.report(Log.Error, "generic failure")

    def test_level_filtering(self):
        Log.report(LOG_ORACLE_INFO, "hidden message")
        self.assertEqual(self.stream.getvalue(), "")
        Log.enable_level("Info", sub_level="oracle")
        try:
            Log.report(LOG_APPROX_INFO, "hidden approximation message")
            Log.report(LOG_ORACLE_INFO, "visible message {}", 1)
        finally:
            Log.enabled_levels.pop()
        self.assertEqual(self.stream.getvalue(), "Info[oracle]: visible message 1\n")

    def test_unknown_stage(self):
        Log.enable_level("Warning")
        try:
            Log.enable_level("Info", sub_level="remez")
            Log.enabled_levels.pop()
        finally:
            Log.enabled_levels.pop()
        self.assertIn("Warning: unknown generation stage remez", self.stream.getvalue())
        for stage in GENERATOR_STAGES:
            self.assertEqual(str(Log.LogLevel("Info", stage)), "Info[%s]" % stage)


if __name__ == '__main__':
    unittest.main()
