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
# description: generic pass to perform node transformation and rebuild the
#              operation tree based on pre-defined rules
###############################################################################

from libmgen_core.core.passes import FunctionPass

from libmgen_core.utility.log_report import Log


class TransformationError(Exception):
    """ a node rewrite failed, the whole tree rewrite is aborted """
    pass


class Pass_NodeTransformation(FunctionPass):
    """ bottom-up tree rewrite: the inputs of a node are transformed
        first, then transform_node may replace the (rebuilt) node.

        This pass can not be used as-is, it must be overloaded """
    pass_tag = "node_transformation"

    def get_memoization_key(self, node):
        return id(node)

    def transform_node(self, node):
        """ return the node replacing @p node (whose inputs have already
            been transformed), @p node itself when unchanged """
        raise NotImplementedError

    def transform_graph(self, node, memoization_map):
        node_key = self.get_memoization_key(node)
        if node_key in memoization_map:
            return memoization_map[node_key]
        inputs = node.get_inputs()
        new_inputs = [self.transform_graph(op_input, memoization_map) for op_input in inputs]
        if all(new is old for new, old in zip(new_inputs, inputs)):
            rebuilt_node = node
        else:
            rebuilt_node = node.copy_with_inputs(new_inputs)
        new_node = self.transform_node(rebuilt_node)
        memoization_map[node_key] = new_node
        return new_node

    def transform(self, node):
        """ return the transformed tree, @p node (the same object) when no
            sub-node changed. Any failure raises a TransformationError """
        try:
            return self.transform_graph(node, {})
        except TransformationError:
            raise
        except Exception as e:
            Log.report(Log.Error, "{} failed to transform {}: {}", self, node.get_name(), e,
                       error=TransformationError(str(e)))

    def execute_on_optree(self, optree):
        return self.transform(optree)
