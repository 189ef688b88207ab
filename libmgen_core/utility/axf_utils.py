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
# description: approximation and test descriptor export (YAML or JSON)
###############################################################################

import yaml
import json

from libmgen_core.core.polynomials import Parity, Polynomial
from libmgen_core.core.mp_numbers import to_fraction
from libmgen_core.utility.log_report import Log

#NOTES:
#  SimplePolyApprox, TestCaseDescriptor and the ApproxError classes are
#  plain objects containing exact numerical values (Fraction) and
#  libmgen's Polynomial objects
#
#  AXF_<class> contains string-encoded property, their constructors accept
#  libmgen objects or str as input values for basic parameters but
#  require AXF_<class> object as parameter for more complex objects


class SimplePolyApprox:
    """ description of a simple Polynomial approximation of <target> over
        <interval>, only the coefficient whose degrees are listed in
        <degree_list> are non-zero """
    def __init__(self, poly, function, target, degree_list, parity, interval,
                 approx_error=None):
        self.poly = poly
        self.function = function
        self.target = target
        self.degree_list = [int(d) for d in degree_list]
        self.parity = parity
        self.interval = interval
        self.approx_error = approx_error


class TestCaseDescriptor:
    """ sampling and error bound of a generated test """
    # prevent test runners from collecting this class
    __test__ = False

    def __init__(self, name, max_ulps, error_mode, interval, num_samples, number_type):
        self.name = name
        self.max_ulps = max_ulps
        self.error_mode = error_mode
        self.interval = interval
        self.num_samples = int(num_samples)
        self.number_type = number_type


class ApproxError:
    error_type = None
    def __init__(self, value):
        self.value = value

class AbsoluteApproxError(ApproxError):
    error_type = "absolute"


class AXF_ApproxError:
    """ AXF approximation error """
    def __init__(self, error_type, error_value):
        self.error_type = error_type
        self.error_value = str(error_value)

    def serialize_to_dict(self):
        return {"type": self.error_type, "value": self.error_value}

    @staticmethod
    def deserialize_from_dict(d):
        return AXF_ApproxError(d["type"], d["value"])

    def export_to_approx_error(self):
        if self.error_type == "absolute":
            return AbsoluteApproxError(to_fraction(self.error_value))
        else:
            raise NotImplementedError


def interval_to_str(lo, hi):
    return [str(to_fraction(lo)), str(to_fraction(hi))]


def interval_from_str(interval):
    return tuple(to_fraction(bound) for bound in interval)


class AXF_Polynomial(yaml.YAMLObject):
    """ AXF object for polynomial object encoding """
    yaml_tag = u'!Polynomial'
    def __init__(self, coeff_map):
        self.coeff_map = {int(k): str(v) for k, v in coeff_map.items()}
    def __repr__(self):
        return "%s(coeff_map=%r)" % (
            self.__class__.__name__, self.coeff_map)
    def export_to_poly(self):
        return Polynomial({k: to_fraction(v) for k, v in self.coeff_map.items()})
    @staticmethod
    def deserialize_from_dict(d):
        return AXF_Polynomial({int(k): v for k, v in d.items()})
    @staticmethod
    def from_poly(poly):
        return AXF_Polynomial(poly.coeff_map)
    def serialize_to_dict(self):
        return self.coeff_map
    def to_ml_object(self):
        return self.export_to_poly()


class AXF_SimplePolyApprox(yaml.YAMLObject):
    """ AXF object for basic polynomial approximation """
    yaml_tag = u'!SimplePolyApprox'
    def __init__(self, poly, function, target, degree_list, parity, interval,
                 approx_error):
        assert isinstance(poly, AXF_Polynomial)
        assert isinstance(approx_error, AXF_ApproxError)
        self.poly = poly
        self.function = str(function)
        self.target = str(target)
        self.degree_list = [int(d) for d in degree_list]
        self.parity = str(parity)
        self.interval = [str(bound) for bound in interval]
        self.approx_error = approx_error

    def export(self):
        return yaml.dump(self)

    def serialize_to_dict(self):
        return {
            "class": self.yaml_tag,
            "function": self.function,
            "target": self.target,
            "approx_params": {
                "degree_list": self.degree_list,
                "parity": self.parity,
            },
            "interval": self.interval,
            "approx_data": self.poly.serialize_to_dict(),
            "approx_error": self.approx_error.serialize_to_dict()
        }

    @staticmethod
    def from_approx_result(result, function):
        """ build an AXF_SimplePolyApprox from the ApproximationResult
            @p result used by the generated function named @p function """
        spec = result.spec
        return AXF_SimplePolyApprox(
            AXF_Polynomial.from_poly(result.polynomial),
            function,
            spec.target.get_str().replace("\n", " ").strip(),
            result.polynomial.get_degree_list(),
            spec.parity.value,
            interval_to_str(spec.xmin, spec.xmax),
            AXF_ApproxError("absolute", to_fraction(result.approx_error)),
        )

    @staticmethod
    def deserialize_from_dict(d):
        return AXF_SimplePolyApprox(
            AXF_Polynomial.deserialize_from_dict(d["approx_data"]),
            d["function"],
            d["target"],
            d["approx_params"]["degree_list"],
            d["approx_params"]["parity"],
            d["interval"],
            approx_error=AXF_ApproxError.deserialize_from_dict(d["approx_error"]),
        )

    def export_to_SPA(self):
        """ convert object to SimplePolyApprox """
        return SimplePolyApprox(
            self.poly.export_to_poly(),
            self.function,
            self.target,
            self.degree_list,
            Parity(self.parity),
            interval_from_str(self.interval),
            approx_error=self.approx_error.export_to_approx_error(),
        )

    def to_ml_object(self):
        return self.export_to_SPA()


class AXF_TestCase(yaml.YAMLObject):
    """ AXF object for test case encoding """
    yaml_tag = u'!TestCase'
    def __init__(self, name, max_ulps, error_mode, interval, num_samples, number_type):
        self.name = str(name)
        self.max_ulps = str(max_ulps)
        self.error_mode = str(error_mode)
        self.interval = [str(bound) for bound in interval]
        self.num_samples = int(num_samples)
        self.number_type = str(number_type)

    def serialize_to_dict(self):
        return {
            "class": self.yaml_tag,
            "name": self.name,
            "max_ulps": self.max_ulps,
            "error_mode": self.error_mode,
            "interval": self.interval,
            "num_samples": self.num_samples,
            "number_type": self.number_type,
        }

    @staticmethod
    def from_test_case(test_case):
        return AXF_TestCase(
            test_case.name,
            to_fraction(test_case.max_ulps),
            test_case.error_mode.tag,
            interval_to_str(*test_case.get_domain()),
            test_case.num_samples,
            test_case.number_type,
        )

    @staticmethod
    def deserialize_from_dict(d):
        return AXF_TestCase(
            d["name"], d["max_ulps"], d["error_mode"], d["interval"],
            d["num_samples"], d["number_type"])

    def to_ml_object(self):
        return TestCaseDescriptor(
            self.name, to_fraction(self.max_ulps), self.error_mode,
            interval_from_str(self.interval), self.num_samples, self.number_type)


def get_axf_descriptors(functions, tests):
    """ list of AXF objects describing the approximations of @p functions
        followed by the tests of @p tests """
    descriptors = [
        AXF_SimplePolyApprox.from_approx_result(result, fct.get_name())
        for fct in functions for result in fct.get_approximations()
    ]
    descriptors += [AXF_TestCase.from_test_case(test_case) for test_case in tests]
    return descriptors


class AXF_Exporter:
    def __init__(self, descriptors):
        self.descriptors = descriptors

    def export(self):
        return yaml.dump(self.descriptors)


class AXF_Importer:
    """ Import for AXF storage to libmgen's classes """
    @staticmethod
    def from_file(filename):
        """ import a descriptor list from a source file in .axf
            format """
        with open(filename, 'r') as stream:
            return AXF_Importer.from_str(stream.read())

    @staticmethod
    def from_str(s):
        """ import a descriptor list from a string description
            in AXF format """
        content = yaml.load(s, Loader=yaml.Loader)
        if isinstance(content, list):
            return [axf_object.to_ml_object() for axf_object in content]
        return content.to_ml_object()


class AXF_JSON_Exporter:
    @staticmethod
    def to_str(serialized_list):
        return json.dumps(serialized_list, sort_keys=True, indent=4)

    @staticmethod
    def to_file(filename, serialized_list):
        with open(filename, "w") as out_stream:
            out_stream.write(AXF_JSON_Exporter.to_str(serialized_list))


class AXF_JSON_Importer:
    """ Import for json-based AXF storage to libmgen's classes """
    @staticmethod
    def from_file(filename):
        with open(filename, 'r') as stream:
            return AXF_JSON_Importer.from_str(stream.read())

    @staticmethod
    def from_str(s):
        axf_dict = json.loads(s)
        # json AXF string contains ether a descriptor as a dict
        # or a list of descriptors as a list of dict
        if isinstance(axf_dict, list):
            return [AXF_JSON_Importer.serialized_dict_to_ml_object(sub_dict) for sub_dict in axf_dict]
        else:
            return AXF_JSON_Importer.serialized_dict_to_ml_object(axf_dict)

    @staticmethod
    def serialized_dict_to_ml_object(d):
        axf_class = {
            AXF_SimplePolyApprox.yaml_tag: AXF_SimplePolyApprox,
            AXF_TestCase.yaml_tag: AXF_TestCase,
        }
        if d["class"] not in axf_class:
            Log.report(Log.Error, "unknown AXF class {}", d["class"], error=KeyError(d["class"]))
        return axf_class[d["class"]].deserialize_from_dict(d).to_ml_object()


def export_descriptors(functions, tests, filename):
    """ dump the descriptors of @p functions and @p tests into @p filename,
        in JSON if its extension is .json, in YAML otherwise """
    descriptors = get_axf_descriptors(functions, tests)
    if filename.endswith(".json"):
        AXF_JSON_Exporter.to_file(filename, [axf.serialize_to_dict() for axf in descriptors])
    else:
        with open(filename, "w") as out_stream:
            out_stream.write(AXF_Exporter(descriptors).export())
