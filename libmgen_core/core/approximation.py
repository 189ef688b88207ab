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
# description: minimax polynomial approximation (Remez exchange algorithm)
#              of a target expression, computed with mpmath
###############################################################################

from .lm_operations import LM_Operation
from .polynomials import Parity, Polynomial, PolynomialSchemeEvaluator
from .mp_numbers import new_context, to_fraction, to_mpf
from .evaluation import MPEvaluator

from ..utility.log_report import Log, LOG_APPROX_INFO


class ApproximationError(Exception):
    """ no valid minimax approximation could be built for a specification """
    pass


## extra decimal digits used on top of the requested working precision
GUARD_DIGITS = 20
## maximal number of exchange iterations
REMEZ_MAX_ITERATIONS = 60
## convergence is reached when the maximal error is within this
#  relative distance of the levelled error
REMEZ_TOLERANCE = 1e-4
## number of golden-section steps used to locate an error extremum
GOLDEN_ITERATIONS = 40


def num_digits_for(num_bits):
    """ working precision (in decimal digits) of the approximations of a
        num_bits wide target """
    return num_bits


class ApproximationSpec(object):
    """ description of a requested approximation """
    def __init__(self, target, variable, num_terms, xmin, xmax,
                 parity=Parity.NONE, num_digits=32):
        ## expression to approximate (LM_Operation) bound on variable
        self.target = target
        ## name of the bound variable
        self.variable = variable
        self.num_terms = num_terms
        ## approximation domain bounds (exact values, decimal strings or
        #  mpmath numbers)
        self.xmin = xmin
        self.xmax = xmax
        self.parity = parity
        self.num_digits = num_digits

    def get_description(self):
        target = self.target.get_str().replace("\n", " ") if isinstance(self.target, LM_Operation) else str(self.target)
        return "{} on [{}, {}] ({} terms, parity={})".format(
            target, self.xmin, self.xmax, self.num_terms, self.parity.value)


class ApproximationResult(object):
    """ fitted polynomial and its maximal absolute error """
    def __init__(self, spec, polynomial, approx_error, num_iterations,
                 levelled_error=None):
        self.spec = spec
        self.polynomial = polynomial
        self.approx_error = approx_error
        self.num_iterations = num_iterations
        ## magnitude of the equioscillation level of the last exchange
        self.levelled_error = approx_error if levelled_error is None else levelled_error

    def get_expression(self):
        """ return a new Horner scheme expression of the polynomial,
            constants are still exact (unquantized) """
        return PolynomialSchemeEvaluator.generate_horner_scheme(
            self.polynomial, self.spec.variable, self.spec.parity)


class RemezSolver(object):
    """ Remez exchange algorithm for a linear family of monomials

        For a parity-constrained specification whose domain contains 0,
        the fit is performed on [0, max(|xmin|, |xmax|)], the symmetry
        of the monomials extends it to the whole domain """
    def __init__(self, ctx, spec):
        self.ctx = ctx
        self.spec = spec
        self.evaluator = MPEvaluator(ctx)
        self.degree_list = spec.parity.get_degree_list(spec.num_terms)
        xmin = to_mpf(ctx, to_fraction(spec.xmin))
        xmax = to_mpf(ctx, to_fraction(spec.xmax))
        if spec.parity is Parity.NONE:
            self.lo, self.hi = xmin, xmax
        elif xmin <= 0 <= xmax:
            self.lo, self.hi = ctx.zero, max(-xmin, xmax)
        elif xmax < 0:
            self.lo, self.hi = -xmax, -xmin
        else:
            self.lo, self.hi = xmin, xmax
        self.grid = self.build_grid(max(16 * (spec.num_terms + 1), 64))
        self.grid_target = [self.target_value(x) for x in self.grid]

    def fail(self, msg, *args):
        Log.report(Log.Error, "approximation of {} failed: " + msg, self.spec.get_description(), *args,
                   error=ApproximationError(msg.format(*args)))

    def target_value(self, x):
        try:
            value = self.evaluator.evaluate(self.spec.target, {self.spec.variable: x})
        except (ZeroDivisionError, ValueError) as e:
            self.fail("target can not be evaluated at {} ({})", x, e)
        if not isinstance(value, self.ctx.mpf) or not self.ctx.isfinite(value):
            self.fail("target is not finite at {}", x)
        return value

    def build_grid(self, size):
        """ Chebyshev distributed points of [lo, hi], bounds included """
        ctx = self.ctx
        mid = (self.lo + self.hi) / 2
        half = (self.hi - self.lo) / 2
        return [mid - half * ctx.cospi(ctx.mpf(k) / (size - 1)) for k in range(size)]

    def initial_reference(self):
        """ extrema of the Chebyshev polynomial with the same number of
            alternations as the requested approximation """
        ctx = self.ctx
        m = self.spec.num_terms
        if self.lo == 0 and self.spec.parity is Parity.ODD:
            points = [self.hi * ctx.cospi(ctx.mpf(k) / (2 * m + 1)) for k in range(m + 1)]
        elif self.lo == 0 and self.spec.parity is Parity.EVEN:
            points = [self.hi * ctx.cospi(ctx.mpf(k) / (2 * m)) for k in range(m + 1)]
        else:
            mid = (self.lo + self.hi) / 2
            half = (self.hi - self.lo) / 2
            points = [mid - half * ctx.cospi(ctx.mpf(k) / m) for k in range(m + 1)]
        return sorted(points)

    def basis(self, x):
        return [x**degree for degree in self.degree_list]

    def evaluate_poly(self, coeffs, x):
        return self.ctx.fsum(c * phi for c, phi in zip(coeffs, self.basis(x)))

    def error(self, coeffs, x, target_value=None):
        target_value = self.target_value(x) if target_value is None else target_value
        return target_value - self.evaluate_poly(coeffs, x)

    def solve_reference(self, reference):
        """ coefficients and levelled error equioscillating on @p reference """
        ctx = self.ctx
        m = self.spec.num_terms
        system = ctx.matrix(m + 1, m + 1)
        rhs = ctx.matrix(m + 1, 1)
        for j, x in enumerate(reference):
            for i, phi in enumerate(self.basis(x)):
                system[j, i] = phi
            system[j, m] = (-1)**j
            rhs[j] = self.target_value(x)
        try:
            solution = ctx.lu_solve(system, rhs)
        except ZeroDivisionError:
            self.fail("singular system for reference {}", [float(x) for x in reference])
        return [solution[i] for i in range(m)], solution[m]

    def refine_extremum(self, coeffs, a, b, sign):
        """ golden-section search of the maximum of sign * error on [a, b] """
        ratio = (self.ctx.sqrt(5) - 1) / 2
        c = b - ratio * (b - a)
        d = a + ratio * (b - a)
        fc = sign * self.error(coeffs, c)
        fd = sign * self.error(coeffs, d)
        for _ in range(GOLDEN_ITERATIONS):
            if fc > fd:
                b, d, fd = d, c, fc
                c = b - ratio * (b - a)
                fc = sign * self.error(coeffs, c)
            else:
                a, c, fc = c, d, fd
                d = a + ratio * (b - a)
                fd = sign * self.error(coeffs, d)
        return (c, sign * fc) if fc > fd else (d, sign * fd)

    def find_extrema(self, coeffs):
        """ list of (x, error) local extrema of alternating signs """
        errors = [self.error(coeffs, x, t) for x, t in zip(self.grid, self.grid_target)]
        groups = []
        for index, value in enumerate(errors):
            if value == 0:
                continue
            sign = 1 if value > 0 else -1
            if groups and groups[-1][0] == sign:
                if abs(value) > abs(errors[groups[-1][1]]):
                    groups[-1][1] = index
            else:
                groups.append([sign, index])
        extrema = []
        last = len(self.grid) - 1
        for sign, index in groups:
            best = (self.grid[index], errors[index])
            if 0 < index < last:
                refined = self.refine_extremum(coeffs, self.grid[index - 1], self.grid[index + 1], sign)
                if abs(refined[1]) > abs(best[1]):
                    best = refined
            extrema.append(best)
        return extrema

    def solve(self):
        ctx = self.ctx
        m = self.spec.num_terms
        scale = max([abs(t) for t in self.grid_target] + [ctx.one])
        noise = scale * ctx.mpf(10)**(-self.spec.num_digits)
        reference = self.initial_reference()
        for iteration in range(REMEZ_MAX_ITERATIONS):
            coeffs, level = self.solve_reference(reference)
            extrema = self.find_extrema(coeffs)
            max_error = max([abs(e) for _, e in extrema] + [ctx.zero])
            Log.report(LOG_APPROX_INFO, "iteration {}: max error {}, levelled error {}",
                       iteration, ctx.nstr(max_error, 6), ctx.nstr(abs(level), 6))
            if max_error <= noise or max_error - abs(level) <= REMEZ_TOLERANCE * max_error:
                polynomial = Polynomial({degree: c for degree, c in zip(self.degree_list, coeffs)})
                return ApproximationResult(self.spec, polynomial, max_error, iteration + 1,
                                           levelled_error=abs(level))
            if len(extrema) < m + 1:
                self.fail("only {} alternation(s) found, {} required", len(extrema), m + 1)
            while len(extrema) > m + 1:
                if abs(extrema[0][1]) < abs(extrema[-1][1]):
                    extrema.pop(0)
                else:
                    extrema.pop()
            reference = [x for x, _ in extrema]
        self.fail("no convergence after {} iterations", REMEZ_MAX_ITERATIONS)


def fit_approximation(spec):
    """ minimax approximation of @p spec, raises ApproximationError when
        no valid fit exists """
    if spec.num_terms < 1:
        Log.report(Log.Error, "approximation requires at least one term, {} requested", spec.num_terms,
                   error=ApproximationError("invalid number of terms"))
    if spec.num_digits < 1:
        Log.report(Log.Error, "invalid working precision {}", spec.num_digits,
                   error=ApproximationError("invalid working precision"))
    if not to_fraction(spec.xmin) < to_fraction(spec.xmax):
        Log.report(Log.Error, "empty approximation domain [{}, {}]", spec.xmin, spec.xmax,
                   error=ApproximationError("empty domain"))
    Log.report(LOG_APPROX_INFO, "approximating {}", spec.get_description())
    ctx = new_context(spec.num_digits + GUARD_DIGITS)
    result = RemezSolver(ctx, spec).solve()
    Log.report(LOG_APPROX_INFO, "approximation error {} after {} iteration(s)",
               ctx.nstr(result.approx_error, 6), result.num_iterations)
    return result


def approx(target, num_terms, xmin, xmax, variable="x", parity=Parity.NONE, num_digits=32):
    """ return a Horner scheme expression (on the Variable named @p variable)
        approximating @p target on [xmin, xmax] """
    spec = ApproximationSpec(target, variable, num_terms, xmin, xmax, parity, num_digits)
    return fit_approximation(spec).get_expression()
