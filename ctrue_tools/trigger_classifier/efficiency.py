"""Binomial errors, weighted polynomial fit and efficiency-vs-mu propagation."""

import math
from typing import Optional

import numpy as np

from ctrue_tools.trigger_classifier.exceptions import InsufficientDataError
from ctrue_tools.trigger_classifier.types import EfficiencyResult


def binomial_error(observed: float, total: float) -> Optional[float]:
    """sqrt(p*(1-p)/total) with p = observed/total.

    Returns None when total is zero; the error is undefined there, not zero.
    """
    if total == 0:
        return None
    p = observed / total
    return math.sqrt(max(p * (1.0 - p), 0.0) / total)


def fit_polynomial(points, degree: int = 1, weights=None, absolute_sigma: bool = False) -> tuple:
    """Weighted least-squares fit of y = p0 + p1*x + ... + pN*x^N.

    points: sequence of (mu, observed_fraction).
    weights: optional statistical weight per point (multiplies its squared
    residual). Defaults to 1 for every point.

    The covariance inv(A^T W A) is scaled by chi2/dof when there are spare
    degrees of freedom, and used unscaled for an exactly determined fit.
    With absolute_sigma the weights are taken as inverse variances and the
    covariance is never rescaled.

    Returns (p0, p0err, p1, p1err, ...). Raises InsufficientDataError when
    fewer than degree+1 distinct mu values are available.
    """
    if degree < 0:
        raise ValueError(f"degree must be >= 0, got {degree}")

    pts = np.asarray(list(points), dtype=float).reshape(-1, 2)
    x, y = pts[:, 0], pts[:, 1]
    w = np.ones(len(x)) if weights is None else np.asarray(list(weights), dtype=float)
    if len(w) != len(x):
        raise ValueError(f"{len(w)} weights for {len(x)} points")

    keep = w > 0
    x, y, w = x[keep], y[keep], w[keep]
    n_distinct = len(np.unique(x))
    if n_distinct < degree + 1:
        raise InsufficientDataError(
            f"{n_distinct} distinct mu value(s) for a degree-{degree} fit "
            f"(need at least {degree + 1})"
        )

    A = np.vander(x, degree + 1, increasing=True)
    AtW = A.T * w
    normal = AtW @ A
    coeffs = np.linalg.solve(normal, AtW @ y)
    cov = np.linalg.inv(normal)

    dof = len(x) - (degree + 1)
    if dof > 0 and not absolute_sigma:
        resid = y - A @ coeffs
        chi2 = float(np.sum(w * resid ** 2))
        cov = cov * (chi2 / dof)

    errors = np.sqrt(np.clip(np.diag(cov), 0.0, None))
    out = []
    for c, e in zip(coeffs, errors):
        out.extend((float(c), float(e)))
    return tuple(out)


def compute_efficiency(mu_values, weights, p0: float, p0err: float,
                       p1: float, p1err: float) -> list:
    """Evaluate the linear efficiency model at each mu, in input order.

    efficiency = clamp(p0 + p1*mu, 0, 1)
    error      = sqrt(p0err^2 + (mu*p1err)^2)

    The p0/p1 covariance is left out of the error.
    """
    mu_arr = np.asarray(list(mu_values), dtype=float)
    w_arr = np.ones(len(mu_arr)) if weights is None else np.asarray(list(weights), dtype=float)
    if len(w_arr) != len(mu_arr):
        raise ValueError(f"{len(w_arr)} weights for {len(mu_arr)} mu values")

    eff = np.clip(p0 + p1 * mu_arr, 0.0, 1.0)
    err = np.sqrt(p0err ** 2 + (mu_arr * p1err) ** 2)
    return [
        EfficiencyResult(mu=float(m), efficiency=float(e), error=float(s), weight=float(w))
        for m, e, s, w in zip(mu_arr, eff, err, w_arr)
    ]


def total_efficiency(results) -> Optional[tuple]:
    """Weight-averaged efficiency over buckets: (efficiency, error).

    Returns None if the weights sum to zero.
    """
    results = list(results)
    w = np.array([r.weight for r in results], dtype=float)
    w_sum = float(np.sum(w))
    if w_sum == 0.0:
        return None
    eff = np.array([r.efficiency for r in results])
    err = np.array([r.error for r in results])
    mean = float(np.sum(w * eff) / w_sum)
    error = float(np.sqrt(np.sum((w * err) ** 2)) / w_sum)
    return mean, error


def bucket_variance(observed: int, total: int) -> float:
    """Binomial variance of observed/total, floored for p = 0 or 1.

    At the edges p is taken as 0.5/total (or 1 - 0.5/total) so that every
    bucket keeps a finite fit weight.
    """
    err = binomial_error(observed, total)
    if err is None:
        raise ValueError("bucket variance is undefined for total == 0")
    if err > 0.0:
        return err ** 2
    p = 0.5 / total
    return p * (1.0 - p) / total


def estimate_from_buckets(buckets: dict, table, degree: int = 1) -> list:
    """Fit observed fraction vs mu over run buckets and evaluate it per run.

    Each bucket enters the fit with inverse binomial variance as its weight
    and the coefficient errors come from the unscaled covariance. Run
    weights are carried into the results for `total_efficiency` only.

    Buckets of runs missing from `table` or with total == 0 are skipped.
    Results are in increasing run order, one per fitted bucket.
    """
    rows = []
    for run_id in sorted(buckets):
        b = buckets[run_id]
        rec = table.lookup(run_id)
        if rec is None or b.total == 0:
            continue
        rows.append((rec.mu, b.observed / b.total, 1.0 / bucket_variance(b.observed, b.total), rec.weight))

    if not rows:
        raise InsufficientDataError("No run bucket with events from a good run")

    points = [(mu, frac) for mu, frac, _, _ in rows]
    fit_weights = [iv for _, _, iv, _ in rows]
    run_weights = [w for _, _, _, w in rows]
    params = fit_polynomial(points, degree=degree, weights=fit_weights, absolute_sigma=True)
    mu_values = [mu for mu, _, _, _ in rows]

    if degree == 0:
        p0, p0err = params
        return compute_efficiency(mu_values, run_weights, p0, p0err, 0.0, 0.0)
    if degree == 1:
        return compute_efficiency(mu_values, run_weights, *params)

    # Higher orders: evaluate the full polynomial, propagate the diagonal terms
    coeffs = np.array(params[0::2])
    errs = np.array(params[1::2])
    results = []
    for mu, w in zip(mu_values, run_weights):
        powers = mu ** np.arange(len(coeffs))
        eff = float(np.clip(np.dot(coeffs, powers), 0.0, 1.0))
        err = float(np.sqrt(np.sum((powers * errs) ** 2)))
        results.append(EfficiencyResult(mu=float(mu), efficiency=eff, error=err, weight=float(w)))
    return results
