"""
Goodness-of-fit statistics and parameter confidence intervals.
"""

import numpy as np
from scipy.stats import t as t_dist

from .defaults import DEFAULT_CONFIDENCE


def r_squared(y_data, y_fit):
    """
    Coefficient of determination, 1 - SS_res / SS_tot.

    Parameters
    ----------
    y_data : array_like
        Measured Y data
    y_fit : array_like
        Model evaluated at the best-fit parameters

    Returns
    -------
    float
        R². Undefined (nan or -inf) when y_data is constant; callers must
        guard against SS_tot = 0.
    """
    y_data = np.asarray(y_data, dtype=float)
    y_fit = np.asarray(y_fit, dtype=float)

    ss_tot = np.sum((y_data - np.mean(y_data))**2)
    ss_res = np.sum((y_data - y_fit)**2)

    return 1 - ss_res / ss_tot


def mean_squared_error(residual, n_params):
    """
    Residual mean square, SS_res / (n - n_params).

    This is the reduced chi-square of an unweighted fit.
    """
    residual = np.asarray(residual, dtype=float)
    dof = residual.size - n_params
    if dof <= 0:
        return np.nan
    return float(np.sum(residual**2) / dof)


def t_quantile(confidence, dof):
    """Two-sided Student t quantile for the given confidence level."""
    if dof <= 0:
        return np.nan
    return t_dist.ppf(1 - (1 - confidence) / 2, dof)


def _intervals(p, std_err, t_val):
    p = np.asarray(p, dtype=float)
    half_width = t_val * std_err
    return np.column_stack([p - half_width, p + half_width])


def confidence_intervals_from_covariance(p, covar, dof, confidence=DEFAULT_CONFIDENCE):
    """
    Confidence intervals from a parameter covariance matrix.

    Parameters
    ----------
    p : array_like
        Best-fit parameters
    covar : ndarray or None
        Covariance matrix, already scaled by the residual mean square
    dof : int
        Degrees of freedom, n - len(p)
    confidence : float, optional
        Confidence level, default 0.95

    Returns
    -------
    ndarray
        (len(p), 2) array of [low, high] bounds; rows are NaN where the
        covariance is missing, non-finite or negative on the diagonal
    """
    p = np.asarray(p, dtype=float)
    if covar is None:
        return np.full((p.size, 2), np.nan)

    variances = np.diag(np.asarray(covar, dtype=float)).copy()
    variances[~np.isfinite(variances) | (variances < 0)] = np.nan
    std_err = np.sqrt(variances)

    return _intervals(p, std_err, t_quantile(confidence, dof))


def confidence_intervals_from_jacobian(p, residual, jacobian, confidence=DEFAULT_CONFIDENCE):
    """
    Confidence intervals from the residual vector and the Jacobian.

    The covariance is (JᵀJ)⁻¹ * mse, evaluated through a QR factorisation
    of J so that the normal matrix is never formed.

    Parameters
    ----------
    p : array_like
        Best-fit parameters
    residual : array_like
        Residuals at the best fit
    jacobian : ndarray
        (n, len(p)) Jacobian of the residuals at the best fit
    confidence : float, optional
        Confidence level, default 0.95

    Returns
    -------
    ndarray
        (len(p), 2) array of [low, high] bounds; rows are NaN for
        parameters whose Jacobian column is numerically dependent on the
        others
    """
    p = np.asarray(p, dtype=float)
    residual = np.asarray(residual, dtype=float).ravel()
    jacobian = np.asarray(jacobian, dtype=float)

    std_err = np.full(p.size, np.nan)
    if jacobian.shape != (residual.size, p.size) or not np.all(np.isfinite(jacobian)):
        return _intervals(p, std_err, np.nan)

    dof = residual.size - p.size
    mse = mean_squared_error(residual, p.size)

    # Drop columns that are dependent on the preceding ones
    _, r = np.linalg.qr(jacobian)
    diag_r = np.abs(np.diag(r))
    tol = max(jacobian.shape) * np.finfo(float).eps * (diag_r.max() if diag_r.size else 0.0)
    keep = diag_r > tol

    if np.any(keep):
        _, r_keep = np.linalg.qr(jacobian[:, keep])
        r_inv = np.linalg.inv(r_keep)
        std_err[keep] = np.sqrt(np.sum(r_inv**2, axis=1) * mse)

    return _intervals(p, std_err, t_quantile(confidence, dof))


def calculate_statistics(y_data, y_fit, n_params):
    """
    Calculate goodness-of-fit statistics.

    Parameters
    ----------
    y_data : array_like
        Measured Y data
    y_fit : array_like
        Fitted Y data
    n_params : int
        Number of fitting parameters

    Returns
    -------
    stats : dict
        Dictionary containing various fit statistics:
        - 'r_squared': R² (coefficient of determination)
        - 'adj_r_squared': Adjusted R²
        - 'chi_squared': Chi-squared
        - 'reduced_chi_squared': Reduced chi-squared (the mse)
        - 'rmse': Root mean square error
        - 'aic': Akaike Information Criterion
        - 'bic': Bayesian Information Criterion
    """
    y_data = np.asarray(y_data, dtype=float)
    y_fit = np.asarray(y_fit, dtype=float)

    n = len(y_data)
    residuals = y_data - y_fit
    ss_res = np.sum(residuals**2)

    r2 = r_squared(y_data, y_fit)

    # Adjusted R-squared
    if n > n_params + 1:
        adj_r_squared = 1 - (1 - r2) * (n - 1) / (n - n_params - 1)
    else:
        adj_r_squared = r2

    dof = n - n_params
    reduced_chi_squared = ss_res / dof if dof > 0 else np.inf

    rmse = np.sqrt(ss_res / n)

    # AIC = n*ln(SS_res/n) + 2*k, BIC = n*ln(SS_res/n) + k*ln(n)
    if ss_res > 0:
        aic = n * np.log(ss_res / n) + 2 * n_params
        bic = n * np.log(ss_res / n) + n_params * np.log(n)
    else:
        aic = -np.inf
        bic = -np.inf

    stats = {
        'r_squared': r2,
        'adj_r_squared': adj_r_squared,
        'chi_squared': ss_res,
        'reduced_chi_squared': reduced_chi_squared,
        'rmse': rmse,
        'aic': aic,
        'bic': bic,
        'n_data': n,
        'n_params': n_params,
        'dof': dof,
    }

    return stats


def format_statistics(stats):
    """
    Format statistics for display.

    Parameters
    ----------
    stats : dict
        Statistics dictionary

    Returns
    -------
    str
        Formatted statistics string
    """
    lines = []
    lines.append("=== Fit Statistics ===")
    lines.append(f"R² = {stats.get('r_squared', 0):.6f}")
    lines.append(f"Adj. R² = {stats.get('adj_r_squared', 0):.6f}")
    lines.append(f"RMSE = {stats.get('rmse', 0):.6e}")
    lines.append(f"MSE (reduced χ²) = {stats.get('reduced_chi_squared', 0):.6e}")
    lines.append(f"χ² = {stats.get('chi_squared', 0):.6e}")
    lines.append(f"AIC = {stats.get('aic', 0):.2f}")
    lines.append(f"BIC = {stats.get('bic', 0):.2f}")
    lines.append(f"N data = {stats.get('n_data', 0)}")
    lines.append(f"N parameters = {stats.get('n_params', 0)}")
    lines.append(f"Degrees of freedom = {stats.get('dof', 0)}")

    return '\n'.join(lines)
