"""
Default fitting settings.
"""

# Iteration cap of each nonlinear fit. Converted to an lmfit function
# evaluation cap as max_iter * (n_varying + 1).
DEFAULT_MAX_ITER = 1000

# Two-sided confidence level of the parameter intervals.
DEFAULT_CONFIDENCE = 0.95

# Initial guess of the distal sink slope of the two-domain-gradual-sink model.
GRADUAL_SINK_SLOPE_GUESS = 100.0

# Levenberg-Marquardt for the unconstrained fits, trust region reflective
# for the bounded fit.
UNBOUNDED_METHOD = 'leastsq'
BOUNDED_METHOD = 'least_squares'

# Lower bound of every parameter in the bounded fit.
BOUNDED_LOWER = 0.0
