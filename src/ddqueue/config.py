"""Numeric settings shared by every component of the deterministic queue engine."""

# Two instants closer than this are treated as simultaneous.
TIME_TOLERANCE = 1e-9

# Fixed-point scale used when taking the LCM of two reciprocal rates.
LCM_SCALE = 1000

# The saturation search advances by min(1/lam, 1/mu) / SATURATION_STEP_DIVISOR.
SATURATION_STEP_DIVISOR = 1000.0
SATURATION_MAX_ITER = 2_000_000
SATURATION_NOT_FOUND = -1.0

# Axis length used for occupancy charts and replications.
DEFAULT_HORIZON = 50.0
