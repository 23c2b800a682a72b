"""
Central configuration for the matrix normalization and reordering library.
"""

# --- Normalization Parameters ---

# Transform applied when no normalization method is requested.
DEFAULT_NORMALIZATION: str = "sigmoid"

# Divisor turning an interquartile range into a robust standard deviation.
# For a normal distribution IQR ≈ 1.35 σ.
IQR_SCALE: float = 1.35

# Quantile band used to estimate mean/std for 'scaledsigmoid5q'.
QUANTILE_BAND: tuple[float, float] = (0.05, 0.95)

# Percentile interpolation for median, IQR and quantiles.
# 'hazen' places the i-th order statistic at (i - 0.5) / n and clamps to the
# sample extremes outside that range.
QUANTILE_METHOD: str = "hazen"

# --- Tree Inference Parameters ---

# Distance metric for comparing items (rows of a feature matrix)
# Options: 'corr', 'abscorr', 'euclidean', 'cityblock', 'cosine', 'hamming'
DEFAULT_DISTANCE_METRIC: str = "corr"

# Linkage method for hierarchical clustering
# Average (UPGMA) produces more balanced trees than complete linkage
DEFAULT_LINKAGE_METHOD: str = "average"

# Linkage methods accepted by scipy.cluster.hierarchy.linkage
LINKAGE_METHODS: tuple[str, ...] = (
    "single",
    "complete",
    "average",
    "weighted",
    "centroid",
    "median",
    "ward",
)

# Optimal leaf ordering is attempted while
# sqrt(len(condensed distances)) < OPTIMAL_LEAF_ORDER_LIMIT.
OPTIMAL_LEAF_ORDER_LIMIT: float = 1000.0

# Absolute tolerance when deciding whether a square input is a distance matrix.
SYMMETRY_ATOL: float = 1e-10
