import os
import sys

import numpy as np
import pytest

# Ensure the project root is on sys.path so tests can import ``matrix_ordering``
# when running directly from the repository without installing the package.
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)


@pytest.fixture
def feature_matrix(rng: np.random.Generator) -> np.ndarray:
    """Heavy-tailed features with a few missing values and outliers."""
    X = rng.standard_t(df=3, size=(60, 5))
    X[:, 2] = np.exp(X[:, 2])
    X[5, 0] = 50.0
    X[rng.choice(60, size=6, replace=False), 1] = np.nan
    X[3, 4] = np.nan
    return X
