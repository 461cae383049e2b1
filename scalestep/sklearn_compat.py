"""scikit-learn adapter so a recipe step can sit inside ``sklearn.pipeline.Pipeline``."""
from __future__ import annotations

import numpy as np
import pandas as pd
from sklearn.base import BaseEstimator, TransformerMixin
from sklearn.utils.validation import check_is_fitted

from .selectors import var_info
from .steps import Step

def _as_frame(X) -> pd.DataFrame:
    if isinstance(X, pd.DataFrame):
        return X
    X = np.asarray(X)
    if X.ndim != 2:
        raise ValueError(f"Expected 2D input, got shape {X.shape}")
    return pd.DataFrame(X, columns=[f"x{i}" for i in range(X.shape[1])])

class StepTransformer(TransformerMixin, BaseEstimator):
    """Wrap an untrained :class:`~scalestep.steps.Step` as a transformer.

    ``fit`` resolves the step's selector against ``X``; ``transform`` applies
    the trained step. Arrays are given column names ``x0, x1, ...``.
    """

    def __init__(self, step: Step):
        self.step = step

    def fit(self, X, y=None):
        X = _as_frame(X)
        self.step_ = self.step.fit(X, var_info(X))
        self.feature_names_in_ = np.asarray(X.columns, dtype=object)
        self.n_features_in_ = X.shape[1]
        return self

    def transform(self, X):
        check_is_fitted(self, "step_")
        return self.step_.apply(_as_frame(X))

    def get_feature_names_out(self, input_features=None):
        check_is_fitted(self, "step_")
        return self.feature_names_in_
