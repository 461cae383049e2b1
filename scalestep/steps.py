from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Any, ClassVar, Dict, Optional, Sequence, Tuple

import pandas as pd

from .errors import DegenerateColumnError, MissingColumnError, NotFittedError
from .selectors import Term, as_terms, resolve, var_info
from .utils import get_logger, rand_id

logger = get_logger()

DEGENERATE_POLICIES = ("nan", "raise")

def format_names(names: Sequence[str], width: int = 50) -> str:
    """Join ``names`` with commas, truncating with ``...`` past ``width``."""
    text = ", ".join(names)
    if len(text) > width:
        text = text[: max(width - 3, 0)].rstrip(", ") + "..."
    return text

class Step(ABC):
    """Interface every recipe step implements.

    A step starts out untrained. ``fit`` returns a trained copy bound to the
    training data's variable table and ``apply`` transforms a data frame with
    that copy. Steps also expose ``skip``, ``trained`` and ``id``, which the
    host recipe reads.
    """

    operation: ClassVar[str] = "step"
    skip: bool
    trained: bool
    id: str

    @abstractmethod
    def fit(self, training: pd.DataFrame, info: Optional[pd.DataFrame] = None) -> "Step":
        ...

    @abstractmethod
    def apply(self, data: pd.DataFrame) -> pd.DataFrame:
        ...

    @abstractmethod
    def describe(self) -> Dict[str, Any]:
        ...

    def tidy(self) -> pd.DataFrame:
        return pd.DataFrame({"terms": self.describe()["terms"]}, dtype=object)

@dataclass(frozen=True)
class MinMaxScaleStep(Step):
    """Rescale numeric columns to [0, 1] with ``(x - min(x)) / (max(x) - min(x))``.

    Only the selected column names are resolved at fit time; ``min`` and
    ``max`` are computed from whatever frame is passed to :meth:`apply`,
    ignoring missing values. A column with ``min == max`` becomes all NaN,
    or raises :class:`DegenerateColumnError` when ``degenerate="raise"``.
    """

    terms: Tuple[Term, ...] = ()
    role: Optional[str] = None
    skip: bool = False
    trained: bool = False
    columns: Optional[Tuple[str, ...]] = None
    degenerate: str = "nan"
    id: str = field(default_factory=lambda: rand_id("scale_min_max"))

    operation: ClassVar[str] = "scale_min_max"

    def __post_init__(self):
        object.__setattr__(self, "terms", as_terms(self.terms))
        if self.columns is not None:
            object.__setattr__(self, "columns", tuple(self.columns))
        if self.degenerate not in DEGENERATE_POLICIES:
            raise ValueError(
                f"degenerate must be one of {DEGENERATE_POLICIES}, got {self.degenerate!r}"
            )

    def fit(self, training: pd.DataFrame, info: Optional[pd.DataFrame] = None) -> "MinMaxScaleStep":
        if info is None:
            info = var_info(training)
        columns = resolve(self.terms, info)
        return replace(self, trained=True, columns=tuple(columns))

    def apply(self, data: pd.DataFrame) -> pd.DataFrame:
        if not self.trained:
            raise NotFittedError(f"Step '{self.id}' must be prepped before it can be applied")
        columns = self.columns or ()
        missing = [c for c in columns if c not in data.columns]
        if missing:
            raise MissingColumnError(missing)

        logger.debug(f"[bake] {self.id} scaling {list(columns)}")
        # every column is scaled before any is written back
        scaled = {c: self._scale(c, data[c]) for c in columns}
        out = data.copy()
        for c, values in scaled.items():
            out[c] = values
        return out

    def _scale(self, name: str, col: pd.Series) -> pd.Series:
        if not pd.api.types.is_numeric_dtype(col):
            raise TypeError(f"Column '{name}' is not numeric ({col.dtype})")
        values = col.astype("float64")
        lo, hi = values.min(), values.max()
        if lo == hi and self.degenerate == "raise":
            raise DegenerateColumnError(name, float(lo))
        return (values - lo) / (hi - lo)

    def describe(self) -> Dict[str, Any]:
        if self.trained:
            terms = list(self.columns or ())
        else:
            terms = [str(t) for t in self.terms]
        return {
            "step": self.operation,
            "id": self.id,
            "trained": self.trained,
            "skip": self.skip,
            "terms": terms,
        }

    def format(self, width: int = 50) -> str:
        names = format_names(self.describe()["terms"], width)
        suffix = " [trained]" if self.trained else ""
        return f"Scaling for {names}{suffix}"

    def __str__(self) -> str:
        return self.format()
