"""
Minimal recipe host: an ordered list of steps driven through prep and bake.

    rec = Recipe(df, outcomes=["label"]).step_scale_min_max(all_numeric(), -all_outcomes())
    prepped = rec.prep()
    train_scaled = prepped.juice()
    new_scaled = prepped.bake(new_df)
"""
from __future__ import annotations

import copy
from typing import List, Optional, Sequence

import pandas as pd

from .errors import NotFittedError
from .selectors import TermLike, var_info
from .steps import MinMaxScaleStep, Step
from .utils import get_logger

logger = get_logger()

class Recipe:
    def __init__(self, data: pd.DataFrame, outcomes: Sequence[str] = ()):
        self.outcomes = list(outcomes)
        self.var_info = var_info(data, self.outcomes)
        self.template = data
        self.steps: List[Step] = []
        self.trained = False
        self.retained = False

    def add_step(self, step: Step) -> "Recipe":
        if self.trained:
            raise ValueError("Steps cannot be added to a prepped recipe")
        self.steps.append(step)
        return self

    def step_scale_min_max(self, *terms: TermLike, role: Optional[str] = None,
                           skip: bool = False, id: Optional[str] = None,
                           degenerate: str = "nan") -> "Recipe":
        kwargs = {"id": id} if id is not None else {}
        return self.add_step(MinMaxScaleStep(terms=terms, role=role, skip=skip,
                                             degenerate=degenerate, **kwargs))

    def prep(self, training: Optional[pd.DataFrame] = None, retain: bool = True) -> "Recipe":
        """Fit every step in order and return a new, trained recipe.

        Each step is fit against the training data as transformed by the steps
        before it, then applied to it. Steps with ``skip=True`` are still
        applied here; they are only left out by :meth:`bake`.
        """
        if self.trained:
            raise ValueError("Recipe is already prepped")
        data = self.template if training is None else training
        fitted: List[Step] = []
        for i, step in enumerate(self.steps, start=1):
            info = var_info(data, [c for c in self.outcomes if c in data.columns])
            logger.info(f"[prep] step {i}/{len(self.steps)}: {step.id}")
            step = step.fit(data, info)
            data = step.apply(data)
            fitted.append(step)

        out = copy.copy(self)
        out.steps = fitted
        out.trained = True
        out.retained = retain
        out.template = data if retain else None
        return out

    def bake(self, new_data: pd.DataFrame) -> pd.DataFrame:
        if not self.trained:
            raise NotFittedError("Recipe must be prepped before it can be baked")
        data = new_data
        for step in self.steps:
            if step.skip:
                logger.info(f"[bake] skipping {step.id}")
                continue
            data = step.apply(data)
        return data

    def juice(self) -> pd.DataFrame:
        if not self.trained:
            raise NotFittedError("Recipe must be prepped before it can be juiced")
        if not self.retained:
            raise ValueError("Use retain=True in prep() to keep the processed training data")
        return self.template

    def tidy(self, number: Optional[int] = None) -> pd.DataFrame:
        if number is not None:
            if not 1 <= number <= len(self.steps):
                raise IndexError(f"number must be between 1 and {len(self.steps)}")
            return self.steps[number - 1].tidy()
        rows = [
            {
                "number": i,
                "operation": "step",
                "type": step.operation,
                "trained": step.trained,
                "skip": step.skip,
                "id": step.id,
            }
            for i, step in enumerate(self.steps, start=1)
        ]
        return pd.DataFrame(rows, columns=["number", "operation", "type", "trained", "skip", "id"])

    def __str__(self) -> str:
        lines = ["Data Recipe", "", "Inputs:", "", "      role #variables"]
        for role, n in self.var_info["role"].value_counts(sort=False).items():
            lines.append(f"{role:>10} {n:>10}")
        if self.trained:
            lines += ["", f"Training data contained {len(self.template)} data points"
                      if self.retained else "Training data not retained"]
        if self.steps:
            lines += ["", "Operations:", ""]
            lines += [str(step) for step in self.steps]
        return "\n".join(lines)
