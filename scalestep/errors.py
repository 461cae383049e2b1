from __future__ import annotations

from typing import Iterable

from sklearn.exceptions import NotFittedError as _SklearnNotFittedError

class ScaleStepError(Exception):
    """Base class for errors raised by scalestep."""

class SelectionError(ScaleStepError, ValueError):
    """Selector terms could not be resolved against a variable table."""

class NotFittedError(ScaleStepError, _SklearnNotFittedError):
    """A step or recipe was used before it was prepped."""

class MissingColumnError(ScaleStepError, LookupError):
    def __init__(self, columns: Iterable[str]):
        self.columns = list(columns)
        super().__init__(
            f"Column(s) selected at fit time are missing from the data: {', '.join(self.columns)}"
        )

class DegenerateColumnError(ScaleStepError, ValueError):
    def __init__(self, column: str, value: float):
        self.column = column
        self.value = value
        super().__init__(f"Column '{column}' has zero range (min == max == {value})")
