"""
Column selectors.

A selector is an ordered tuple of terms. Plain strings name a single column;
the helper functions below build terms that match on the variable table
returned by :func:`var_info` (type, role or name pattern). Prefix a term
with unary minus to drop its matches instead of adding them::

    resolve((all_numeric(), -all_outcomes()), var_info(df, outcomes=["label"]))
"""
from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Iterable, List, Sequence, Tuple, Union

import pandas as pd

from .errors import SelectionError

INFO_COLUMNS = ["variable", "type", "role", "source"]

@dataclass(frozen=True)
class Term:
    kind: str
    args: Tuple[str, ...] = ()
    negate: bool = False

    def __neg__(self) -> "Term":
        return replace(self, negate=not self.negate)

    def __str__(self) -> str:
        sign = "-" if self.negate else ""
        if self.kind == "var":
            return f"{sign}{self.args[0]}"
        args = ", ".join(f'"{a}"' for a in self.args)
        return f"{sign}{self.kind}({args})"

TermLike = Union[Term, str]

def var(name: str) -> Term:
    return Term("var", (name,))

def all_numeric() -> Term:
    return Term("all_numeric")

def all_nominal() -> Term:
    return Term("all_nominal")

def all_predictors() -> Term:
    return Term("all_predictors")

def all_outcomes() -> Term:
    return Term("all_outcomes")

def everything() -> Term:
    return Term("everything")

def has_role(role: str) -> Term:
    return Term("has_role", (role,))

def has_type(type_: str) -> Term:
    return Term("has_type", (type_,))

def starts_with(prefix: str) -> Term:
    return Term("starts_with", (prefix,))

def ends_with(suffix: str) -> Term:
    return Term("ends_with", (suffix,))

def contains(text: str) -> Term:
    return Term("contains", (text,))

def matches(pattern: str) -> Term:
    return Term("matches", (pattern,))

_ARITY = {
    "all_numeric": 0,
    "all_nominal": 0,
    "all_predictors": 0,
    "all_outcomes": 0,
    "everything": 0,
    "has_role": 1,
    "has_type": 1,
    "starts_with": 1,
    "ends_with": 1,
    "contains": 1,
    "matches": 1,
    "var": 1,
}

_CALL = re.compile(r"^(\w+)\((.*)\)$")
_ARG = re.compile(r'"([^"]*)"|\'([^\']*)\'')

def parse_term(text: str) -> Term:
    """Parse the text form of a term, e.g. ``-label`` or ``starts_with("x")``."""
    text = text.strip()
    negate = text.startswith("-")
    if negate:
        text = text[1:].strip()
    if not text:
        raise SelectionError("Empty selector term")
    m = _CALL.match(text)
    if m is None:
        term = var(text)
    else:
        kind, raw_args = m.group(1), m.group(2)
        if kind not in _ARITY:
            raise SelectionError(f"Unknown selector '{kind}()'")
        args = tuple(a or b for a, b in _ARG.findall(raw_args))
        if len(args) != _ARITY[kind]:
            raise SelectionError(f"'{kind}()' takes {_ARITY[kind]} argument(s), got {len(args)}")
        term = Term(kind, args)
    return -term if negate else term

def as_terms(terms: Union[TermLike, Iterable[TermLike], None]) -> Tuple[Term, ...]:
    if terms is None:
        return ()
    if isinstance(terms, (Term, str)):
        terms = [terms]
    out = []
    for t in terms:
        if isinstance(t, Term):
            out.append(t)
        elif isinstance(t, str):
            out.append(var(t))
        else:
            raise TypeError(f"Selector terms must be Term or str, not {type(t).__name__}")
    return tuple(out)

def _column_type(series: pd.Series) -> str:
    if pd.api.types.is_bool_dtype(series):
        return "logical"
    if pd.api.types.is_numeric_dtype(series):
        return "numeric"
    if pd.api.types.is_datetime64_any_dtype(series):
        return "date"
    return "nominal"

def var_info(data: pd.DataFrame, outcomes: Sequence[str] = ()) -> pd.DataFrame:
    """Build the variable table (name, type, role, source) for ``data``."""
    unknown = [c for c in outcomes if c not in data.columns]
    if unknown:
        raise ValueError(f"Outcome column(s) not in data: {', '.join(unknown)}")
    rows = [
        {
            "variable": col,
            "type": _column_type(data[col]),
            "role": "outcome" if col in outcomes else "predictor",
            "source": "original",
        }
        for col in data.columns
    ]
    return pd.DataFrame(rows, columns=INFO_COLUMNS)

def _match(term: Term, info: pd.DataFrame) -> List[str]:
    names = info["variable"]
    kind = term.kind
    if kind == "var":
        if term.args[0] not in set(names):
            raise SelectionError(f"Column '{term.args[0]}' does not exist in the data")
        mask = names == term.args[0]
    elif kind == "all_numeric":
        mask = info["type"] == "numeric"
    elif kind == "all_nominal":
        mask = info["type"] == "nominal"
    elif kind == "all_predictors":
        mask = info["role"] == "predictor"
    elif kind == "all_outcomes":
        mask = info["role"] == "outcome"
    elif kind == "everything":
        mask = pd.Series(True, index=info.index)
    elif kind == "has_role":
        mask = info["role"] == term.args[0]
    elif kind == "has_type":
        mask = info["type"] == term.args[0]
    elif kind == "starts_with":
        mask = names.str.startswith(term.args[0])
    elif kind == "ends_with":
        mask = names.str.endswith(term.args[0])
    elif kind == "contains":
        mask = names.str.contains(term.args[0], regex=False)
    elif kind == "matches":
        mask = names.str.contains(term.args[0], regex=True)
    else:
        raise SelectionError(f"Unknown selector '{kind}()'")
    return names[mask].tolist()

def resolve(terms: Union[TermLike, Iterable[TermLike]], info: pd.DataFrame) -> List[str]:
    """Resolve selector terms to an ordered list of column names.

    Positive terms append their matches in table order, negative terms remove
    theirs. A leading negative term starts from every variable. Raises
    :class:`SelectionError` when no terms are given, a named column does not
    exist, or nothing ends up selected.
    """
    terms = as_terms(terms)
    if not terms:
        raise SelectionError("At least one selector term is required")

    selected: List[str] = list(info["variable"]) if terms[0].negate else []
    for term in terms:
        found = _match(term, info)
        if term.negate:
            selected = [v for v in selected if v not in found]
        else:
            selected.extend(v for v in found if v not in selected)

    if not selected:
        raise SelectionError("No variables or terms were selected.")
    return selected
