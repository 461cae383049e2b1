from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pandas as pd

from .errors import ScaleStepError
from .recipe import Recipe
from .selectors import TermLike, all_numeric, all_outcomes
from .utils import get_logger

logger = get_logger()

def build_recipe(df: pd.DataFrame, terms: Sequence[TermLike] = (all_numeric(), -all_outcomes()),
                 outcomes: Sequence[str] = ("label",), skip: bool = False,
                 degenerate: str = "nan") -> Recipe:
    """One-step recipe scaling ``terms`` of ``df``; outcomes absent from ``df`` are ignored."""
    present = [c for c in outcomes if c in df.columns]
    return Recipe(df, outcomes=present).step_scale_min_max(*terms, skip=skip, degenerate=degenerate)

def normalize_frame(df: pd.DataFrame, **recipe_kwargs) -> pd.DataFrame:
    return build_recipe(df, **recipe_kwargs).prep(retain=True).juice()

def run(in_dir: Path, out_dir: Path, **recipe_kwargs) -> None:
    out_dir.mkdir(parents=True, exist_ok=True)
    for f in sorted(in_dir.glob("*.csv")):
        try:
            df = pd.read_csv(f)
            out = normalize_frame(df, **recipe_kwargs)
        except (ScaleStepError, TypeError, ValueError) as e:
            logger.error(f"[normalize] Failed on {f.name}: {e}")
            continue
        out_path = out_dir / f"{f.stem}_normalized.csv"
        out.to_csv(out_path, index=False)
        logger.info(f"[normalize] Wrote {out_path}")
    logger.info("[normalize] Completed.")
