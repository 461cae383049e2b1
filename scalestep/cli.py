from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import pandas as pd
import typer

from .config import ScaleConfig
from .normalize import build_recipe
from .normalize import run as run_normalize
from .selectors import parse_term
from .utils import get_logger, set_seed

app = typer.Typer(help="scalestep – min-max scaling step for data recipes")

logger = get_logger()

SELECT_HELP = 'Selector term, repeatable (e.g. "all_numeric()", "-label").'

@app.callback()
def _common(ctx: typer.Context, config: Optional[Path] = typer.Option(None, "--config", "-c",
                help="Optional YAML config file."),
            seed: int = typer.Option(42, help="Random seed for step ids"),
            verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging")):
    ctx.obj = ScaleConfig.from_yaml(config)
    set_seed(seed)
    if verbose:
        logger.setLevel(logging.DEBUG)

def _recipe_kwargs(cfg: ScaleConfig, select: Optional[List[str]], degenerate: Optional[str]) -> dict:
    terms = tuple(parse_term(t) for t in select) if select else cfg.step.selector()
    return {
        "terms": terms,
        "outcomes": cfg.recipe.outcomes,
        "skip": cfg.step.skip,
        "degenerate": degenerate or cfg.step.degenerate,
    }

@app.command()
def normalize(ctx: typer.Context,
              in_dir: Path = typer.Option(None, help="Input CSV dir"),
              out_dir: Path = typer.Option(None, help="Output normalized CSV dir"),
              select: Optional[List[str]] = typer.Option(None, "--select", "-s", help=SELECT_HELP),
              degenerate: Optional[str] = typer.Option(None, help="Zero-range columns: nan or raise")):
    cfg = ctx.obj
    in_dir = in_dir or cfg.paths.input
    out_dir = out_dir or cfg.paths.output
    run_normalize(in_dir, out_dir, **_recipe_kwargs(cfg, select, degenerate))

@app.command()
def bake(ctx: typer.Context,
         train: Path = typer.Argument(..., help="Training CSV the recipe is prepped on"),
         new: Path = typer.Argument(..., help="CSV to bake"),
         out: Path = typer.Option(..., "--out", "-o", help="Output CSV"),
         select: Optional[List[str]] = typer.Option(None, "--select", "-s", help=SELECT_HELP),
         degenerate: Optional[str] = typer.Option(None, help="Zero-range columns: nan or raise")):
    cfg = ctx.obj
    prepped = build_recipe(pd.read_csv(train), **_recipe_kwargs(cfg, select, degenerate)).prep(retain=False)
    baked = prepped.bake(pd.read_csv(new))
    out.parent.mkdir(parents=True, exist_ok=True)
    baked.to_csv(out, index=False)
    logger.info(f"[bake] Wrote {out}")

@app.command()
def describe(ctx: typer.Context,
             csv: Path = typer.Argument(..., help="CSV the recipe is prepped on"),
             select: Optional[List[str]] = typer.Option(None, "--select", "-s", help=SELECT_HELP)):
    cfg = ctx.obj
    rec = build_recipe(pd.read_csv(csv), **_recipe_kwargs(cfg, select, None))
    typer.echo(str(rec))
    prepped = rec.prep(retain=False)
    typer.echo("")
    typer.echo(str(prepped))
    typer.echo("")
    typer.echo(prepped.tidy(1).to_string(index=False))

def main():
    app()
