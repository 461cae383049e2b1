from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

import yaml

from .selectors import Term, parse_term

DEFAULT_TERMS = ["all_numeric()", "-all_outcomes()"]

@dataclass
class Paths:
    input: Path = Path("data")
    output: Path = Path("normalized")

    def ensure(self) -> None:
        self.output.mkdir(parents=True, exist_ok=True)

@dataclass
class StepConfig:
    terms: List[str] = field(default_factory=lambda: list(DEFAULT_TERMS))
    skip: bool = False
    degenerate: str = "nan"

    def selector(self) -> Tuple[Term, ...]:
        return tuple(parse_term(t) for t in self.terms)

@dataclass
class RecipeConfig:
    outcomes: List[str] = field(default_factory=lambda: ["label"])

@dataclass
class ScaleConfig:
    paths: Paths = field(default_factory=Paths)
    step: StepConfig = field(default_factory=StepConfig)
    recipe: RecipeConfig = field(default_factory=RecipeConfig)

    @staticmethod
    def from_yaml(path: Optional[str | Path]) -> "ScaleConfig":
        if path is None:
            return ScaleConfig()
        data = yaml.safe_load(Path(path).read_text()) or {}
        p = data.get("paths", {})
        s = data.get("step", {})
        r = data.get("recipe", {})
        terms = s.get("terms", DEFAULT_TERMS)
        if isinstance(terms, str):
            terms = [terms]
        cfg = ScaleConfig(
            paths=Paths(
                input=Path(p.get("input", "data")),
                output=Path(p.get("output", "normalized")),
            ),
            step=StepConfig(
                terms=[str(t) for t in terms],
                skip=bool(s.get("skip", False)),
                degenerate=str(s.get("degenerate", "nan")),
            ),
            recipe=RecipeConfig(
                outcomes=list(r.get("outcomes", ["label"])),
            ),
        )
        return cfg
