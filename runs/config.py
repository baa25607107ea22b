"""
Run configuration for batch churn predictions.

Defines the RunConfig dataclass for YAML-driven batch runs.
"""

from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Optional

import yaml

from scoring.exceptions import ConfigurationError


@dataclass
class RunConfig:
    """
    Configuration for a single batch run.

    Load from YAML:
        config = RunConfig.from_yaml("configs/default.yaml")

    Create programmatically:
        config = RunConfig(
            name="weekly_ann",
            input_path="data/customers.csv",
            model_id="ann",
            seed=7,
        )
    """

    # Metadata
    name: str
    description: str = ""

    # Scoring
    model_id: Optional[str] = None  # None = registry default
    seed: Optional[int] = None      # None = unseeded randomness
    registry_path: Optional[str] = None  # YAML model registry; None = built-in

    # Data paths (relative to runs/)
    input_path: str = "data/customers.csv"
    output_path: Optional[str] = None  # None = outputs/<run_id>.csv

    @classmethod
    def from_yaml(cls, path: Path | str) -> "RunConfig":
        """Load configuration from YAML file."""
        path = Path(path)
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(f"Unknown run config keys in {path}: {sorted(unknown)}")
        if "name" not in data:
            raise ConfigurationError(f"Run config {path} is missing 'name'")
        return cls(**data)

    def to_yaml(self, path: Path | str) -> None:
        """Save configuration to YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.dump(asdict(self), f, default_flow_style=False, sort_keys=False)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)
