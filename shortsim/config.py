"""Configuration loading and management."""

import os
from pathlib import Path
from typing import Annotated

import yaml
from pydantic import BaseModel, Field

# Default per-second stay probabilities for an untagged 30-second video.
DEFAULT_BASELINE: tuple[float, ...] = (
    0.95, 0.93, 0.88, 0.85, 0.83, 0.83, 0.80, 0.80, 0.82, 0.82,
    0.78, 0.78, 0.78, 0.80, 0.80, 0.80, 0.80, 0.83, 0.83, 0.83,
    0.84, 0.84, 0.85, 0.85, 0.86, 0.86, 0.87, 0.88, 0.88, 0.89,
)

# Stay-probability boost per trigger.
DEFAULT_TRIGGER_WEIGHTS: dict[str, float] = {
    "hook": 0.07,
    "shock": 0.09,
    "curiosity_question": 0.05,
    "jump_cut": 0.04,
    "music_cue": 0.03,
    "text_overlay_bold": 0.02,
    "poignant_pov": 0.06,
    "loop_hint": 0.10,
    "surprise_reveal": 0.08,
    "context": 0.01,
    "cta": 0.02,
    "sound_effect": 0.035,
    "pattern_interrupt": 0.065,
    "quick_zoom": 0.025,
    "point_of_view_shot": 0.055,
    "satisfying_visual": 0.045,
    "callback_joke": 0.05,
    "foreshadowing": 0.03,
    "visual_metaphor": 0.04,
}

CONFIG_ENV_VAR = "SHORTSIM_CONFIG"

Probability = Annotated[float, Field(ge=0.0, le=1.0)]
Weight = Annotated[float, Field(ge=0.0)]


class RetentionConfig(BaseModel):
    """Retention model parameters.

    The baseline curve and weight table are treated as read-only for the
    lifetime of an analysis. Substitute a different instance to try
    alternate curves instead of mutating this one.
    """

    baseline: tuple[Probability, ...] = Field(default=DEFAULT_BASELINE, min_length=1)
    weights: dict[str, Weight] = Field(default_factory=lambda: dict(DEFAULT_TRIGGER_WEIGHTS))
    max_stay_probability: float = Field(default=0.99, ge=0.0, le=1.0)
    base_replay_score: float = Field(default=0.10, ge=0.0, le=1.0)
    loop_bonus: float = Field(default=0.08, ge=0.0)
    loop_trigger: str = "loop_hint"
    impact_noise_floor: float = 0.01  # percentage points
    weak_threshold: float = Field(default=0.80, ge=0.0, le=1.0)

    def weight_for(self, trigger: str) -> float:
        """Return the weight of a trigger id, 0.0 for ids outside the table."""
        weight = self.weights.get(trigger)
        if weight is None:
            return 0.0
        return weight

    def baseline_at(self, second: int) -> float:
        """Baseline stay probability at a second, repeating the last entry past the end."""
        if second < len(self.baseline):
            return self.baseline[second]
        return self.baseline[-1]


class CLIConfig(BaseModel):
    """Command line presentation options."""

    workers: int = Field(default=1, ge=1)
    decimals: int = Field(default=2, ge=0)


class Config(BaseModel):
    """Main application configuration."""

    retention: RetentionConfig = Field(default_factory=RetentionConfig)
    cli: CLIConfig = Field(default_factory=CLIConfig)

    @classmethod
    def from_yaml(cls, path: Path | str) -> "Config":
        """Load configuration from a YAML file."""
        path = Path(path)
        if not path.exists():
            return cls()

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping, got {type(data).__name__}")

        # Allow a flat file holding only the retention section
        if "retention" not in data and ("baseline" in data or "weights" in data):
            data = {"retention": data}

        return cls(**data)

    def to_yaml(self, path: Path | str) -> None:
        """Save configuration to a YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = self.model_dump()
        data["retention"]["baseline"] = list(data["retention"]["baseline"])
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False)


def load_config(config_path: Path | str | None = None) -> Config:
    """Load configuration from file or use defaults."""
    if config_path is None:
        config_path = os.environ.get(CONFIG_ENV_VAR) or None

    if config_path is None:
        # Look for config.yaml in current directory or project root
        candidates = [Path("config.yaml"), Path(__file__).parent.parent / "config.yaml"]
        for candidate in candidates:
            if candidate.exists():
                config_path = candidate
                break

    if config_path is not None:
        return Config.from_yaml(config_path)

    return Config()
