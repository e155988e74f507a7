"""
Configuration management for arcspline.

Loads YAML configuration with defaults for the fitter, validation, export
and tracing.
"""

import os
from dataclasses import asdict, dataclass, field, fields

import yaml


@dataclass
class FitConfig:
    """Configuration for arc fitting."""
    tolerance: float = 1.0
    bisection_iterations: int = 20
    refinement_passes: int = 10


@dataclass
class ValidationConfig:
    """Configuration for sampled validation of fitted arcs."""
    sample_steps: int = 1000
    slack_factor: float = 1.05  # sampled error may exceed tolerance by this factor


@dataclass
class ExportConfig:
    """Configuration for SVG output."""
    curve_color: str = "red"
    curve_width: float = 3.0
    arc_color: str = "green"
    arc_width: float = 1.0
    marker_radius: float = 2.0
    margin: float = 20.0
    flip_y: bool = False


@dataclass
class TracingConfig:
    """Configuration for runtime tracing."""
    enabled: bool = False
    level: str = "INFO"
    file_path: str = None
    json_output: bool = False


@dataclass
class ArcSplineConfig:
    """Complete configuration."""
    fit: FitConfig = field(default_factory=FitConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    tracing: TracingConfig = field(default_factory=TracingConfig)


def load_config(config_path=None):
    """
    Load configuration from a YAML file.

    Falls back to defaults for any missing values.
    """
    config = ArcSplineConfig()

    if config_path and os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

        config = _merge_config(config, yaml_data)

    return config


def _merge_config(config, yaml_data):
    """Merge YAML data into the config dataclass, ignoring unknown keys."""
    for section in fields(config):
        values = yaml_data.get(section.name)
        if not isinstance(values, dict):
            continue
        target = getattr(config, section.name)
        for key, value in values.items():
            if hasattr(target, key):
                setattr(target, key, value)

    return config


def save_default_config(path):
    """Save the default configuration to a YAML file for reference."""
    yaml_data = asdict(ArcSplineConfig())
    # file_path is per-run, not a useful default
    yaml_data["tracing"].pop("file_path", None)

    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(yaml_data, f, default_flow_style=False, sort_keys=False)
