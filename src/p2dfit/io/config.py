"""Configuration file loading and saving."""

import tomllib
from pathlib import Path

import tomli_w
from pydantic import ValidationError

from p2dfit.core.domain.config import P2DFitConfig
from p2dfit.core.shared.exceptions import ConfigError


def load_config(path: Path) -> P2DFitConfig:
    """Load a fitting configuration from a TOML file.

    Args:
        path: Path to the TOML configuration file.

    Returns:
        P2DFitConfig: Validated configuration object.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ConfigError: If the file is not valid TOML or the configuration is invalid.
    """
    if not path.exists():
        msg = f"Configuration file not found: {path}"
        raise FileNotFoundError(msg)

    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
        return P2DFitConfig.model_validate(data)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigError(msg) from exc
    except ValidationError as exc:
        msg = f"Invalid configuration in {path}: {exc}"
        raise ConfigError(msg) from exc


def save_config(config: P2DFitConfig, path: Path) -> None:
    """Save a fitting configuration to a TOML file.

    Args:
        config: Configuration object to save.
        path: Path where to save the TOML file.
    """
    data = config.model_dump(mode="json", exclude_none=True)
    with path.open("wb") as f:
        tomli_w.dump(data, f)


def generate_default_config() -> str:
    """Generate a default configuration file as a string.

    Returns:
        str: TOML-formatted default configuration.
    """
    return """# p2dfit configuration file
# Generated automatically - edit as needed

mu_guess = 0.0
sigma_guess = 10.0

[mode]
kind = "free"      # "free" fits mu and sigma, "fixed" fits mu only
# sigma = 2.0      # Required when kind = "fixed"

[bounds]
lower = 0.0
upper = 100.0      # Shared by mu and sigma

[optimizer]
initial_step = 0.2
max_evaluations = 500
rtol = 1e-9
atol = 1e-12
xtol = 1e-10

[interval]
level = 0.5
lower_start_factor = 0.5
upper_start_factor = 4.0
residual = "log"       # "log" or "linear"
split_at_peak = true
"""
