from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG: dict = {
    "owner": "nodejs",
    "repo": "node",
    "readme": "README.md",  # collaborator list, relative to cwd
    "weekday_wait_hours": 48,
    "weekend_wait_hours": 72,
    "semver_major_tsc_approvals": 2,
}


def load_config(config_path: str = ".landgate.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .landgate.yml in the current directory
      3. CLI argument overrides
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        if not isinstance(file_config, dict):
            raise ValueError(f"Config file {config_path} must contain a mapping, got {type(file_config).__name__}.")
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    return config
