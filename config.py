import yaml

from blobmanager.errors import ConfigurationMissing


def load_config(profile: str, config_file: str = ".config.yaml") -> dict:
    """Load the configuration for a specific profile from the YAML file."""
    with open(config_file, "r") as f:
        full_config = yaml.safe_load(f) or {}

    if profile not in full_config:
        raise ValueError(f"Profile '{profile}' not found in {config_file}")

    return full_config[profile] or {}


def resolve_settings(profile_conf: dict, required=(), **overrides) -> dict:
    """
    Merge explicit values (CLI options or environment) over a profile section.
    Raises ConfigurationMissing for the first required key left empty.
    """
    settings = dict(profile_conf or {})
    for key, value in overrides.items():
        if value:
            settings[key] = value
    for key in required:
        if not settings.get(key):
            raise ConfigurationMissing(key)
    return settings
