"""Load code extraction settings from YAML files."""

from pathlib import Path

import yaml

from ordino.report_tools.models.extraction_config import ExtractionConfig


def load_extraction_config(config_file: Path) -> ExtractionConfig:
    """Load extraction settings from a YAML file.

    Args:
        config_file: Path to the YAML settings file

    Returns:
        Parsed extraction settings, defaults filled in for omitted keys

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If YAML is invalid or doesn't match schema

    """
    if not config_file.exists():
        raise FileNotFoundError(f"Extraction config not found: {config_file}")

    try:
        with config_file.open() as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_file}: {e}") from e

    if data is None:
        raise ValueError(f"Empty extraction config: {config_file}")

    try:
        return ExtractionConfig.model_validate(data)
    except Exception as e:
        raise ValueError(f"Invalid extraction config in {config_file}: {e}") from e
