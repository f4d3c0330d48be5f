#!/usr/bin/env python3
"""
Safe Configuration Updater for prompt-config.json
Provides atomic write operations so the hot-reloading config store never reads a partial file
"""
import json
import fcntl
import os
import tempfile
import shutil
from pathlib import Path
from typing import Any, Dict

from common.config_store import SECTION_KEYS, STRING_KEYS


def validate_prompt_config(new_config: Dict[str, Any]) -> None:
    """
    Strictly validate a prompt configuration before writing it.

    Raises:
        ValueError: If the configuration does not match the expected schema
    """
    if not isinstance(new_config, dict):
        raise ValueError(f"Configuration must be a dict, got {type(new_config).__name__}")

    for key in STRING_KEYS:
        if key in new_config and not isinstance(new_config[key], str):
            raise ValueError(f"{key} must be a string, got {type(new_config[key]).__name__}")

    sections = new_config.get("sections", {})
    if not isinstance(sections, dict):
        raise ValueError(f"sections must be a dict, got {type(sections).__name__}")
    for key in SECTION_KEYS:
        if key in sections and not isinstance(sections[key], str):
            raise ValueError(f"sections.{key} must be a string")


def safe_update_prompt_config(config_path: str, new_config: Dict[str, Any]) -> bool:
    """
    Safely update the prompt configuration with an atomic write.

    Readers never see partial JSON: the new content is written to a temp file
    in the same directory, fsynced, then moved over the old file.

    Args:
        config_path: Path to prompt-config.json
        new_config: New configuration dictionary

    Returns:
        bool: True if update was successful, False otherwise
    """
    config_file = Path(config_path)
    temp_path = None

    try:
        validate_prompt_config(new_config)

        config_file.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode='w',
            encoding='utf-8',
            dir=config_file.parent,
            delete=False,
            suffix='.tmp',
            prefix='prompt-config_'
        ) as temp_file:
            temp_path = temp_file.name

            fcntl.flock(temp_file.fileno(), fcntl.LOCK_EX)
            try:
                json.dump(new_config, temp_file, indent=2, sort_keys=True, ensure_ascii=False)
                temp_file.write('\n')
                temp_file.flush()
                os.fsync(temp_file.fileno())
            finally:
                fcntl.flock(temp_file.fileno(), fcntl.LOCK_UN)

        shutil.move(temp_path, config_path)

        print(f"✅ Configuration updated successfully: {config_path}")
        return True

    except (ValueError, TypeError, OSError) as e:
        print(f"❌ Failed to update configuration: {e}")
        if temp_path and os.path.exists(temp_path):
            try:
                os.unlink(temp_path)
            except OSError:
                pass
        return False


def validate_current_config(config_path: str) -> bool:
    """Validate that the current config file is readable and well-formed."""
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            fcntl.flock(f.fileno(), fcntl.LOCK_SH | fcntl.LOCK_NB)
            try:
                data = json.load(f)
            finally:
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)
        validate_prompt_config(data)
        print(f"✅ Current config is valid with {len(data)} keys")
        return True

    except (ValueError, OSError) as e:
        print(f"❌ Current config validation failed: {e}")
        return False


if __name__ == "__main__":
    import sys

    config_path = os.environ.get("PROMPT_CONFIG_PATH", "config/prompt-config.json")

    if len(sys.argv) < 2:
        print("Usage: python safe_config_update.py [validate|example]")
        sys.exit(1)

    if sys.argv[1] == "validate":
        if os.path.exists(config_path):
            sys.exit(0 if validate_current_config(config_path) else 1)
        else:
            print(f"❌ Config file not found: {config_path}")
            sys.exit(1)

    elif sys.argv[1] == "example":
        example_config = {
            "helpBaseUrl": "https://help.example.com",
            "ctaText": "If in doubt, contact us before printing.",
            "sections": {
                "fixesTitle": "=== WHAT WE FIXED FOR YOU ===",
            },
        }

        success = safe_update_prompt_config(config_path, example_config)
        sys.exit(0 if success else 1)

    else:
        print("Invalid command. Use 'validate' or 'example'")
        sys.exit(1)
