import json
import logging
import os
import fcntl
import time
from pathlib import Path
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "prompt-config.json"

# Known top-level keys and their expected types
STRING_KEYS = ("helpBaseUrl", "ctaText")
SECTION_KEYS = ("fixesTitle", "errorsTitle", "warningsTitle")


def sanitize_prompt_config(config_data: Any) -> Optional[Dict[str, Any]]:
    """
    Validate a prompt configuration payload.

    Wrongly-typed known keys are dropped with a warning; unknown keys are kept.

    Args:
        config_data: Decoded JSON

    Returns:
        Sanitized configuration, or None when the payload is not an object
    """
    if not isinstance(config_data, dict):
        logger.warning(f"Invalid prompt config: expected dict, got {type(config_data).__name__}")
        return None

    sanitized = dict(config_data)

    for key in STRING_KEYS:
        if key in sanitized and not isinstance(sanitized[key], str):
            logger.warning(f"Invalid type for {key}: {type(sanitized[key]).__name__}, ignoring")
            del sanitized[key]

    if "sections" in sanitized:
        sections = sanitized["sections"]
        if not isinstance(sections, dict):
            logger.warning(f"Invalid sections type: {type(sections).__name__}, ignoring")
            del sanitized["sections"]
        else:
            valid_sections = {}
            for key, value in sections.items():
                if key in SECTION_KEYS and not isinstance(value, str):
                    logger.warning(f"Invalid section title type for {key}: {type(value).__name__}, skipping")
                    continue
                valid_sections[key] = value
            sanitized["sections"] = valid_sections

    return sanitized


class PromptConfigStore:
    """File-backed wording/branding overrides with hot reload."""

    def __init__(self, config_path: Union[str, Path, None] = None):
        """Initialize the store and load the configuration file."""
        self.config: Dict[str, Any] = {}
        self._config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._last_modified = 0
        self._load_config()

    @property
    def config_path(self) -> Path:
        return self._config_path

    def _should_reload_config(self) -> bool:
        """Check if the configuration file has been modified since last load."""
        try:
            current_modified = os.path.getmtime(self._config_path)
            return current_modified > self._last_modified
        except OSError:
            return False

    def _load_config(self) -> None:
        """Load the configuration file with atomic read and file locking."""
        try:
            self._last_modified = os.path.getmtime(self._config_path)

            config_data = self._atomic_read_config()
            if config_data is None:
                logger.warning("Failed to read prompt config atomically, keeping current configuration")
                return

            sanitized = sanitize_prompt_config(config_data)
            if sanitized is None:
                return

            self.config = sanitized
            logger.debug(f"Prompt config loaded: {sorted(self.config.keys())}")

        except FileNotFoundError:
            logger.warning(f"Prompt config not found at {self._config_path}, using empty configuration")
            self.config = {}
        except OSError as e:
            logger.error(f"Failed to load prompt config: {e}")

    def _atomic_read_config(self) -> Optional[Any]:
        """
        Atomically read the configuration file under a shared lock.

        Returns:
            Parsed JSON, or None if the read fails
        """
        max_retries = 3
        retry_delay = 0.1  # 100ms

        for attempt in range(max_retries):
            try:
                with open(self._config_path, 'r', encoding='utf-8') as f:
                    # Shared lock: many readers, no writer
                    fcntl.flock(f.fileno(), fcntl.LOCK_SH | fcntl.LOCK_NB)

                    try:
                        content = f.read()
                        # An empty file is an empty configuration
                        data = json.loads(content) if content.strip() else {}
                        logger.debug(f"Loaded prompt config atomically (attempt {attempt + 1})")
                        return data
                    finally:
                        fcntl.flock(f.fileno(), fcntl.LOCK_UN)

            except FileNotFoundError:
                raise
            except BlockingIOError:
                logger.debug(f"Prompt config locked by writer, retrying in {retry_delay}s (attempt {attempt + 1})")
                time.sleep(retry_delay)
                retry_delay *= 2
                continue
            except json.JSONDecodeError as e:
                logger.warning(f"JSON decode error in prompt config: {e}")
                # The file may have been caught mid-write, try once more
                if attempt < max_retries - 1:
                    time.sleep(retry_delay)
                    continue
                break
            except OSError as e:
                logger.warning(f"File system error reading prompt config: {e}")
                break

        return None

    def reload_if_changed(self) -> bool:
        """
        Reload configuration if the file has changed.

        Returns:
            True if configuration was reloaded, False otherwise
        """
        if self._should_reload_config():
            logger.info("Prompt configuration file changed, reloading...")
            self._load_config()
            return True
        return False

    def section_titles(self) -> Dict[str, str]:
        self.reload_if_changed()
        sections = self.config.get("sections") or {}
        return {key: value for key, value in sections.items() if key in SECTION_KEYS}

    def cta_text(self) -> Optional[str]:
        self.reload_if_changed()
        return self.config.get("ctaText") or None

    def help_base_url(self) -> Optional[str]:
        self.reload_if_changed()
        return self.config.get("helpBaseUrl") or None
