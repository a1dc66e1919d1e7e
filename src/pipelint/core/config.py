"""
PIPELINT CONFIGURATION MANAGER
------------------------------
Handles loading and parsing of user configuration (.pipelint.yaml).
Allows customization of:
- Ignore patterns (glob-based) for files and rule ids
- Default strict mode
"""

import copy
import logging
from fnmatch import fnmatch
from pathlib import Path
from typing import Any, Dict, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

logger = logging.getLogger("pipelint.config")


class ConfigManager:
    """
    Manages user configuration state.
    defaults:
      rules:
        strict: false
        ignore: []
    """

    DEFAULT_CONFIG = {
        "rules": {
            "strict": False,
            "ignore": [],
        },
    }

    def __init__(self, workspace_root: Path, app_name: str = "pipelint"):
        self.workspace = Path(workspace_root)
        self.app_name = app_name
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)
        self.source: Optional[Path] = None
        self._load_config()

    def _load_config(self):
        """
        Attempts to load configuration from:
        1. .<app_name>/config.yaml (Preferred)
        2. .<app_name>.yaml (Root file)
        """
        yaml = YAML(typ="safe")
        possible_files = [
            self.workspace / f".{self.app_name}" / "config.yaml",
            self.workspace / f".{self.app_name}.yaml",
        ]

        for path in possible_files:
            if not path.is_file():
                continue
            try:
                loaded = yaml.load(path)
            except (OSError, YAMLError) as e:
                logger.warning(f"Failed to parse {path.name}: {e}")
                continue
            if isinstance(loaded, dict):
                self._merge_config(loaded)
            self.source = path
            logger.info(f"Loaded configuration from {path.name}")
            return

    def _merge_config(self, user_config: Dict[str, Any]):
        """Depth-1 merge of user config into defaults."""
        rules = user_config.get("rules")
        if isinstance(rules, dict):
            self.config["rules"].update(rules)

    def is_ignored(self, file_path: str, rule_id: Optional[str] = None) -> bool:
        """
        Determines if a file or rule should be ignored.

        Args:
            file_path: Path of the workflow, as reported.
            rule_id: Optional rule id (e.g., 'actions/unpinned').

        Returns:
            True if ignored, False otherwise.
        """
        ignores = self.config["rules"].get("ignore") or []

        for pattern in ignores:
            pattern = str(pattern)
            if rule_id is not None:
                if fnmatch(rule_id, pattern):
                    return True
                continue
            if fnmatch(file_path, pattern) or fnmatch(Path(file_path).name, pattern):
                return True

        return False

    @property
    def strict(self) -> bool:
        return bool(self.config["rules"].get("strict", False))
