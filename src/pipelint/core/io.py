"""
PIPELINT FILE SYSTEM MANAGER
----------------------------
Handles all physical I/O operations:
- Workflow discovery (single file, directory, .github/workflows)
- BOM-tolerant reads
- Atomic in-place rewrites for --fix

Decoupled from the engine so the core never touches the disk.
"""

import os
import logging
from pathlib import Path
from typing import List

logger = logging.getLogger("pipelint.io")

WORKFLOW_EXTENSIONS = (".yml", ".yaml")
WORKFLOWS_SUBDIR = Path(".github") / "workflows"


class FileSystemManager:
    """
    Abstraction layer for local file system operations.
    """

    def discover(self, target: Path) -> List[Path]:
        """
        Resolves a path to the ordered list of workflow files.

        - A file yields itself.
        - A directory yields .github/workflows/*.yml|yaml, then its direct
          *.yml|yaml children (each group sorted, duplicates dropped).
        - A missing path yields nothing.
        """
        target = Path(target)
        if target.is_file():
            return [target]
        if not target.is_dir():
            logger.info(f"Target does not exist: {target}")
            return []

        found: List[Path] = []
        seen = set()
        for folder in (target / WORKFLOWS_SUBDIR, target):
            for path in self._list_workflows(folder):
                key = path.resolve()
                if key in seen:
                    continue
                seen.add(key)
                found.append(path)

        logger.info(f"Discovered {len(found)} workflow file(s) under {target}")
        return found

    def _list_workflows(self, folder: Path) -> List[Path]:
        if not folder.is_dir():
            return []
        return sorted(
            p for p in folder.iterdir()
            if p.is_file() and p.name.endswith(WORKFLOW_EXTENSIONS)
        )

    def read_text(self, path: Path) -> str:
        """
        Reads text file with BOM handling.

        Raises:
            OSError: unreadable file, or content that is not valid UTF-8.
        """
        path = Path(path)
        try:
            return path.read_text(encoding="utf-8-sig")
        except UnicodeDecodeError as e:
            raise OSError(f"{path} is not valid UTF-8: {e.reason} at byte {e.start}") from e

    def atomic_write(self, target_path: Path, content: str) -> None:
        """
        Atomically writes content to file.
        Uses .pipelint.tmp + os.replace.
        """
        target_path = Path(target_path)
        temp_file = target_path.with_name(target_path.name + ".pipelint.tmp")
        try:
            with open(temp_file, "w", encoding="utf-8", newline="") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_file, target_path)
        except OSError:
            if temp_file.exists():
                temp_file.unlink()
            raise
