"""Best-effort version-control lookups for trace entries."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path


logger = logging.getLogger(__name__)


def get_current_revision(root: Path) -> str | None:
    """Return the git HEAD revision for `root`, or None if it cannot be determined."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "HEAD"],
            cwd=root,
            capture_output=True,
            text=True,
            timeout=5,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug(f"git revision lookup failed in {root}: {e}")
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip() or None
