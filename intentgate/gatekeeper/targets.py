from __future__ import annotations

from typing import Any, Mapping

from ..policy.globs import normalize_path


PATCH_FILE_MARKERS = ("*** Add File: ", "*** Delete File: ", "*** Update File: ")

# Operation name -> parameter holding its single target path.
_PATH_FIELDS: dict[str, str] = {
    "write_to_file": "path",
    "apply_diff": "path",
    "edit": "file_path",
    "edit_file": "file_path",
    "search_replace": "file_path",
}


def _path_param(params: Mapping[str, Any], key: str) -> str | None:
    value = params.get(key)
    if not isinstance(value, str) or not value.strip():
        return None
    return normalize_path(value.strip())


def extract_patch_paths(patch: str) -> list[str]:
    """Collect file paths from Add/Update/Delete markers of a patch envelope."""
    paths: list[str] = []
    for line in patch.splitlines():
        for marker in PATCH_FILE_MARKERS:
            if line.startswith(marker):
                file_path = line[len(marker):].strip()
                if file_path:
                    paths.append(normalize_path(file_path))
                break
    return paths


def extract_target_paths(operation: str, params: Mapping[str, Any]) -> list[str]:
    """
    Return the normalized project-relative paths an operation claims to touch.

    Operations without a path (e.g. execute_command) return an empty list.
    """
    if operation == "apply_patch":
        patch = params.get("patch")
        return extract_patch_paths(patch) if isinstance(patch, str) else []

    key = _PATH_FIELDS.get(operation)
    if key is None:
        return []
    path = _path_param(params, key)
    return [path] if path else []
