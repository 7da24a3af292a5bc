"""Named, pure transformations of the project manifest (``package.json``).

Every operation takes the loaded manifest and returns a new mapping; the
input is never mutated.  Operations merge into a known section and keep all
unrelated keys, so applying one twice gives the same result as applying it
once.
"""

from __future__ import annotations

from typing import Any, Callable

UPDATE_SCRIPTS = "update_scripts"

AI_SCRIPTS: dict[str, str] = {
    "ai-build": "echo '🤖 AI-optimized build starting...' && npm run build",
    "ai-dev": "echo '🚀 AI development server starting...' && npm run dev",
    "ai-test": "echo '🧪 AI-powered testing...' && npm test",
}

ManifestOperation = Callable[[dict[str, Any]], dict[str, Any]]


class ManifestError(Exception):
    """Raised when a manifest cannot be transformed."""


def merge_section(manifest: dict[str, Any], section: str, entries: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of *manifest* with *entries* merged into *section*.

    Existing keys in the section are kept (and overwritten only by an entry of
    the same name); the section is created when missing.

    Raises:
        ManifestError: If *section* exists but is not an object.
    """
    current = manifest.get(section)
    if current is None:
        current = {}
    if not isinstance(current, dict):
        raise ManifestError(
            f"'{section}' must be an object, found {type(current).__name__}"
        )
    merged = dict(manifest)
    merged[section] = {**current, **entries}
    return merged


def update_scripts(manifest: dict[str, Any]) -> dict[str, Any]:
    """Add the ``ai-build``, ``ai-dev`` and ``ai-test`` scripts."""
    return merge_section(manifest, "scripts", AI_SCRIPTS)


OPERATIONS: dict[str, ManifestOperation] = {
    UPDATE_SCRIPTS: update_scripts,
}


def get_operation(name: str) -> ManifestOperation:
    """Look up a registered operation.

    Raises:
        ManifestError: If no operation is registered under *name*.
    """
    try:
        return OPERATIONS[name]
    except KeyError:
        known = ", ".join(sorted(OPERATIONS))
        raise ManifestError(f"Unknown config operation '{name}' (known: {known})") from None


def apply_operation(name: str, manifest: dict[str, Any]) -> dict[str, Any]:
    return get_operation(name)(manifest)
