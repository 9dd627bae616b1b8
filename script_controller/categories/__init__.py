"""Built-in action categories."""

from __future__ import annotations

from script_controller.categories.notes import NOTES_CATEGORY
from script_controller.registry import CategoryRegistry, category_from_declaration

BUILTIN_DECLARATIONS = [NOTES_CATEGORY]


def build_default_registry() -> CategoryRegistry:
    """Return a fresh registry holding every built-in category."""
    registry = CategoryRegistry()
    for declaration in BUILTIN_DECLARATIONS:
        registry.register(category_from_declaration(declaration))
    return registry


__all__ = ["BUILTIN_DECLARATIONS", "NOTES_CATEGORY", "build_default_registry"]
