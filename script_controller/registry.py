"""Categories of schema-described actions and the registry that holds them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping

from script_controller.errors import (
    DuplicateActionError,
    DuplicateCategoryError,
    UnknownActionError,
    UnknownCategoryError,
)
from script_controller.schema import ParamSpec, parse_schema, to_json_schema
from script_controller.templates import ScriptTemplate, as_template


@dataclass(frozen=True)
class ActionDescriptor:
    name: str
    description: str
    template: ScriptTemplate
    params: tuple[ParamSpec, ...] = ()
    has_schema: bool = False

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("action name must be non-empty")
        if self.params and not self.has_schema:
            object.__setattr__(self, "has_schema", True)

    def json_schema(self) -> dict[str, Any] | None:
        if not self.has_schema:
            return None
        return to_json_schema(self.params)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "schema": self.json_schema(),
        }


@dataclass(frozen=True)
class Category:
    name: str
    description: str
    actions: tuple[ActionDescriptor, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("category name must be non-empty")
        object.__setattr__(self, "actions", tuple(self.actions))
        seen: set[str] = set()
        for action in self.actions:
            if action.name in seen:
                raise DuplicateActionError(self.name, action.name)
            seen.add(action.name)

    def lookup_action(self, name: str) -> ActionDescriptor:
        for action in self.actions:
            if action.name == name:
                return action
        raise UnknownActionError(self.name, name)

    def action_names(self) -> list[str]:
        return [action.name for action in self.actions]


def action_from_declaration(declaration: Mapping[str, Any]) -> ActionDescriptor:
    """Build a descriptor from ``{name, description, schema?, script}``."""
    schema = declaration.get("schema")
    return ActionDescriptor(
        name=str(declaration["name"]),
        description=str(declaration.get("description", "")),
        template=as_template(declaration["script"]),
        params=parse_schema(schema),
        has_schema=schema is not None,
    )


def category_from_declaration(declaration: Mapping[str, Any]) -> Category:
    """Build a category from ``{name, description, scripts: [...]}``."""
    return Category(
        name=str(declaration["name"]),
        description=str(declaration.get("description", "")),
        actions=tuple(
            action_from_declaration(script) for script in declaration.get("scripts", [])
        ),
    )


class CategoryRegistry:
    """Ordered set of categories, filled once at startup and read afterwards."""

    def __init__(self, categories: list[Category] | None = None) -> None:
        self._categories: dict[str, Category] = {}
        for category in categories or []:
            self.register(category)

    def register(self, category: Category) -> Category:
        if category.name in self._categories:
            raise DuplicateCategoryError(category.name)
        self._categories[category.name] = category
        return category

    def lookup(self, name: str) -> Category:
        category = self._categories.get(name)
        if category is None:
            raise UnknownCategoryError(name)
        return category

    def lookup_action(self, category_name: str, action_name: str) -> ActionDescriptor:
        return self.lookup(category_name).lookup_action(action_name)

    def list_categories(self) -> list[tuple[str, str]]:
        return [(cat.name, cat.description) for cat in self._categories.values()]

    def list_actions(self, category_name: str) -> list[dict[str, Any]]:
        return [action.to_dict() for action in self.lookup(category_name).actions]

    def __contains__(self, name: object) -> bool:
        return name in self._categories

    def __iter__(self) -> Iterator[Category]:
        return iter(list(self._categories.values()))

    def __len__(self) -> int:
        return len(self._categories)
