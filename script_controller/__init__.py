"""Schema-described AppleScript actions and the dispatcher that renders them."""

from script_controller.categories import build_default_registry
from script_controller.dispatcher import Dispatcher, ExecutionRequest
from script_controller.registry import (
    ActionDescriptor,
    Category,
    CategoryRegistry,
    category_from_declaration,
)
from script_controller.templates import (
    ConstantTemplate,
    ParameterizedTemplate,
    escape_applescript_string,
    quote_applescript_string,
)

__all__ = [
    "ActionDescriptor",
    "Category",
    "CategoryRegistry",
    "ConstantTemplate",
    "Dispatcher",
    "ExecutionRequest",
    "ParameterizedTemplate",
    "build_default_registry",
    "category_from_declaration",
    "escape_applescript_string",
    "quote_applescript_string",
]
