"""AppleScript templates and string-literal escaping."""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Union

_SIMPLE_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

# Characters AppleScript has no backslash escape for but that can still
# break a line-oriented script (other C0/C1 controls, Unicode line breaks).
_LINE_BREAKS = {"\u0085", "\u2028", "\u2029"}


def _needs_character_id(char: str) -> bool:
    return char in _LINE_BREAKS or unicodedata.category(char) == "Cc"


def escape_applescript_string(raw: str) -> str:
    """Escape ``raw`` for use between the double quotes of an AppleScript literal.

    Backslash, double quote, newline, carriage return and tab get their
    backslash escapes. Any other control character is spliced in as
    ``" & (character id N) & "``, which is still a single string expression
    once the caller wraps the result in quotes.
    """
    if not isinstance(raw, str):
        raise TypeError(f"expected str, got {type(raw).__name__}")
    parts: list[str] = []
    for char in raw:
        escaped = _SIMPLE_ESCAPES.get(char)
        if escaped is not None:
            parts.append(escaped)
        elif _needs_character_id(char):
            parts.append(f'" & (character id {ord(char)}) & "')
        else:
            parts.append(char)
    return "".join(parts)


def quote_applescript_string(raw: str) -> str:
    """Return ``raw`` as a complete, double-quoted AppleScript string expression.

    When control characters forced a ``character id`` splice the expression
    is parenthesized, so object specifiers such as ``folder (...)`` receive
    the whole concatenation rather than its first literal.
    """
    literal = f'"{escape_applescript_string(raw)}"'
    if any(_needs_character_id(char) for char in raw):
        return f"({literal})"
    return literal


def quote_applescript_list(items: list[str]) -> str:
    return "{" + ", ".join(quote_applescript_string(item) for item in items) + "}"


def strip_string_literals(script: str) -> str:
    """Return ``script`` with the contents of every string literal removed.

    Line comments (``--`` and ``#``) are dropped as well. Raises
    ``ValueError`` if a literal is left open at the end of the script.
    """
    out: list[str] = []
    in_string = False
    i = 0
    length = len(script)
    while i < length:
        char = script[i]
        if in_string:
            if char == "\\":
                i += 2
                continue
            if char == '"':
                in_string = False
                out.append(char)
            i += 1
            continue
        if char == "#" or script.startswith("--", i):
            end = script.find("\n", i)
            i = length if end == -1 else end
            continue
        out.append(char)
        if char == '"':
            in_string = True
        i += 1
    if in_string:
        raise ValueError("unterminated string literal")
    return "".join(out)


ScriptFunction = Callable[[Mapping[str, Any]], str]


@dataclass(frozen=True)
class ConstantTemplate:
    """Script text that does not depend on any argument."""

    text: str

    @property
    def kind(self) -> str:
        return "constant"

    def render(self, args: Mapping[str, Any]) -> str:
        return self.text


@dataclass(frozen=True)
class ParameterizedTemplate:
    """Script text produced by a pure function of the defaulted arguments."""

    fn: ScriptFunction

    @property
    def kind(self) -> str:
        return "parameterized"

    def render(self, args: Mapping[str, Any]) -> str:
        return self.fn(args)


ScriptTemplate = Union[ConstantTemplate, ParameterizedTemplate]


def as_template(script: str | ScriptFunction | ScriptTemplate) -> ScriptTemplate:
    """Wrap a declared ``script`` value (literal text or callable) as a template."""
    if isinstance(script, (ConstantTemplate, ParameterizedTemplate)):
        return script
    if isinstance(script, str):
        return ConstantTemplate(script)
    if callable(script):
        return ParameterizedTemplate(script)
    raise TypeError(f"script must be str or callable, got {type(script).__name__}")


def dedent_script(text: str) -> str:
    """Strip the common indentation and surrounding blank lines of a script body."""
    lines = text.splitlines()
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    indents = [len(line) - len(line.lstrip()) for line in lines if line.strip()]
    margin = min(indents) if indents else 0
    return "\n".join(line[margin:].rstrip() for line in lines) + "\n"
