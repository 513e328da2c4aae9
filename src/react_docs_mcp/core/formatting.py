"""Markdown rendering for component analyses.

Both functions here are pure: the same analysis always renders to the same
bytes, which keeps golden-output tests stable.
"""

from __future__ import annotations

from typing import List, Optional

from react_docs_mcp.core.models import (
    ArrayProp,
    Component,
    ComponentAnalysis,
    FunctionProp,
    ObjectProp,
    PropDescriptor,
)

NO_COMPONENTS = "**No components found**"
NO_PROPS = "*No props*"
OPTIONAL_MARK = "✓"
REQUIRED_MARK = "✗"

_TABLE_HEADER = "| Prop | Type | Optional | Default |\n|------|------|----------|--------|\n"


def format_prop_type(descriptor: PropDescriptor) -> str:
    """Render a prop type as a markdown token.

    Arrays with a known element type nest as ``array<...>``; named object
    types render their name, anonymous ones render ``object``.

    Example:
        >>> format_prop_type(ArrayProp(element_type=ObjectProp(props={}, type_name="Foo")))
        'array<`Foo`>'
    """
    # Unwrap array layers first so deep nesting never grows the call stack.
    depth = 0
    current = descriptor
    while isinstance(current, ArrayProp) and current.element_type is not None:
        depth += 1
        current = current.element_type

    if isinstance(current, ObjectProp) and current.props is not None:
        leaf = f"`{current.type_name}`" if current.type_name else "`object`"
    elif isinstance(current, FunctionProp):
        leaf = "`function`"
    else:
        leaf = f"`{current.type}`"

    return "array<" * depth + leaf + ">" * depth


def _render_component(component: Component) -> str:
    parts: List[str] = [f"## {component.name}\n\n"]

    if component.wrapper_fn:
        parts.append(f"*Wrapped with: {component.wrapper_fn}*\n\n")

    parts.append("### Props\n\n")

    if not component.props:
        parts.append(f"{NO_PROPS}\n\n")
        return "".join(parts)

    parts.append(_TABLE_HEADER)
    for prop_name, prop in component.props.items():
        optional = OPTIONAL_MARK if prop.optional else REQUIRED_MARK
        default = f"`{prop.default_value}`" if prop.default_value is not None else ""
        parts.append(
            f"| `{prop_name}` | {format_prop_type(prop)} | {optional} | {default} |\n"
        )
    parts.append("\n")
    return "".join(parts)


def render_component_markdown(analysis: Optional[ComponentAnalysis]) -> str:
    """Render every component of one file as a markdown section."""
    if analysis is None or not analysis.components:
        return NO_COMPONENTS
    return "".join(_render_component(component) for component in analysis.components)
