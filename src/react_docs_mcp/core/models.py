"""Component analysis records produced by the React analyzer.

The analyzer speaks camelCase JSON (``wrapperFn``, ``defaultValue``,
``elementType``, ``typeName``). ``ComponentAnalysis.from_dict`` converts that
payload into typed records; ``to_dict`` produces the same shape again.

Prop types are a tagged union keyed on ``type``:

* ``ArrayProp``    - ``"array"``, may carry an ``element_type``
* ``ObjectProp``   - ``"object"``, may carry nested ``props`` and a ``type_name``
* ``FunctionProp`` - ``"function"``
* ``ScalarProp``   - every other type name (``string``, ``number``, ``ReactNode``...)
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from react_docs_mcp.core.errors import AnalyzerError


@dataclass(frozen=True)
class ScalarProp:
    type: str
    optional: bool = False
    default_value: Optional[str] = None


@dataclass(frozen=True)
class FunctionProp:
    optional: bool = False
    default_value: Optional[str] = None

    @property
    def type(self) -> str:
        return "function"


@dataclass(frozen=True)
class ArrayProp:
    element_type: Optional["PropDescriptor"] = None
    optional: bool = False
    default_value: Optional[str] = None

    @property
    def type(self) -> str:
        return "array"


@dataclass(frozen=True)
class ObjectProp:
    props: Optional[Dict[str, "PropDescriptor"]] = None
    type_name: Optional[str] = None
    optional: bool = False
    default_value: Optional[str] = None

    @property
    def type(self) -> str:
        return "object"


PropDescriptor = Union[ScalarProp, FunctionProp, ArrayProp, ObjectProp]


def _default_to_str(value: Any) -> Optional[str]:
    # Falsy defaults (false, 0, "") render as a blank cell, same as a missing one
    if value is None or (isinstance(value, (str, int, float)) and not value):
        return None
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def prop_from_dict(raw: Mapping[str, Any]) -> PropDescriptor:
    """Build a PropDescriptor variant from an analyzer prop payload.

    Raises:
        AnalyzerError: If the payload is not a mapping with a string ``type``.
    """
    if not isinstance(raw, Mapping):
        raise AnalyzerError(f"Prop descriptor must be an object, got {type(raw).__name__}")
    prop_type = raw.get("type")
    if not isinstance(prop_type, str):
        raise AnalyzerError(f"Prop descriptor has no type: {raw!r}")

    optional = bool(raw.get("optional", False))
    default_value = _default_to_str(raw.get("defaultValue"))

    if prop_type == "array":
        element = raw.get("elementType")
        return ArrayProp(
            element_type=prop_from_dict(element) if element else None,
            optional=optional,
            default_value=default_value,
        )
    if prop_type == "object":
        nested = raw.get("props")
        return ObjectProp(
            props=_props_from_dict(nested) if nested is not None else None,
            type_name=raw.get("typeName") or None,
            optional=optional,
            default_value=default_value,
        )
    if prop_type == "function":
        return FunctionProp(optional=optional, default_value=default_value)
    return ScalarProp(type=prop_type, optional=optional, default_value=default_value)


def _props_from_dict(raw: Any) -> Dict[str, PropDescriptor]:
    if not isinstance(raw, Mapping):
        raise AnalyzerError(f"Props must be an object, got {type(raw).__name__}")
    return {str(name): prop_from_dict(details) for name, details in raw.items()}


def prop_to_dict(prop: PropDescriptor) -> Dict[str, Any]:
    """Serialize a PropDescriptor back into the analyzer's JSON shape."""
    data: Dict[str, Any] = {"type": prop.type, "optional": prop.optional}
    if prop.default_value is not None:
        data["defaultValue"] = prop.default_value
    if isinstance(prop, ArrayProp) and prop.element_type is not None:
        data["elementType"] = prop_to_dict(prop.element_type)
    elif isinstance(prop, ObjectProp):
        if prop.props is not None:
            data["props"] = {name: prop_to_dict(p) for name, p in prop.props.items()}
        if prop.type_name:
            data["typeName"] = prop.type_name
    return data


@dataclass(frozen=True)
class Component:
    name: str
    wrapper_fn: Optional[str] = None
    props: Dict[str, PropDescriptor] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Component":
        if not isinstance(raw, Mapping):
            raise AnalyzerError(f"Component must be an object, got {type(raw).__name__}")
        name = raw.get("name")
        if not isinstance(name, str) or not name:
            raise AnalyzerError(f"Component has no name: {raw!r}")
        props = raw.get("props")
        return cls(
            name=name,
            wrapper_fn=raw.get("wrapperFn") or None,
            props=_props_from_dict(props) if props else {},
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "props": {name: prop_to_dict(prop) for name, prop in self.props.items()},
        }
        if self.wrapper_fn:
            data["wrapperFn"] = self.wrapper_fn
        return data


@dataclass(frozen=True)
class ComponentAnalysis:
    """Everything the analyzer found in one source file."""

    components: Tuple[Component, ...] = ()

    @classmethod
    def from_dict(cls, raw: Any) -> "ComponentAnalysis":
        """Parse the analyzer's result payload.

        A payload without ``components`` is an empty analysis.

        Raises:
            AnalyzerError: If the payload is structurally invalid.
        """
        if raw is None:
            return cls()
        if not isinstance(raw, Mapping):
            raise AnalyzerError(
                f"Analysis result must be an object, got {type(raw).__name__}"
            )
        components = raw.get("components") or []
        if not isinstance(components, (list, tuple)):
            raise AnalyzerError("Analysis 'components' must be a list")
        return cls(components=tuple(Component.from_dict(item) for item in components))

    def to_dict(self) -> Dict[str, Any]:
        return {"components": [component.to_dict() for component in self.components]}
