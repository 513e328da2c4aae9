"""
Unit tests for react_docs_mcp.core.formatting.

Tests cover:
- Prop type formatting priority rules and deep array nesting
- Component markdown sections: wrapper line, props table, empty cases
- Determinism of rendered output
"""

from react_docs_mcp.core.formatting import (
    NO_COMPONENTS,
    NO_PROPS,
    format_prop_type,
    render_component_markdown,
)
from react_docs_mcp.core.models import (
    ArrayProp,
    Component,
    ComponentAnalysis,
    FunctionProp,
    ObjectProp,
    ScalarProp,
)


# =============================================================================
# format_prop_type
# =============================================================================


class TestFormatPropType:
    def test_scalar_renders_type_as_code(self):
        assert format_prop_type(ScalarProp(type="string")) == "`string`"

    def test_unknown_type_rendered_verbatim(self):
        assert format_prop_type(ScalarProp(type="ReactNode")) == "`ReactNode`"

    def test_function(self):
        assert format_prop_type(FunctionProp()) == "`function`"

    def test_named_object(self):
        prop = ObjectProp(props={"id": ScalarProp(type="number")}, type_name="User")
        assert format_prop_type(prop) == "`User`"

    def test_anonymous_object(self):
        prop = ObjectProp(props={"id": ScalarProp(type="number")})
        assert format_prop_type(prop) == "`object`"

    def test_object_without_props_ignores_type_name(self):
        assert format_prop_type(ObjectProp(type_name="User")) == "`object`"

    def test_array_of_scalars(self):
        prop = ArrayProp(element_type=ScalarProp(type="string"))
        assert format_prop_type(prop) == "array<`string`>"

    def test_array_of_named_object(self):
        prop = ArrayProp(element_type=ObjectProp(props={}, type_name="Foo"))
        assert format_prop_type(prop) == "array<`Foo`>"

    def test_array_without_element_type(self):
        assert format_prop_type(ArrayProp()) == "`array`"

    def test_nested_arrays_wrap_once_per_level(self):
        depth = 5
        prop = ScalarProp(type="number")
        for _ in range(depth):
            prop = ArrayProp(element_type=prop)
        formatted = format_prop_type(prop)
        assert formatted == "array<" * depth + "`number`" + ">" * depth
        assert formatted.count("array<") == depth

    def test_very_deep_nesting_does_not_overflow(self):
        depth = 5000
        prop = FunctionProp()
        for _ in range(depth):
            prop = ArrayProp(element_type=prop)
        formatted = format_prop_type(prop)
        assert formatted.count("array<") == depth
        assert "`function`" in formatted

    def test_is_deterministic(self):
        prop = ArrayProp(element_type=ObjectProp(props={}, type_name="Row"))
        assert format_prop_type(prop) == format_prop_type(prop)


# =============================================================================
# render_component_markdown
# =============================================================================


class TestRenderComponentMarkdown:
    def test_absent_analysis(self):
        assert render_component_markdown(None) == "**No components found**"

    def test_empty_analysis(self):
        assert render_component_markdown(ComponentAnalysis()) == NO_COMPONENTS

    def test_component_without_props(self):
        analysis = ComponentAnalysis(components=(Component(name="Spacer"),))
        markdown = render_component_markdown(analysis)
        assert markdown == "## Spacer\n\n### Props\n\n*No props*\n\n"
        assert NO_PROPS in markdown
        assert "|" not in markdown

    def test_full_component_golden_output(self):
        analysis = ComponentAnalysis(
            components=(
                Component(
                    name="Button",
                    wrapper_fn="memo",
                    props={
                        "label": ScalarProp(type="string"),
                        "size": ScalarProp(type="string", optional=True, default_value="'md'"),
                        "items": ArrayProp(
                            element_type=ObjectProp(props={}, type_name="Item"),
                            optional=True,
                        ),
                        "onClick": FunctionProp(optional=True),
                    },
                ),
            )
        )

        expected = (
            "## Button\n\n"
            "*Wrapped with: memo*\n\n"
            "### Props\n\n"
            "| Prop | Type | Optional | Default |\n"
            "|------|------|----------|--------|\n"
            "| `label` | `string` | ✗ |  |\n"
            "| `size` | `string` | ✓ | `'md'` |\n"
            "| `items` | array<`Item`> | ✓ |  |\n"
            "| `onClick` | `function` | ✓ |  |\n"
            "\n"
        )
        assert render_component_markdown(analysis) == expected

    def test_no_wrapper_line_without_wrapper(self):
        analysis = ComponentAnalysis(components=(Component(name="Card"),))
        assert "Wrapped with" not in render_component_markdown(analysis)

    def test_components_rendered_in_order(self):
        analysis = ComponentAnalysis(
            components=(Component(name="First"), Component(name="Second"))
        )
        markdown = render_component_markdown(analysis)
        assert markdown.index("## First") < markdown.index("## Second")

    def test_identical_input_identical_bytes(self):
        def build():
            return ComponentAnalysis(
                components=(
                    Component(
                        name="List",
                        props={
                            "rows": ArrayProp(element_type=ScalarProp(type="string")),
                            "dense": ScalarProp(type="boolean", default_value="false"),
                        },
                    ),
                )
            )

        assert render_component_markdown(build()).encode() == render_component_markdown(
            build()
        ).encode()

    def test_boolean_defaults_from_analyzer_payload(self):
        analysis = ComponentAnalysis.from_dict(
            {
                "components": [
                    {
                        "name": "Switch",
                        "props": {
                            "on": {"type": "boolean", "optional": True, "defaultValue": False},
                            "live": {"type": "boolean", "optional": True, "defaultValue": True},
                        },
                    }
                ]
            }
        )
        markdown = render_component_markdown(analysis)
        assert "| `on` | `boolean` | ✓ |  |\n" in markdown
        assert "| `live` | `boolean` | ✓ | `true` |\n" in markdown
