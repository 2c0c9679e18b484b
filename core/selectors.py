selectors = {
    # Field captions
    "legend": "legend",
    "label": "label",
    "label_for": 'label[for="{id}"]',  # formatted with the target id

    # Field containers, closest first
    "field_group": ".gfield",  # Gravity Forms field wrapper
    "fieldset": "fieldset",

    # Controls
    "choice_input": 'input[type="radio"], input[type="checkbox"]',
    "select": "select",
    "select_option": "option",
    "input": "input",

    # Nodes stripped when a conditional field is revealed by hand
    "reveal_inner": ".ginput_container, .ginput_container_email, input",
}

# Class Gravity Forms puts on fields hidden by conditional logic
HIDDEN_CLASS = "gform_hidden"

# Inline style properties that hide an element
HIDING_STYLE_PROPERTIES = ("display", "visibility", "opacity")


def css_attribute_value(value: str) -> str:
    """Escapes a value for use inside a double-quoted attribute selector."""
    return value.replace("\\", "\\\\").replace('"', '\\"')
