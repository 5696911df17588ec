import os
from typing import Any

from java_layout.models import FormatOptions

_ENV_FIELDS = {
    "print_width": "JAVA_LAYOUT_PRINT_WIDTH",
    "tab_width": "JAVA_LAYOUT_TAB_WIDTH",
    "comment_tie_break": "JAVA_LAYOUT_COMMENT_TIE_BREAK",
}


def load_options(**overrides: Any) -> FormatOptions:
    """Options from the environment, with explicit non-``None`` overrides applied on top."""
    values: dict[str, Any] = {}
    for field_name, variable in _ENV_FIELDS.items():
        value = os.getenv(variable)
        if value:
            values[field_name] = value
    values.update({key: value for key, value in overrides.items() if value is not None})
    return FormatOptions.model_validate(values)
