"""Path parameter converters for route segments like ``{id:int}``."""

import re

from describer.errors import ConfigurationError

# Segment regex for each supported converter
CONVERTERS: dict[str, str] = {
    "str": r"[^/]+",
    "int": r"\d+",
    "float": r"\d+(?:\.\d+)?",
    "path": r".+",
}


def param_regex(param_type: str) -> re.Pattern[str]:
    """Compile the full-segment regex for a converter name.

    Raises ``ConfigurationError`` for an unknown converter.
    """
    try:
        pattern = CONVERTERS[param_type]
    except KeyError:
        known = ", ".join(sorted(CONVERTERS))
        msg = f"Unknown path converter {param_type!r}. Known converters: {known}"
        raise ConfigurationError(msg) from None
    return re.compile(f"^{pattern}$")
