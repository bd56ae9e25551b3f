"""Page geometry and pagination options."""

from __future__ import annotations

from dataclasses import dataclass, fields
import re
from typing import Mapping

from ..errors import ConfigurationError
from .flow_constants import PT_PER_PX, PX_PER_INCH

_LENGTH_RE = re.compile(r"^\s*(\d+(?:\.\d+)?|\.\d+)\s*(in|px|pt|cm|mm)?\s*$")
_UNITS_PER_INCH = {
    "in": 1.0,
    "px": PX_PER_INCH,
    "pt": PX_PER_INCH * PT_PER_PX,
    "cm": 2.54,
    "mm": 25.4,
}
_LENGTH_FIELDS = {
    "page_width",
    "page_height",
    "padding_top",
    "padding_bottom",
    "padding_left",
    "padding_right",
}
_INT_FIELDS = {"page_start_number"}
_NUMBER_FIELDS = {"min_content_after_header", "header_only_threshold", "reflow_delay_ms"}
_BOOL_FIELDS = {"generate_toc", "editable"}
_TEXT_FIELDS = {"section_selector", "header_selector", "sub_header_selector"}
_BOOL_WORDS = {"true": True, "yes": True, "1": True, "false": False, "no": False, "0": False}


@dataclass(slots=True)
class FlowSettings:
    """Geometry and behaviour options for a pagination engine.

    Lengths are CSS pixels at 96 per inch.

    Example:
        >>> settings = FlowSettings()
        >>> settings.content_height > 0
        True
    """

    page_width: float = 8.5 * PX_PER_INCH
    page_height: float = 11 * PX_PER_INCH
    padding_top: float = 0.6 * PX_PER_INCH
    padding_bottom: float = 0.8 * PX_PER_INCH
    padding_left: float = 0.6 * PX_PER_INCH
    padding_right: float = 0.6 * PX_PER_INCH
    min_content_after_header: float = 200.0
    header_only_threshold: float = 100.0
    section_selector: str = ".section"
    header_selector: str = "h2"
    sub_header_selector: str = "h3"
    generate_toc: bool = True
    page_start_number: int = 1
    editable: bool = True
    reflow_delay_ms: float = 300.0

    @property
    def content_height(self) -> float:
        """Return the height budget of a page's content region.

        Returns:
            Height in pixels.
        """

        return self.page_height - self.padding_top - self.padding_bottom

    @property
    def content_width(self) -> float:
        """Return the width used when measuring blocks.

        Returns:
            Width in pixels.
        """

        return self.page_width - self.padding_left - self.padding_right

    @property
    def reflow_delay(self) -> float:
        """Return the reflow debounce delay in seconds."""

        return self.reflow_delay_ms / 1000.0

    @classmethod
    def from_options(cls, options: Mapping[str, object] | None = None) -> "FlowSettings":
        """Build settings from loosely typed options.

        Lengths accept bare numbers (inches) or strings with an ``in``,
        ``px``, ``pt``, ``cm`` or ``mm`` unit. ``padding_x`` sets both
        horizontal paddings unless ``padding_left``/``padding_right`` are
        also given. ``None`` values keep the defaults.

        Args:
            options: Mapping of option names to values.
        Returns:
            FlowSettings instance.
        Raises:
            ConfigurationError: On unknown keys, bad lengths, values of
                the wrong type or an empty content area.

        Example:
            >>> FlowSettings.from_options({"page_height": "600px",
            ...     "padding_top": 0, "padding_bottom": "0px"}).content_height
            600.0
        """

        known = {f.name for f in fields(cls)}
        values: dict[str, object] = {}
        padding_x = None
        for key, value in (options or {}).items():
            if value is None:
                continue
            if key == "padding_x":
                padding_x = parse_length(value, name=key)
                continue
            if key not in known:
                raise ConfigurationError(f"Unknown option: {key}")
            if key in _LENGTH_FIELDS:
                values[key] = parse_length(value, name=key)
            else:
                values[key] = _coerce_option(key, value)
        if padding_x is not None:
            values.setdefault("padding_left", padding_x)
            values.setdefault("padding_right", padding_x)
        settings = cls(**values)
        settings.validate()
        return settings

    def validate(self) -> None:
        """Raise ConfigurationError when the content area is empty."""

        if self.content_height <= 0:
            raise ConfigurationError(
                "Page height leaves no room for content",
                details=f"content_height={self.content_height:g}px",
            )
        if self.content_width <= 0:
            raise ConfigurationError(
                "Page width leaves no room for content",
                details=f"content_width={self.content_width:g}px",
            )


def parse_length(value: object, *, name: str = "length") -> float:
    """Return ``value`` converted to CSS pixels.

    Args:
        value: Number of inches or a string with an optional unit suffix.
        name: Option name used in error messages.
    Returns:
        Length in pixels.
    Raises:
        ConfigurationError: When the value cannot be parsed or is negative.

    Example:
        >>> parse_length("72pt")
        96.0
        >>> parse_length(0.5)
        48.0
    """

    if isinstance(value, bool):
        raise ConfigurationError(f"Invalid {name}: {value!r}")
    if isinstance(value, (int, float)):
        if value < 0:
            raise ConfigurationError(f"Invalid {name}: {value!r}")
        return float(value) * PX_PER_INCH
    if isinstance(value, str):
        match = _LENGTH_RE.match(value)
        if match:
            unit = match.group(2) or "in"
            return float(match.group(1)) * PX_PER_INCH / _UNITS_PER_INCH[unit]
    raise ConfigurationError(f"Invalid {name}: {value!r}")


def _coerce_option(key: str, value: object) -> object:
    """Return a non-length option converted to its field type.

    Numeric strings are accepted for numbers and ``"true"``/``"false"``
    style words for flags.
    """

    if key in _INT_FIELDS:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, str) and re.fullmatch(r"\s*[-+]?\d+\s*", value):
            return int(value)
    elif key in _NUMBER_FIELDS:
        number = None
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            number = float(value)
        elif isinstance(value, str):
            try:
                number = float(value)
            except ValueError:
                number = None
        if number is not None and number >= 0 and number != float("inf"):
            return number
    elif key in _BOOL_FIELDS:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in _BOOL_WORDS:
            return _BOOL_WORDS[value.strip().lower()]
    elif key in _TEXT_FIELDS:
        if isinstance(value, str) and value.strip():
            return value.strip()
    raise ConfigurationError(f"Invalid {key}: {value!r}")
