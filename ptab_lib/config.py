# --- ptab_lib/config.py ---
"""
ptab_lib/config.py: Extraction options, their validation and file loading.
"""
import configparser
import logging
from dataclasses import asdict, dataclass, fields

from .constants import DEFAULT_OPTIONS, OPTIONS_FILE_SECTION

log = logging.getLogger("ptab.config")

_TRUE_WORDS = {"true", "yes", "on"}
_FALSE_WORDS = {"false", "no", "off"}


class ConfigurationError(ValueError):
    """Raised when extraction options are malformed."""


@dataclass
class ExtractorOptions:
    """The recognized extraction options and their defaults."""

    remove_page_headers: bool = DEFAULT_OPTIONS["remove_page_headers"]
    remove_page_footers: bool = DEFAULT_OPTIONS["remove_page_footers"]
    remove_pagination_from_header: bool | int = DEFAULT_OPTIONS[
        "remove_pagination_from_header"
    ]
    remove_pagination_from_footer: bool | int = DEFAULT_OPTIONS[
        "remove_pagination_from_footer"
    ]
    remove_empty_lines: bool = DEFAULT_OPTIONS["remove_empty_lines"]
    position_tolerance: int = DEFAULT_OPTIONS["position_tolerance"]

    def __post_init__(self):
        self.validate()

    @classmethod
    def field_names(cls) -> set[str]:
        return {f.name for f in fields(cls)}

    @classmethod
    def from_dict(cls, overrides=None):
        """Builds options from a mapping, merged over the defaults."""
        return cls().merged_with(overrides)

    def merged_with(self, overrides):
        """Returns a copy with `overrides` applied on top of these options.

        Keys that are not option names are ignored.
        """
        known = self.field_names()
        values = self.to_dict()
        for key, value in (overrides or {}).items():
            if key in known:
                values[key] = value
            else:
                log.debug("Ignoring unrecognized option '%s'.", key)
        return ExtractorOptions(**values)

    def to_dict(self) -> dict:
        return asdict(self)

    def validate(self):
        """Raises ConfigurationError for any malformed option value."""
        for name in ("remove_page_headers", "remove_page_footers", "remove_empty_lines"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ConfigurationError(f"'{name}' must be a boolean, got {value!r}.")

        for name in ("remove_pagination_from_header", "remove_pagination_from_footer"):
            value = getattr(self, name)
            if isinstance(value, bool):
                continue
            if not isinstance(value, int) or value < 1:
                raise ConfigurationError(
                    f"'{name}' must be a boolean or a line number >= 1, got {value!r}."
                )

        tolerance = self.position_tolerance
        if isinstance(tolerance, bool) or not isinstance(tolerance, int):
            raise ConfigurationError(
                f"'position_tolerance' must be an integer, got {tolerance!r}."
            )
        if tolerance < 0:
            raise ConfigurationError(
                f"'position_tolerance' must not be negative, got {tolerance}."
            )

    @property
    def removes_pagination(self) -> bool:
        return bool(self.remove_pagination_from_header or self.remove_pagination_from_footer)


def _coerce_value(raw: str):
    """Converts an INI string into a boolean, an integer or leaves it as is."""
    value = raw.strip()
    lowered = value.lower()
    if lowered in _TRUE_WORDS:
        return True
    if lowered in _FALSE_WORDS:
        return False
    try:
        return int(value)
    except ValueError:
        return value


def load_options_file(config_path: str) -> dict:
    """Reads option overrides from the [Extraction] section of an INI file.

    Returns a dict of overrides; a missing file or section yields no overrides.
    """
    config = configparser.ConfigParser()
    try:
        read_ok = config.read(config_path)
    except configparser.Error as e:
        raise ConfigurationError(f"Could not parse options file {config_path}: {e}") from e
    if not read_ok:
        log.info("Options file not found at %s. Using defaults.", config_path)
        return {}
    if not config.has_section(OPTIONS_FILE_SECTION):
        log.warning(
            "Options file %s has no [%s] section. Using defaults.",
            config_path,
            OPTIONS_FILE_SECTION,
        )
        return {}

    overrides = {k: _coerce_value(v) for k, v in config.items(OPTIONS_FILE_SECTION)}
    log.debug("Loaded %d option(s) from %s", len(overrides), config_path)
    return overrides
