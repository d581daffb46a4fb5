from dataclasses import dataclass, fields, replace

from asciify.charsets import DEFAULT


class InvalidConfiguration(ValueError):
    """Raised when conversion options cannot describe a valid output grid."""


@dataclass(frozen=True)
class ConvertOptions:
    width: int = 80
    height: int = 0  # 0 derives rows from the source aspect ratio
    charset: str = DEFAULT
    colored: bool = False
    inverted: bool = False

    def __post_init__(self):
        if isinstance(self.width, bool) or not isinstance(self.width, int) or self.width <= 0:
            raise InvalidConfiguration(f"width must be a positive integer, got {self.width!r}")
        if isinstance(self.height, bool) or not isinstance(self.height, int) or self.height < 0:
            raise InvalidConfiguration(f"height must be a non-negative integer, got {self.height!r}")
        if not isinstance(self.charset, str) or not self.charset:
            raise InvalidConfiguration("charset must contain at least one character")

    def override(self, **changes) -> "ConvertOptions":
        """Return a copy with every non-None change applied to its field.

        None means the option was not given and the current value is kept.
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(changes) - known)
        if unknown:
            raise InvalidConfiguration(f"Unknown option(s): {', '.join(unknown)}")
        return replace(self, **{name: value for name, value in changes.items() if value is not None})


DEFAULT_OPTIONS = ConvertOptions()


def build_options(**overrides) -> ConvertOptions:
    return DEFAULT_OPTIONS.override(**overrides)
