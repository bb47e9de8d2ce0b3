# exportify/exports/conditions.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Conditional export entries.

Node picks the first matching condition in key order, so the order of keys
is part of the entry's meaning. ExportConditions fixes that order in its
field layout; callers only say which values they have.
"""

from dataclasses import dataclass, fields, replace
from typing import Iterator, Optional, Union

# What a single exports map value looks like once serialized
ExportValue = Union[str, dict[str, str]]

CONDITION_ORDER = ("source", "types", "import", "require", "browser", "default")


@dataclass(frozen=True)
class ExportConditions:
    """An immutable, canonically ordered set of export conditions.

    Empty strings and None both mean "absent".

    Example:
        >>> ExportConditions(default="./lib/a.js", types="./lib/a.d.ts").to_dict()
        {'types': './lib/a.d.ts', 'default': './lib/a.js'}
        >>> ExportConditions(default="./lib/a.js").to_export_value()
        './lib/a.js'
    """

    # Field order is the serialization order
    source: Optional[str] = None
    types: Optional[str] = None
    import_: Optional[str] = None
    require: Optional[str] = None
    browser: Optional[str] = None
    default: Optional[str] = None

    def items(self) -> Iterator[tuple[str, str]]:
        """Populated (condition, path) pairs in canonical order."""
        for f in fields(self):
            value = getattr(self, f.name)
            if value:
                yield f.name.rstrip("_"), value

    def to_dict(self) -> dict[str, str]:
        return dict(self.items())

    def to_export_value(self) -> ExportValue:
        """Serialize for an exports map.

        A lone `default` collapses to a bare string. Anything else stays an
        object, including an entry with no conditions at all.
        """
        conditions = self.to_dict()
        if list(conditions) == ["default"]:
            return conditions["default"]
        return conditions

    def with_values(self, **values: Optional[str]) -> "ExportConditions":
        """Copy with some conditions replaced. Use import_ for `import`."""
        return replace(self, **values)

    def __bool__(self) -> bool:
        return any(True for _ in self.items())
