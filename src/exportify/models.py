# exportify/models.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Data models for package metadata and import usage.

PackageDescriptor is a read-only view of the package.json fields the
inference engine consumes. UsageRecord is one package's entry in the usage
dictionary produced by `exportify evaluate`.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# Subpath key ("." or "./...") -> bare path string or conditions object.
# Hand-authored exports may nest further, so values are left untyped.
ExportsMap = dict[str, Any]

BrowserField = Union[str, dict[str, Union[str, bool]]]

_STRING_FIELDS = ("name", "main", "module", "types", "typings", "source", "type")


class PackageDescriptor(BaseModel):
    """The package.json fields relevant to exports inference.

    Unknown keys are kept (extra="allow") so the descriptor can be built from
    a full package.json without losing anything, but the descriptor itself is
    never written back; the fix command patches the raw JSON instead.

    Fields with the wrong JSON type (e.g. a numeric "main") are dropped
    rather than rejected, so a sloppy package.json still yields a descriptor.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    name: Optional[str] = None
    main: Optional[str] = None
    module: Optional[str] = None
    types: Optional[str] = None
    typings: Optional[str] = None
    browser: Optional[BrowserField] = None
    source: Optional[str] = None
    exports: Optional[Any] = None
    package_type: Optional[str] = Field(default=None, alias="type")
    private: Optional[bool] = None

    @model_validator(mode="before")
    @classmethod
    def _drop_malformed_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        cleaned = dict(data)
        for key in _STRING_FIELDS:
            if key in cleaned and not isinstance(cleaned[key], str):
                del cleaned[key]

        browser = cleaned.get("browser")
        if isinstance(browser, dict):
            # Only string targets and the `false` block marker are meaningful
            cleaned["browser"] = {
                k: v for k, v in browser.items()
                if isinstance(v, str) or v is False
            }
        elif browser is not None and not isinstance(browser, str):
            del cleaned["browser"]

        if "private" in cleaned and not isinstance(cleaned["private"], bool):
            del cleaned["private"]
        return cleaned

    @property
    def types_field(self) -> Optional[str]:
        """The `types` field, falling back to the legacy `typings` field."""
        return self.types or self.typings

    @classmethod
    def from_package_json(cls, data: dict[str, Any]) -> "PackageDescriptor":
        """Build a descriptor from parsed package.json content."""
        return cls.model_validate(data)


class UsageRecord(BaseModel):
    """Aggregated import evidence for one package.

    import_paths has set semantics: duplicates are collapsed on construction
    and add_path ignores paths already present. Paths are package-relative,
    either "." or "./sub/path".
    """

    model_config = ConfigDict(populate_by_name=True)

    package: str
    version_requirement: Optional[str] = Field(default=None, alias="versionRequirement")
    import_paths: list[str] = Field(default_factory=list, alias="importPaths")

    @field_validator("import_paths")
    @classmethod
    def _dedupe_paths(cls, paths: list[str]) -> list[str]:
        return list(dict.fromkeys(paths))

    def add_path(self, import_path: str) -> bool:
        """Record an import path. Returns True if it was new."""
        if import_path in self.import_paths:
            return False
        self.import_paths.append(import_path)
        return True

    def to_json_dict(self) -> dict[str, Any]:
        """Serialize in usage-file form, with import paths sorted."""
        data: dict[str, Any] = {"package": self.package}
        if self.version_requirement:
            data["versionRequirement"] = self.version_requirement
        data["importPaths"] = sorted(self.import_paths)
        return data


# Package name -> usage record, as persisted in the usage file
UsageDictionary = dict[str, UsageRecord]


@dataclass(frozen=True)
class PackageInfo:
    """A package discovered on disk."""

    name: str
    path: Path  # Directory containing package.json
    package_json_path: Path
