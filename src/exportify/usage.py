# exportify/usage.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Usage dictionary file I/O.

The file maps package names to UsageRecord JSON:

    {
      "@scope/ui": {
        "package": "@scope/ui",
        "versionRequirement": "^2.0.0",
        "importPaths": [".", "./lib/Button"]
      }
    }
"""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .errors import UsageFileError
from .models import UsageDictionary, UsageRecord

logger = logging.getLogger(__name__)


def parse_usage_dictionary(data: object, log: Optional[logging.Logger] = None) -> UsageDictionary:
    """Validate raw usage JSON record by record.

    Records that fail validation are dropped with a warning so one bad entry
    does not discard the rest of the file.

    Raises:
        UsageFileError: If the top level is not a JSON object.
    """
    log = log or logger
    if not isinstance(data, dict):
        raise UsageFileError("Usage file must contain a JSON object")

    records: UsageDictionary = {}
    for name, raw in data.items():
        if isinstance(raw, dict):
            # The key is authoritative when the record omits its own name
            raw = {"package": name, **raw}
        try:
            records[name] = UsageRecord.model_validate(raw)
        except ValidationError as e:
            log.warning(f"Ignoring malformed usage record for {name}: {e.error_count()} errors")
    return records


def load_usage_file(usage_file: Path, log: Optional[logging.Logger] = None) -> UsageDictionary:
    """Read a usage dictionary.

    Raises:
        UsageFileError: If the file is missing, unreadable or not JSON.
    """
    try:
        with open(usage_file, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise UsageFileError(f"Usage file not found: {usage_file}") from e
    except OSError as e:
        raise UsageFileError(f"Cannot read usage file {usage_file}: {e}") from e
    except ValueError as e:
        raise UsageFileError(f"Invalid JSON in usage file {usage_file}: {e}") from e
    return parse_usage_dictionary(data, log)


def save_usage_file(usage_file: Path, records: UsageDictionary) -> None:
    """Write a usage dictionary with sorted import paths and 2-space indent."""
    payload = {name: record.to_json_dict() for name, record in records.items()}
    Path(usage_file).write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
