#!/usr/bin/env python3
"""
Registry Loader

Builds a frozen ``DeprecationRegistry`` from the static registry file
shipped with the host CLI (YAML or JSON). The document is checked against
the packaged JSON Schema first; each entry is then turned into a record and
registered, so duplicate ids and broken invariants fail at startup.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

import jsonschema
import yaml
from pydantic import ValidationError

from ..contracts.models import DependencyRecord, DeprecationRecord
from ..errors import InvalidRecord, RegistryLoadError
from ..registry import DeprecationRegistry

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[1] / "schemas" / "deprecation_registry.schema.json"


def _load_schema() -> Dict[str, Any]:
    with open(SCHEMA_PATH, encoding="utf-8") as f:
        return json.load(f)


def _schema_problems(data: Any) -> List[str]:
    validator = jsonschema.Draft7Validator(_load_schema())
    problems = []
    for error in sorted(validator.iter_errors(data), key=lambda e: list(e.path)):
        location = "/".join(str(p) for p in error.path) or "<root>"
        problems.append(f"{location}: {error.message}")
    return problems


def _entry_id(entry: Any) -> str:
    if isinstance(entry, dict):
        return str(entry.get("id", "<unknown>"))
    return "<unknown>"


def _build(model: type, entry: Dict[str, Any]) -> DeprecationRecord:
    fields = {k: v for k, v in entry.items() if k != "id"}
    try:
        return model(**fields)
    except ValidationError as e:
        problems = [
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        ]
        raise InvalidRecord(_entry_id(entry), problems) from e


def registry_from_data(data: Any) -> DeprecationRegistry:
    """Build and freeze a registry from an already parsed document."""
    if data is None:
        data = {}
    problems = _schema_problems(data)
    if problems:
        raise InvalidRecord("<registry>", problems)

    registry = DeprecationRegistry()
    for entry in data.get("features") or []:
        registry.register(entry["id"], _build(DeprecationRecord, entry))
    for entry in data.get("dependencies") or []:
        registry.register(entry["id"], _build(DependencyRecord, entry))
    return registry.freeze()


def load_registry(path: Path) -> DeprecationRegistry:
    """Load the registry file at ``path``.

    Raises:
        RegistryLoadError: file missing or not parseable
        InvalidRecord: schema or record invariant violated
        DuplicateFeature: an id appears more than once
    """
    path = Path(path)
    if not path.exists():
        raise RegistryLoadError(str(path), "file not found")

    try:
        text = path.read_text(encoding="utf-8")
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise RegistryLoadError(str(path), str(e)) from e

    registry = registry_from_data(data)
    logger.info("Loaded %d deprecation records from %s", len(registry), path)
    return registry
