"""Serialise a Document to JSON or YAML."""

import json

import yaml

from .models import Document

FORMATS = ("json", "yaml")


def dump_document(document: Document, fmt: str = "json") -> str:
    data = document.to_openapi()
    if fmt == "json":
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    raise ValueError(f"Unknown format '{fmt}', expected one of {', '.join(FORMATS)}")
