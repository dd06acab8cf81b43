"""CLI entrypoint for checking the top-level shape of VPM index documents.

Only the document envelope is checked here. Individual package and version
entries are filtered while merging (see parsers/index_json.py), so one bad
entry does not discard the rest of an index.
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

INDEX_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "VPM repository index",
    "type": "object",
    "required": ["packages"],
    "properties": {
        "packages": {"type": "object"},
    },
}


class IndexSchemaError(ValueError):
    """Raised when an index document does not match INDEX_SCHEMA."""


def _format_errors(errors: Iterable[ValidationError]) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def validate_index_document(document: Any) -> None:
    """Raise IndexSchemaError listing every schema violation in ``document``."""
    validator = Draft202012Validator(INDEX_SCHEMA)
    errors = sorted(validator.iter_errors(document), key=lambda e: [str(p) for p in e.path])
    if errors:
        raise IndexSchemaError("\n" + _format_errors(errors))


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="Path to the index JSON document to validate",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        document = json.loads(args.input.read_text(encoding="utf-8"))
        validate_index_document(document)
    except FileNotFoundError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as exc:
        print(f"ERROR: Failed to read JSON: {exc}", file=sys.stderr)
        return 1
    except IndexSchemaError as exc:
        print(f"ERROR: Index failed validation:{exc}", file=sys.stderr)
        return 1

    print(f"Index {args.input} is valid")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
