# validate.py
import json
from pathlib import Path
import jsonschema

from .errors import MalformedResponseError

# Envelope every engine response must follow
RESPONSE_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["type", "action"],
    "properties": {
        "type": {"type": "string", "enum": ["avl", "graph", "hash", "minheap"]},
        "action": {"type": "string"},
        "value": {},
        "outcome": {"type": ["string", "null"]},
        "message": {"type": "string"},
        "snapshot": {},
        "steps": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["action"],
                "properties": {"action": {"type": "string"}},
            },
        },
    },
    "if": {"properties": {"action": {"const": "error"}}},
    "then": {"required": ["message"]},
    "else": {"required": ["snapshot"]},
}


def validate_response(data, schema=RESPONSE_SCHEMA):
    """Validate one decoded engine response; raises MalformedResponseError on failure."""
    try:
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.exceptions.ValidationError as e:
        raise MalformedResponseError(f"Response failed validation: {e.message} (path: {list(e.path)})", cause=e) from e
    return data


def parse_response(text, schema=RESPONSE_SCHEMA):
    """Decode response text and validate it."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"Response content is not valid JSON format: {e.msg}", cause=e) from e
    return validate_response(data, schema)


def validate_response_file(json_path, schema=RESPONSE_SCHEMA):
    """Validate a recorded engine response file."""
    print(f"--- Validating: {Path(json_path).name} ---")
    try:
        parse_response(Path(json_path).read_text(encoding='utf-8'), schema)
        print(f"[Success] File {Path(json_path).name} is a valid engine response.")
        return True
    except MalformedResponseError as e:
        print(f"[Failed] File {Path(json_path).name} failed validation.")
        print(f"Error: {e}")
        return False
    except FileNotFoundError:
        print(f"[Failed] File not found: {json_path}")
        return False


if __name__ == '__main__':
    import sys

    files = [Path(p) for p in sys.argv[1:]]
    if not files:
        print("Usage: python -m dsviz.validate <response.json> [...]")
        sys.exit(1)

    success_count = sum(1 for f in files if validate_response_file(f))
    print("\n--- Validation Complete ---")
    print(f"Total: {len(files)} files, Success: {success_count}, Failed: {len(files) - success_count}.")
