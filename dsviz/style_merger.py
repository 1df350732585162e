# style_merger.py
#
# Recursive merge of an override dict onto a base dict (styles or settings).

import copy


def merge_styles(base: dict, overrides: dict) -> dict:
    """
    Merge overrides into a deep copy of base.
    Nested dicts are merged key by key; any other value in overrides replaces the base value.
    """
    merged = copy.deepcopy(base)
    for key, value in (overrides or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_styles(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged
