# SPDX-License-Identifier: MPL-2.0
# Copyright 2020-2022 John Mille <john@compose-x.io>

"""
Most commonly used functions shared across all modules.
"""

from __future__ import annotations

import re
from copy import deepcopy

NONALPHANUM = re.compile(r"([^a-zA-Z\d]+)")


def merge_definitions(*definitions: dict) -> dict:
    """
    Right-biased deep merge of the given definitions into a new dict.
    Nested dicts are merged key by key, any other value from the right-most definition replaces the previous one.
    None of the input definitions is modified.

    :param definitions: the definitions, by increasing priority
    :return: the merged definition
    :rtype: dict
    """
    merged: dict = {}
    for definition in definitions:
        if not definition:
            continue
        if not isinstance(definition, dict):
            raise TypeError("Definition must be of type", dict, "got", type(definition))
        for key, value in definition.items():
            if isinstance(value, dict) and isinstance(merged.get(key), dict):
                merged[key] = merge_definitions(merged[key], value)
            else:
                merged[key] = deepcopy(value)
    return merged


def _merge_value(current, new):
    if isinstance(current, dict) and isinstance(new, dict):
        return deep_update(current, new)
    if isinstance(current, list) and isinstance(new, list):
        for index, item in enumerate(new):
            if index < len(current):
                current[index] = _merge_value(current[index], item)
            else:
                current.append(deepcopy(item))
        return current
    return deepcopy(new)


def deep_update(target: dict, source: dict) -> dict:
    """
    Deep merges source into target, in place. Dicts are merged key by key, lists index by index,
    and for everything else the value from source wins. Keys only present in target are left untouched.

    :param dict target: the dict to update
    :param dict source: the values to merge on top
    :return: target, updated
    :rtype: dict
    """
    for key, value in source.items():
        if key in target:
            target[key] = _merge_value(target[key], value)
        else:
            target[key] = deepcopy(value)
    return target
