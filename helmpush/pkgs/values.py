"""
Copyright (C) 2022 Red Hat, Inc.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

         http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""
import logging
from typing import Any, Dict, Iterable, List, Tuple

from helmpush.errors import InvalidOverride
from helmpush.utils.strings import split_escaped, unescape

logger = logging.getLogger(__name__)


def parse_override(override: str) -> List[Tuple[List[str], str]]:
    """Parses one --set argument into (key path, value) pairs.
    The argument can hold several comma separated pairs like
    "image.tag=1.2.3,replicas=3". Commas, dots and equal signs
    can be escaped with a backslash.
    """
    pairs: List[Tuple[List[str], str]] = []
    for item in split_escaped(override, ","):
        kv = split_escaped(item, "=", maxsplit=1)
        if len(kv) != 2:
            raise InvalidOverride(override, "expected <key>=<value> in \"{}\"".format(item))
        key, value = kv
        segments = [unescape(s) for s in split_escaped(key, ".")]
        if any(s == "" for s in segments):
            raise InvalidOverride(override, "empty key segment in \"{}\"".format(key))
        pairs.append((segments, unescape(value)))
    return pairs


def set_value(values: Dict[str, Any], path: List[str], value: str, override: str):
    current = values
    for i, segment in enumerate(path[:-1]):
        child = current.get(segment)
        if child is None:
            child = {}
            current[segment] = child
        elif not isinstance(child, dict):
            raise InvalidOverride(
                override,
                "{} is not a map, can not set {}".format(
                    ".".join(path[:i + 1]), ".".join(path)
                )
            )
        current = child
    current[path[-1]] = value


def apply_overrides(values: Any, overrides: Iterable[str]) -> Dict[str, Any]:
    """Merges the overrides into the values document in the given order,
    so the last one wins for a key given more than once. All overrides
    are parsed before the document is touched.
    """
    parsed = [(o, parse_override(o)) for o in overrides]
    if values is None:
        values = {}
    if not isinstance(values, dict) and parsed:
        raise InvalidOverride(
            parsed[0][0], "values document is a {}, not a map".format(type(values).__name__)
        )
    for override, pairs in parsed:
        for path, value in pairs:
            logger.debug("Overriding value %s", ".".join(path))
            set_value(values, path, value, override)
    return values
