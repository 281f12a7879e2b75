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
from typing import List, Optional

TRUE_STRINGS = ("1", "t", "T", "TRUE", "true", "True")
FALSE_STRINGS = ("0", "f", "F", "FALSE", "false", "False")


def remove_prefix(string: str, prefix: str) -> str:
    if string and prefix and string.startswith(prefix):
        return string[len(prefix):]
    return string


def parse_bool(value: str) -> Optional[bool]:
    """Parses the boolean spellings accepted by helm and its plugins.
    Returns None when the value is not one of them.
    """
    if value in TRUE_STRINGS:
        return True
    if value in FALSE_STRINGS:
        return False
    return None


def split_escaped(string: str, sep: str, maxsplit=-1) -> List[str]:
    """Splits on sep, skipping separators escaped with a backslash.
    Escape sequences are kept as they are, use unescape() on the parts.
    """
    parts: List[str] = []
    current = []
    escaped = False
    for c in string:
        if escaped:
            current.append(c)
            escaped = False
        elif c == "\\":
            current.append(c)
            escaped = True
        elif c == sep and (maxsplit < 0 or len(parts) < maxsplit):
            parts.append("".join(current))
            current = []
        else:
            current.append(c)
    parts.append("".join(current))
    return parts


def unescape(string: str) -> str:
    result = []
    escaped = False
    for c in string:
        if escaped:
            result.append(c)
            escaped = False
        elif c == "\\":
            escaped = True
        else:
            result.append(c)
    if escaped:
        result.append("\\")
    return "".join(result)
