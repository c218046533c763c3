# Copyright 2025 Google LLC.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Canonical text rendering and key-term extraction for comparison.

Dimension values arrive in whatever shape a model or a caller produced: a
string, a list of strings, occasionally nested mappings. (1) `canonicalize`
renders any such value into lowercase text with a stable layout, so the same
logical value always yields the same text. (2) `key_terms` reduces that text
to the set of terms used by the similarity measure in alignment.py.
"""

from collections.abc import Mapping, Sequence, Set
import re
from typing import Any

# Shorter runs ("a", "the", "max") carry little meaning and are dropped.
MIN_TERM_LENGTH = 4

_KEY_TERM_PATTERN = re.compile(r"\b\w{%d,}\b" % MIN_TERM_LENGTH, re.ASCII)


def canonicalize(value: Any) -> str:
  """Renders a JSON-shaped value as lowercase text.

  Strings are lowercased, numbers and booleans are rendered as text, sequence
  items are rendered one per line, and mappings are rendered as `key: value`
  lines sorted by key. None renders as the empty string.

  Args:
    value: The value to render.

  Returns:
    The canonical text. Empty when the value carries no content.
  """
  if value is None:
    return ""
  if isinstance(value, str):
    return value.lower()
  if isinstance(value, bool):
    return "true" if value else "false"
  if isinstance(value, (int, float)):
    return repr(value).lower()
  if isinstance(value, Mapping):
    lines = sorted(
        f"{canonicalize(key)}: {canonicalize(item)}"
        for key, item in value.items()
    )
    return "\n".join(lines)
  if isinstance(value, Set):
    return "\n".join(sorted(canonicalize(item) for item in value))
  if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
    return "\n".join(canonicalize(item) for item in value)
  return str(value).lower()


def key_terms(text: str) -> frozenset[str]:
  """Extracts the set of key terms from canonical text.

  A key term is a maximal run of ASCII word characters at least
  MIN_TERM_LENGTH long. Duplicates collapse.

  Args:
    text: Text produced by `canonicalize`.

  Returns:
    The distinct key terms.
  """
  return frozenset(_KEY_TERM_PATTERN.findall(text))
