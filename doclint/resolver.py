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

"""Library for resolving LLM output.

In the context of this module, a "resolver" is a component designed to parse
the textual reply of an LLM into an `ExtractionRecord`. Models asked for bare
JSON still occasionally wrap it in prose or code fences, so parsing runs in two
stages:

1. strict: the whole reply is parsed as JSON.
2. fallback: the span from the first "{" to the last "}" is parsed as JSON.

The first stage that yields a JSON object wins.
"""

from collections.abc import Iterator, Mapping
import json
import re
from typing import Any

from absl import logging

from doclint import data
from doclint import exceptions

_BRACED_SPAN = re.compile(r"\{.*\}", re.DOTALL)


class ResolverParsingError(exceptions.DoclintError):
  """Error raised when a model reply cannot be interpreted as an extraction."""


def _candidates(input_text: str) -> Iterator[tuple[str, str]]:
  yield "strict", input_text.strip()
  match = _BRACED_SPAN.search(input_text)
  if match:
    yield "braced", match.group(0)


def _load_object(candidate: str) -> dict[str, Any] | None:
  try:
    parsed = json.loads(candidate)
  except json.JSONDecodeError:
    return None
  return parsed if isinstance(parsed, dict) else None


class Resolver:
  """Resolver for JSON extraction replies."""

  def parse(self, input_text: str) -> dict[str, Any]:
    """Parses a model reply into a JSON object.

    Args:
      input_text: The raw model reply.

    Returns:
      The parsed JSON object.

    Raises:
      ResolverParsingError: If neither stage yields a JSON object.
    """
    if not input_text or not isinstance(input_text, str):
      raise ResolverParsingError("Model reply is empty.")

    for stage, candidate in _candidates(input_text):
      parsed = _load_object(candidate)
      if parsed is not None:
        logging.debug("Parsed model reply at %s stage.", stage)
        return parsed
      logging.debug("Model reply did not parse at %s stage.", stage)

    logging.error("Could not parse extraction response: %s", input_text)
    raise ResolverParsingError("Could not parse extraction response as JSON")

  def resolve(self, input_text: str) -> data.ExtractionRecord:
    """Resolves a model reply into an ExtractionRecord without provenance.

    Args:
      input_text: The raw model reply.

    Returns:
      The ExtractionRecord described by the reply.

    Raises:
      ResolverParsingError: If the reply is not a JSON object, or its
        `extraction` member is present but is not an object.
    """
    parsed = self.parse(input_text)

    if data.EXTRACTION_KEY not in parsed:
      logging.warning(
          "Model reply has no '%s' member; treating every dimension as"
          " absent.",
          data.EXTRACTION_KEY,
      )
    elif not isinstance(parsed[data.EXTRACTION_KEY], Mapping):
      raise ResolverParsingError(
          f"The '{data.EXTRACTION_KEY}' member must be a JSON object."
      )

    return data.ExtractionRecord.from_dict(parsed)
