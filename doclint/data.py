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

"""Classes used to represent core data types of the linting pipeline."""

from collections.abc import Mapping
import dataclasses
import enum
from typing import Any

from absl import logging

EXTRACTION_KEY = "extraction"
CONFIDENCE_KEY = "confidence"
GAPS_KEY = "gaps"
OVERALL_CONFIDENCE_KEY = "overall_confidence"
TOOL_NAME_KEY = "tool_name"
EVALUATED_AT_KEY = "evaluated_at"

_RECORD_KEYS = frozenset({
    EXTRACTION_KEY,
    CONFIDENCE_KEY,
    GAPS_KEY,
    OVERALL_CONFIDENCE_KEY,
    TOOL_NAME_KEY,
    EVALUATED_AT_KEY,
})


class FormatType(enum.Enum):
  """Enumeration of prompt template file formats."""

  YAML = "yaml"
  JSON = "json"


class Dimension(enum.Enum):
  """Aspects of documented tool behavior."""

  CAPABILITY = "capability"
  INPUTS = "inputs"
  OUTPUTS = "outputs"
  WHEN_TO_USE = "when_to_use"
  WHEN_NOT_TO_USE = "when_not_to_use"
  CONSTRAINTS = "constraints"
  INVOCATION = "invocation"


# Invocation examples are extracted but never compared.
COMPARABLE_DIMENSIONS = (
    Dimension.CAPABILITY,
    Dimension.INPUTS,
    Dimension.OUTPUTS,
    Dimension.WHEN_TO_USE,
    Dimension.WHEN_NOT_TO_USE,
    Dimension.CONSTRAINTS,
)


class IssueKind(enum.Enum):
  MISSING_IN_EXTRACTION = "missing_in_extraction"
  MISSING_IN_INTENDED = "missing_in_intended"
  MISMATCH = "mismatch"


def _is_float(value: Any) -> bool:
  return isinstance(value, (int, float)) and not isinstance(value, bool)


# Model-owned members and the shape each must have to be read into a field.
_MEMBER_SHAPES = (
    (EXTRACTION_KEY, lambda v: isinstance(v, Mapping)),
    (CONFIDENCE_KEY, lambda v: isinstance(v, Mapping)),
    (GAPS_KEY, lambda v: isinstance(v, list)),
    (OVERALL_CONFIDENCE_KEY, lambda v: v is None or _is_float(v)),
)


@dataclasses.dataclass(frozen=True)
class ExtractionRecord:
  """What a language model understood from a piece of documentation.

  Frozen is shallow: fields cannot be reassigned, but the mappings and lists
  they hold are ordinary containers. `to_dict` returns copies of them.

  Attributes:
    extraction: Mapping of dimension name to the extracted value. Values keep
      whatever shape the model produced (string, list of strings, ...).
    confidence: Mapping of dimension name to a confidence score in [0, 1].
    gaps: Things the model wanted to know but could not find.
    overall_confidence: Overall confidence score, if reported.
    tool_name: Provenance label of the documented tool.
    evaluated_at: ISO-8601 UTC timestamp of when the extraction was produced.
    extra: Any other top-level fields of the model reply, passed through.
      Known members with the wrong shape are kept here too, so `to_dict`
      reproduces them unchanged.
  """

  extraction: dict[str, Any] = dataclasses.field(default_factory=dict)
  confidence: dict[str, Any] = dataclasses.field(default_factory=dict)
  gaps: list[Any] = dataclasses.field(default_factory=list)
  overall_confidence: float | None = None
  tool_name: str | None = None
  evaluated_at: str | None = None
  extra: dict[str, Any] = dataclasses.field(default_factory=dict)

  def get(self, dimension: Dimension) -> Any:
    """Returns the extracted value for a dimension, or None."""
    return self.extraction.get(dimension.value)

  @classmethod
  def from_dict(cls, payload: Any) -> "ExtractionRecord":
    """Builds a record from loosely-typed, JSON-shaped input.

    Never raises. A known member of the wrong shape leaves its field empty
    and is kept verbatim in `extra`.

    Args:
      payload: Typically the parsed model reply or a `lint` tool result.

    Returns:
      An ExtractionRecord.
    """
    payload = dict(payload) if isinstance(payload, Mapping) else {}
    fields = {}
    extra = {k: v for k, v in payload.items() if k not in _RECORD_KEYS}
    for key, has_shape in _MEMBER_SHAPES:
      if key not in payload:
        continue
      value = payload[key]
      if has_shape(value):
        fields[key] = value
      else:
        logging.warning(
            "Member '%s' has unexpected type %s; passing it through.",
            key,
            type(value).__name__,
        )
        extra[key] = value

    tool_name = payload.get(TOOL_NAME_KEY)
    evaluated_at = payload.get(EVALUATED_AT_KEY)
    overall_confidence = fields.get(OVERALL_CONFIDENCE_KEY)
    return cls(
        extraction=dict(fields.get(EXTRACTION_KEY, {})),
        confidence=dict(fields.get(CONFIDENCE_KEY, {})),
        gaps=list(fields.get(GAPS_KEY, [])),
        overall_confidence=(
            None if overall_confidence is None else float(overall_confidence)
        ),
        tool_name=tool_name if isinstance(tool_name, str) else None,
        evaluated_at=evaluated_at if isinstance(evaluated_at, str) else None,
        extra=extra,
    )

  def to_dict(self) -> dict[str, Any]:
    result = {
        EXTRACTION_KEY: dict(self.extraction),
        CONFIDENCE_KEY: dict(self.confidence),
        GAPS_KEY: list(self.gaps),
        OVERALL_CONFIDENCE_KEY: self.overall_confidence,
    }
    result.update(self.extra)
    result[TOOL_NAME_KEY] = self.tool_name
    result[EVALUATED_AT_KEY] = self.evaluated_at
    return result


@dataclasses.dataclass(frozen=True)
class Mismatch:
  """Comparison outcome for one dimension that did not align.

  Attributes:
    dimension: The compared dimension.
    issue: Why the dimension did not align.
    extracted: The extracted value, or None when it was absent.
    intended: The intended value, or None when it was absent.
    similarity: Key-term similarity rounded to two decimals. Only set for
      IssueKind.MISMATCH.
  """

  dimension: Dimension
  issue: IssueKind
  extracted: Any = None
  intended: Any = None
  similarity: float | None = None

  def to_dict(self) -> dict[str, Any]:
    result: dict[str, Any] = {
        "dimension": self.dimension.value,
        "issue": self.issue.value,
    }
    if self.similarity is not None:
      result["similarity"] = self.similarity
    result["extracted"] = self.extracted
    result["intended"] = self.intended
    return result


@dataclasses.dataclass(frozen=True)
class AlignmentResult:
  """Outcome of comparing an extraction against the intended understanding.

  Attributes:
    aligned_dimensions: Number of dimensions classified as aligned.
    total_dimensions: Number of compared dimensions.
    mismatches: One entry per dimension that did not align, in canonical
      dimension order.
    recommendation: Human-readable next step.
  """

  aligned_dimensions: int
  total_dimensions: int
  mismatches: tuple[Mismatch, ...] = ()
  recommendation: str = ""

  @property
  def alignment_score(self) -> str:
    """Fraction of aligned dimensions with exactly two decimals."""
    if not self.total_dimensions:
      return f"{0:.2f}"
    return f"{self.aligned_dimensions / self.total_dimensions:.2f}"

  def to_dict(self) -> dict[str, Any]:
    return {
        "alignment_score": self.alignment_score,
        "aligned_dimensions": self.aligned_dimensions,
        "total_dimensions": self.total_dimensions,
        "mismatches": [m.to_dict() for m in self.mismatches],
        "recommendation": self.recommendation,
    }
