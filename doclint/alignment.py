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

"""Library for comparing extracted documentation understanding with intent.

In the context of this module, "alignment" is the agreement between what a
model extracted from documentation (an `ExtractionRecord`) and what the author
intended the documentation to convey (a plain mapping of dimension name to
value). Each comparable dimension is classified independently:

- both sides absent: aligned (neither side says anything, so they agree)
- one side absent: `missing_in_extraction` or `missing_in_intended`
- both present: aligned when the key-term Jaccard similarity is strictly
  greater than SIMILARITY_THRESHOLD, otherwise `mismatch`

Usage example:
    result = alignment.compare(record, {"capability": "Resize images"})
    print(result.alignment_score, result.recommendation)
"""

from collections.abc import Mapping, Sequence, Set
import decimal
from typing import Any

from absl import logging

from doclint import data
from doclint import tokenizer

SIMILARITY_THRESHOLD = 0.5

ALIGNED_RECOMMENDATION = "Documentation aligns well with intent"
REVIEW_RECOMMENDATION_PREFIX = "Review these dimensions: "


def is_absent(value: Any) -> bool:
  """Returns True if a dimension value carries no content.

  None, the empty string, and sequences or mappings whose items are all absent
  (including empty ones) are absent. Whitespace, zero and False are values.

  Args:
    value: The dimension value.
  """
  if value is None:
    return True
  if isinstance(value, str):
    return not value
  if isinstance(value, Mapping):
    return all(is_absent(item) for item in value.values())
  if isinstance(value, (Sequence, Set)) and not isinstance(
      value, (bytes, bytearray)
  ):
    return all(is_absent(item) for item in value)
  return False


def round_similarity(score: float) -> float:
  """Rounds to two decimals with ties going up, so 0.125 becomes 0.13."""
  return float(
      decimal.Decimal(score).quantize(
          decimal.Decimal("0.01"), rounding=decimal.ROUND_HALF_UP
      )
  )


def jaccard_similarity(left: Set[str], right: Set[str]) -> float:
  """Intersection over union of two term sets; 0.0 when both are empty."""
  union = left | right
  if not union:
    return 0.0
  return len(left & right) / len(union)


def similarity(extracted: Any, intended: Any) -> float:
  """Key-term similarity of two dimension values.

  Args:
    extracted: The extracted value.
    intended: The intended value.

  Returns:
    Jaccard similarity in [0, 1] of the values' key-term sets.
  """
  return jaccard_similarity(
      tokenizer.key_terms(tokenizer.canonicalize(extracted)),
      tokenizer.key_terms(tokenizer.canonicalize(intended)),
  )


def compare_dimension(
    dimension: data.Dimension, extracted: Any, intended: Any
) -> data.Mismatch | None:
  """Classifies a single dimension.

  Args:
    dimension: The dimension being compared.
    extracted: The extracted value, possibly absent.
    intended: The intended value, possibly absent.

  Returns:
    None if the dimension is aligned, otherwise the Mismatch describing it.
  """
  extracted_absent = is_absent(extracted)
  intended_absent = is_absent(intended)

  if extracted_absent and intended_absent:
    logging.debug("Dimension %s absent on both sides.", dimension.value)
    return None

  if extracted_absent or intended_absent:
    issue = (
        data.IssueKind.MISSING_IN_EXTRACTION
        if extracted_absent
        else data.IssueKind.MISSING_IN_INTENDED
    )
    logging.debug("Dimension %s: %s", dimension.value, issue.value)
    return data.Mismatch(
        dimension=dimension,
        issue=issue,
        extracted=None if extracted_absent else extracted,
        intended=None if intended_absent else intended,
    )

  score = similarity(extracted, intended)
  logging.debug("Dimension %s similarity: %.4f", dimension.value, score)
  if score > SIMILARITY_THRESHOLD:
    return None

  return data.Mismatch(
      dimension=dimension,
      issue=data.IssueKind.MISMATCH,
      extracted=extracted,
      intended=intended,
      similarity=round_similarity(score),
  )


def recommend(mismatches: Sequence[data.Mismatch]) -> str:
  if not mismatches:
    return ALIGNED_RECOMMENDATION
  return REVIEW_RECOMMENDATION_PREFIX + ", ".join(
      m.dimension.value for m in mismatches
  )


def _extraction_values(extracted: Any) -> Mapping[str, Any]:
  if isinstance(extracted, data.ExtractionRecord):
    return extracted.extraction
  if isinstance(extracted, Mapping):
    values = extracted.get(data.EXTRACTION_KEY)
    if isinstance(values, Mapping):
      return values
  return {}


def compare(extracted: Any, intended: Any) -> data.AlignmentResult:
  """Compares an extraction against the intended understanding.

  Inputs are loosely typed and never rejected: anything that does not have the
  expected shape contributes absent values.

  Args:
    extracted: An ExtractionRecord, or a mapping with an `extraction`
      sub-mapping (the `lint` tool output).
    intended: A mapping of dimension name to intended value.

  Returns:
    The AlignmentResult over data.COMPARABLE_DIMENSIONS.
  """
  extracted_values = _extraction_values(extracted)
  intended_values = intended if isinstance(intended, Mapping) else {}

  mismatches = []
  aligned = 0
  for dimension in data.COMPARABLE_DIMENSIONS:
    mismatch = compare_dimension(
        dimension,
        extracted_values.get(dimension.value),
        intended_values.get(dimension.value),
    )
    if mismatch is None:
      aligned += 1
    else:
      mismatches.append(mismatch)

  result = data.AlignmentResult(
      aligned_dimensions=aligned,
      total_dimensions=len(data.COMPARABLE_DIMENSIONS),
      mismatches=tuple(mismatches),
      recommendation=recommend(mismatches),
  )
  logging.info(
      "Aligned %d of %d dimensions (score %s).",
      result.aligned_dimensions,
      result.total_dimensions,
      result.alignment_score,
  )
  return result
