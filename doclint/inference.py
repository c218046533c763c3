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

"""Provider contract for language model inference.

Every provider turns a batch of prompts into, per prompt, a list of
`ScoredOutput`s ordered best first. doclint only ever needs the best reply to
a single prompt, which `BaseLanguageModel.infer_one` returns.
"""

import abc
from collections.abc import Iterator, Sequence
import dataclasses

from doclint import exceptions


@dataclasses.dataclass(frozen=True)
class ScoredOutput:
  """One candidate reply from a model.

  Attributes:
    score: Provider-assigned score; hosted APIs that return a single
      candidate report 1.0.
    output: The reply text, or None if the model produced none.
  """

  score: float | None = None
  output: str | None = None


class InferenceOutputError(exceptions.InferenceError):
  """Raised when the language model produced no output text."""


class BaseLanguageModel(abc.ABC):
  """Interface implemented by every language model provider."""

  @abc.abstractmethod
  def infer(
      self, batch_prompts: Sequence[str], **kwargs
  ) -> Iterator[Sequence[ScoredOutput]]:
    """Runs the model over a batch of prompts.

    Args:
      batch_prompts: Prompts to send, in order.
      **kwargs: Generation overrides such as temperature or max_tokens.

    Returns:
      For each prompt, in order, its candidate outputs sorted best first.
    """

  def infer_one(self, prompt: str, **kwargs) -> ScoredOutput:
    """Runs inference on a single prompt and returns the best output.

    Args:
      prompt: The prompt to send.
      **kwargs: Passed through to `infer`.

    Returns:
      The highest scored output.

    Raises:
      InferenceOutputError: If the model produced no output text.
    """
    for outputs in self.infer([prompt], **kwargs):
      if outputs and outputs[0].output is not None:
        return outputs[0]
      break
    raise InferenceOutputError('No scored outputs from language model.')
