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

"""Gemini provider for doclint.

Requires the optional `google-genai` package (`pip install doclint[gemini]`).
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any

from doclint import exceptions
from doclint import inference
from doclint.providers import registry

DEFAULT_MODEL_ID = 'gemini-2.5-flash'

# Extra constructor options forwarded verbatim to GenerateContentConfig.
_PASSTHROUGH_OPTIONS = frozenset({
    'safety_settings',
    'stop_sequences',
    'candidate_count',
    'system_instruction',
})


@registry.register(r'^gemini', priority=10)
class GeminiLanguageModel(inference.BaseLanguageModel):
  """Gemini provider that requests `application/json` replies."""

  def __init__(
      self,
      model_id: str = DEFAULT_MODEL_ID,
      api_key: str | None = None,
      temperature: float = 0.0,
      **kwargs,
  ) -> None:
    """Creates the Gemini client.

    Args:
      model_id: The Gemini model to call.
      api_key: Gemini API key.
      temperature: Default sampling temperature.
      **kwargs: Generation options. Only safety_settings, stop_sequences,
        candidate_count and system_instruction are forwarded; anything else is
        ignored.

    Raises:
      InferenceConfigError: If the SDK is not installed or no key is given.
    """
    try:
      from google import genai  # pylint: disable=import-outside-toplevel
    except ImportError as e:
      raise exceptions.InferenceConfigError(
          'The Gemini provider needs the google-genai package: '
          'pip install doclint[gemini]'
      ) from e
    if not api_key:
      raise exceptions.InferenceConfigError('API key not provided for Gemini.')

    self.model_id = model_id
    self.temperature = temperature
    self._options = {
        k: v for k, v in kwargs.items() if k in _PASSTHROUGH_OPTIONS
    }
    self._client = genai.Client(api_key=api_key)

  def _generation_config(self, overrides: dict[str, Any]) -> dict[str, Any]:
    config = {'temperature': overrides.get('temperature', self.temperature)}
    if 'max_tokens' in overrides:
      config['max_output_tokens'] = overrides['max_tokens']
    for key in ('top_p', 'top_k'):
      if key in overrides:
        config[key] = overrides[key]
    config.update(self._options)
    config['response_mime_type'] = 'application/json'
    return config

  def _generate(self, prompt: str, config: dict[str, Any]) -> str | None:
    try:
      response = self._client.models.generate_content(
          model=self.model_id, contents=prompt, config=config
      )
    except Exception as e:
      raise exceptions.InferenceRuntimeError(
          f'Gemini API error: {e}', original=e, provider='gemini'
      ) from e
    return response.text

  def infer(
      self, batch_prompts: Sequence[str], **kwargs
  ) -> Iterator[Sequence[inference.ScoredOutput]]:
    """Sends each prompt as its own generate_content request.

    Args:
      batch_prompts: Prompts to send, in order.
      **kwargs: Per-call overrides: temperature, max_tokens, top_p, top_k.

    Yields:
      A one-element list with the reply for each prompt.
    """
    config = self._generation_config(kwargs)
    for prompt in batch_prompts:
      yield [
          inference.ScoredOutput(
              score=1.0, output=self._generate(prompt, config)
          )
      ]
