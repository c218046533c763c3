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

"""Anthropic provider for doclint. This is the default provider."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any

from doclint import exceptions
from doclint import inference
from doclint.providers import registry

DEFAULT_MODEL_ID = 'claude-sonnet-4-20250514'
DEFAULT_MAX_TOKENS = 2000


@registry.register(
    r'^claude',  # claude-sonnet-4-20250514, claude-3-5-haiku-latest, ...
    priority=10,
)
class AnthropicLanguageModel(inference.BaseLanguageModel):
  """Language model inference using Anthropic's Messages API."""

  def __init__(
      self,
      model_id: str = DEFAULT_MODEL_ID,
      api_key: str | None = None,
      base_url: str | None = None,
      max_tokens: int = DEFAULT_MAX_TOKENS,
      temperature: float | None = None,
      **kwargs,
  ) -> None:
    """Creates the Anthropic client.

    Args:
      model_id: The Claude model to call.
      api_key: Anthropic API key.
      base_url: Optional Anthropic-compatible endpoint.
      max_tokens: Maximum number of tokens in the reply.
      temperature: Sampling temperature. None uses the API default.
      **kwargs: Unused; accepted so a shared set of provider options can be
        passed to any provider.

    Raises:
      InferenceConfigError: If the SDK is not installed or no key is given.
    """
    del kwargs
    try:
      import anthropic  # pylint: disable=import-outside-toplevel
    except ImportError as e:
      raise exceptions.InferenceConfigError(
          'The Anthropic provider needs the anthropic package: '
          'pip install anthropic'
      ) from e
    if not api_key:
      raise exceptions.InferenceConfigError(
          'API key not provided for Anthropic.'
      )

    self.model_id = model_id
    self.max_tokens = max_tokens
    self.temperature = temperature
    self._client = anthropic.Anthropic(api_key=api_key, base_url=base_url)

  def _generation_params(self, overrides: dict[str, Any]) -> dict[str, Any]:
    params: dict[str, Any] = {
        'max_tokens': overrides.get('max_tokens', self.max_tokens),
    }
    temperature = overrides.get('temperature', self.temperature)
    if temperature is not None:
      params['temperature'] = temperature
    if 'top_p' in overrides:
      params['top_p'] = overrides['top_p']
    return params

  def _send(self, prompt: str, params: dict[str, Any]) -> str:
    try:
      message = self._client.messages.create(
          model=self.model_id,
          messages=[{'role': 'user', 'content': prompt}],
          **params,
      )
    except Exception as e:
      raise exceptions.InferenceRuntimeError(
          f'Anthropic API error: {e}', original=e, provider='anthropic'
      ) from e
    # Only text blocks carry the reply.
    return ''.join(
        block.text for block in message.content if block.type == 'text'
    )

  def infer(
      self, batch_prompts: Sequence[str], **kwargs
  ) -> Iterator[Sequence[inference.ScoredOutput]]:
    """Sends each prompt as its own Messages API request.

    Args:
      batch_prompts: Prompts to send, in order.
      **kwargs: Per-call overrides: max_tokens, temperature, top_p.

    Yields:
      A one-element list with the reply for each prompt.
    """
    params = self._generation_params(kwargs)
    for prompt in batch_prompts:
      yield [
          inference.ScoredOutput(score=1.0, output=self._send(prompt, params))
      ]
