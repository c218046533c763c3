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

"""OpenAI provider for doclint.

Requires the optional `openai` package (`pip install doclint[openai]`).
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any

from doclint import exceptions
from doclint import inference
from doclint.providers import registry

DEFAULT_MODEL_ID = 'gpt-4o-mini'

_SYSTEM_MESSAGE = 'You are a helpful assistant that responds in JSON format.'


@registry.register(
    r'^gpt-4',  # gpt-4o, gpt-4o-mini, gpt-4.1, ...
    r'^gpt4\.',
    priority=10,
)
class OpenAILanguageModel(inference.BaseLanguageModel):
  """Chat-completions provider that asks for a JSON object reply."""

  def __init__(
      self,
      model_id: str = DEFAULT_MODEL_ID,
      api_key: str | None = None,
      base_url: str | None = None,
      organization: str | None = None,
      temperature: float = 0.0,
      max_tokens: int | None = None,
      json_mode: bool = True,
      **kwargs,
  ) -> None:
    """Creates the OpenAI client.

    Args:
      model_id: Chat model to call.
      api_key: OpenAI API key.
      base_url: Optional OpenAI-compatible endpoint.
      organization: Optional organization ID.
      temperature: Default sampling temperature.
      max_tokens: Default reply length limit. None leaves it to the API.
      json_mode: Request `response_format={'type': 'json_object'}`.
      **kwargs: Unused; accepted so a shared set of provider options can be
        passed to any provider.

    Raises:
      InferenceConfigError: If the SDK is not installed or no key is given.
    """
    del kwargs
    try:
      import openai  # pylint: disable=import-outside-toplevel
    except ImportError as e:
      raise exceptions.InferenceConfigError(
          'The OpenAI provider needs the openai package: '
          'pip install doclint[openai]'
      ) from e
    if not api_key:
      raise exceptions.InferenceConfigError('API key not provided for OpenAI.')

    self.model_id = model_id
    self.temperature = temperature
    self.max_tokens = max_tokens
    self.json_mode = json_mode
    self._client = openai.OpenAI(
        api_key=api_key, base_url=base_url, organization=organization
    )

  def _generation_params(self, overrides: dict[str, Any]) -> dict[str, Any]:
    params = {'temperature': overrides.get('temperature', self.temperature)}
    max_tokens = overrides.get('max_tokens', self.max_tokens)
    if max_tokens is not None:
      params['max_tokens'] = max_tokens
    if 'top_p' in overrides:
      params['top_p'] = overrides['top_p']
    return params

  def _complete(self, prompt: str, params: dict[str, Any]) -> str | None:
    request: dict[str, Any] = {
        'model': self.model_id,
        'messages': [
            {'role': 'system', 'content': _SYSTEM_MESSAGE},
            {'role': 'user', 'content': prompt},
        ],
        'n': 1,
        **params,
    }
    if self.json_mode:
      request['response_format'] = {'type': 'json_object'}
    try:
      completion = self._client.chat.completions.create(**request)
    except Exception as e:
      raise exceptions.InferenceRuntimeError(
          f'OpenAI API error: {e}', original=e, provider='openai'
      ) from e
    return completion.choices[0].message.content

  def infer(
      self, batch_prompts: Sequence[str], **kwargs
  ) -> Iterator[Sequence[inference.ScoredOutput]]:
    """Sends each prompt as its own chat completion request.

    Args:
      batch_prompts: Prompts to send, in order.
      **kwargs: Per-call overrides: temperature, max_tokens, top_p.

    Yields:
      A one-element list with the reply for each prompt.
    """
    params = self._generation_params(kwargs)
    for prompt in batch_prompts:
      reply = self._complete(prompt, params)
      yield [inference.ScoredOutput(score=1.0, output=reply)]
