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

"""Builds language model providers from a `ModelConfig`.

This is the only module that reads credentials from the environment. The
resolved key is handed to the provider constructor as `api_key`.

Usage example:
    model = factory.create_model(factory.ModelConfig())  # default Claude model
    model = factory.create_model_from_id("gpt-4o-mini", temperature=0.2)
"""

from __future__ import annotations

import dataclasses
import os
import typing

from doclint import exceptions
from doclint import inference
from doclint.providers import registry

DEFAULT_MODEL_ID = "claude-sonnet-4-20250514"
FALLBACK_API_KEY_ENV = "DOCLINT_API_KEY"

# (fragments of a provider name or model ID, provider-specific key variable)
_API_KEY_ENV_BY_FRAGMENT = (
    (("claude", "anthropic"), "ANTHROPIC_API_KEY"),
    (("gemini",), "GEMINI_API_KEY"),
    (("gpt", "openai"), "OPENAI_API_KEY"),
)


@dataclasses.dataclass(slots=True, frozen=True)
class ModelConfig:
  """Which model to create and how.

  Attributes:
    model_id: Model identifier, matched against registered provider patterns.
      None lets an explicitly named provider use its own default model.
    provider: Provider name (e.g. "anthropic") or provider class name. Takes
      precedence over pattern matching on model_id.
    provider_kwargs: Extra constructor arguments, e.g. api_key, max_tokens or
      temperature.
  """

  model_id: str | None = DEFAULT_MODEL_ID
  provider: str | None = None
  provider_kwargs: dict[str, typing.Any] = dataclasses.field(
      default_factory=dict
  )


def api_key_from_environment(hint: str) -> str | None:
  """Looks up the API key for a provider name or model ID.

  Args:
    hint: Provider name or model ID, e.g. "anthropic" or "gpt-4o".

  Returns:
    The provider-specific key, else DOCLINT_API_KEY, else None. None is also
    returned when the hint names no known provider.
  """
  hint = hint.lower()
  for fragments, env_var in _API_KEY_ENV_BY_FRAGMENT:
    if any(fragment in hint for fragment in fragments):
      return os.getenv(env_var) or os.getenv(FALLBACK_API_KEY_ENV)
  return None


def _provider_class(config: ModelConfig) -> registry.ProviderClass:
  try:
    if config.provider:
      return registry.resolve_provider(config.provider)
    return registry.resolve(config.model_id)
  except ImportError as e:
    target = config.provider or config.model_id
    raise exceptions.InferenceConfigError(
        f"Could not import the provider for {target} (is its SDK installed?):"
        f" {e}"
    ) from e


def create_model(config: ModelConfig) -> inference.BaseLanguageModel:
  """Instantiates the provider selected by `config`.

  An `api_key` in provider_kwargs is used as is; otherwise one is taken from
  the environment (see `api_key_from_environment`).

  Args:
    config: The model configuration.

  Returns:
    The provider instance.

  Raises:
    ValueError: If the config names neither a model nor a provider, or no
      provider matches.
    InferenceConfigError: If the provider cannot be imported or constructed.
  """
  if not config.model_id and not config.provider:
    raise ValueError("Either model_id or provider must be specified")

  provider_class = _provider_class(config)

  kwargs = dict(config.provider_kwargs)
  if not kwargs.get("api_key"):
    api_key = api_key_from_environment(config.provider or config.model_id)
    if api_key:
      kwargs["api_key"] = api_key
  if config.model_id:
    kwargs["model_id"] = config.model_id

  try:
    return provider_class(**kwargs)
  except (TypeError, ValueError) as e:
    raise exceptions.InferenceConfigError(
        f"Failed to create provider {provider_class.__name__}: {e}"
    ) from e


def create_model_from_id(
    model_id: str | None = None,
    provider: str | None = None,
    **provider_kwargs: typing.Any,
) -> inference.BaseLanguageModel:
  """Shorthand for `create_model(ModelConfig(...))`."""
  return create_model(
      ModelConfig(
          model_id=model_id, provider=provider, provider_kwargs=provider_kwargs
      )
  )
