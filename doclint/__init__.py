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

"""doclint: check what an agent understands from your documentation."""

from __future__ import annotations

from typing import Any

import dotenv

from doclint import alignment
from doclint import data
from doclint import exceptions
from doclint import factory
from doclint import inference
from doclint import linter
from doclint import prompting
from doclint import providers
from doclint import resolver
from doclint import tokenizer

__all__ = [
    "lint",
    "compare",
    "alignment",
    "data",
    "exceptions",
    "factory",
    "inference",
    "linter",
    "prompting",
    "providers",
    "resolver",
    "tokenizer",
]

# API keys are commonly kept in a local .env file.
dotenv.load_dotenv()

compare = alignment.compare


def lint(
    content: str,
    name: str | None = None,
    model_id: str = factory.DEFAULT_MODEL_ID,
    api_key: str | None = None,
    prompt_template: prompting.PromptTemplate | None = None,
    language_model_params: dict[str, Any] | None = None,
    config: factory.ModelConfig | None = None,
    model: inference.BaseLanguageModel | None = None,
) -> data.ExtractionRecord:
  """Extracts a structured, confidence-scored understanding of documentation.

  Args:
    content: The documentation text (README, manifest, etc.).
    name: Name of the documented tool; recorded as provenance.
    model_id: The model ID to use for extraction.
    api_key: API key for the provider. When omitted, the provider-specific
      environment variable (e.g. ANTHROPIC_API_KEY) or DOCLINT_API_KEY is used.
    prompt_template: Optional replacement for the built-in extraction prompt.
    language_model_params: Additional provider keyword arguments, such as
      max_tokens or temperature.
    config: Model configuration. Takes precedence over model_id, api_key and
      language_model_params.
    model: Pre-configured language model. Takes precedence over everything
      else.

  Returns:
    The ExtractionRecord, with `tool_name` and `evaluated_at` set.

  Raises:
    InferenceConfigError: If the model cannot be created.
    InferenceRuntimeError: If the model call fails.
    ResolverParsingError: If the model reply cannot be interpreted.
  """
  if model is not None:
    doc_linter = linter.Linter(model, prompt_template=prompt_template)
  else:
    if config is None:
      provider_kwargs = dict(language_model_params or {})
      if api_key:
        provider_kwargs["api_key"] = api_key
      config = factory.ModelConfig(
          model_id=model_id, provider_kwargs=provider_kwargs
      )
    doc_linter = linter.Linter.from_config(
        config, prompt_template=prompt_template
    )
  return doc_linter.lint(content, name=name)
