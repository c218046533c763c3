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

"""Provides functionality for linting documentation with a language model.

The linting process renders an extraction prompt for the documentation, sends
it to the language model once, and resolves the model's reply into an
`ExtractionRecord` stamped with provenance.

Usage example:
    doc_linter = Linter(language_model)
    record = doc_linter.lint(readme_text, name="imgtool")
"""

from collections.abc import Callable
import dataclasses
import datetime

from absl import logging

from doclint import data
from doclint import exceptions
from doclint import factory
from doclint import inference
from doclint import prompting
from doclint import resolver as resolver_lib

UNKNOWN_TOOL_NAME = "unknown"


def utc_now() -> datetime.datetime:
  return datetime.datetime.now(datetime.timezone.utc)


def format_timestamp(moment: datetime.datetime) -> str:
  """Formats a timestamp as ISO-8601 UTC with milliseconds, e.g. ...:05.123Z."""
  moment = moment.astimezone(datetime.timezone.utc)
  return moment.strftime("%Y-%m-%dT%H:%M:%S.") + (
      f"{moment.microsecond // 1000:03d}Z"
  )


class Linter:
  """Extracts a structured understanding of documentation with an LLM."""

  def __init__(
      self,
      language_model: inference.BaseLanguageModel,
      prompt_template: prompting.PromptTemplate | None = None,
      resolver: resolver_lib.Resolver | None = None,
      clock: Callable[[], datetime.datetime] = utc_now,
  ):
    """Initializes the Linter.

    Args:
      language_model: Model which performs the extraction.
      prompt_template: Prompt used for every request. Defaults to the built-in
        extraction prompt.
      resolver: Parser for the model's reply.
      clock: Source of the `evaluated_at` timestamp.
    """
    self._language_model = language_model
    self._prompt_template = prompt_template or prompting.PromptTemplate()
    self._resolver = resolver or resolver_lib.Resolver()
    self._clock = clock
    logging.debug(
        "Initialized Linter with model %s",
        type(language_model).__name__,
    )

  @classmethod
  def from_config(
      cls,
      config: factory.ModelConfig,
      prompt_template: prompting.PromptTemplate | None = None,
  ) -> "Linter":
    """Creates a Linter whose model is built from configuration.

    Args:
      config: Model configuration; credentials are resolved by the factory.
      prompt_template: Optional prompt override.

    Returns:
      A Linter.

    Raises:
      InferenceConfigError: If the model cannot be created.
    """
    try:
      language_model = factory.create_model(config)
    except ValueError as e:
      raise exceptions.InferenceConfigError(str(e)) from e
    return cls(language_model, prompt_template=prompt_template)

  def lint(
      self, content: str, name: str | None = None, **kwargs
  ) -> data.ExtractionRecord:
    """Extracts what the model understood from the documentation.

    Args:
      content: The documentation text.
      name: Name of the documented tool; recorded as `tool_name`.
      **kwargs: Additional arguments passed to the language model.

    Returns:
      The ExtractionRecord with `tool_name` and `evaluated_at` set.

    Raises:
      InferenceRuntimeError: If the model call fails.
      InferenceOutputError: If the model returns nothing.
      ResolverParsingError: If the reply cannot be interpreted.
    """
    prompt = self._prompt_template.render(content)
    logging.info(
        "Linting documentation for %s (%d chars).",
        name or UNKNOWN_TOOL_NAME,
        len(content),
    )

    top_output = self._language_model.infer_one(prompt, **kwargs)
    logging.debug("Top inference result: %s", top_output.output)

    record = self._resolver.resolve(top_output.output)
    return dataclasses.replace(
        record,
        tool_name=name or UNKNOWN_TOOL_NAME,
        evaluated_at=format_timestamp(self._clock()),
    )
