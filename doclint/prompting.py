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

"""Library for building extraction prompts."""

import dataclasses
import json
import pathlib

import pydantic
import yaml

from doclint import data
from doclint import exceptions


class PromptBuilderError(exceptions.DoclintError):
  """Failure to build prompt."""


class ParseError(PromptBuilderError):
  """Prompt template cannot be parsed."""


EXTRACTION_INSTRUCTIONS = """\
You are evaluating documentation for a tool or library. Your job is to extract what you understand from it and rate your confidence.

Read the documentation below and extract:

1. **capability**: What does this tool do? (1-2 sentences)
2. **inputs**: What does it take as input? (list)
3. **outputs**: What does it return? (list)
4. **when_to_use**: When should an agent use this? (list of scenarios)
5. **when_not_to_use**: When should an agent NOT use this? (list)
6. **constraints**: Limitations, requirements, gotchas (list)
7. **invocation**: How do you call it? (code examples if available)

For each dimension, rate your confidence from 0.0 to 1.0:
- 1.0 = Completely clear, no ambiguity
- 0.7 = Mostly clear, minor gaps
- 0.5 = Partially clear, significant assumptions required
- 0.3 = Unclear, mostly guessing
- 0.0 = No information available

Finally, list any **gaps** - things you wanted to know but couldn't find, or areas where the documentation was confusing.

Respond ONLY with valid JSON in this exact format:
{
  "extraction": {
    "capability": "string",
    "inputs": ["string"],
    "outputs": ["string"],
    "when_to_use": ["string"],
    "when_not_to_use": ["string"],
    "constraints": ["string"],
    "invocation": "string or null"
  },
  "confidence": {
    "capability": 0.0,
    "inputs": 0.0,
    "outputs": 0.0,
    "when_to_use": 0.0,
    "when_not_to_use": 0.0,
    "constraints": 0.0,
    "invocation": 0.0
  },
  "gaps": ["string"],
  "overall_confidence": 0.0
}"""

CONTENT_HEADING = "Documentation to evaluate:"


@dataclasses.dataclass
class PromptTemplate:
  """Instructions sent to the model ahead of the documentation.

  Attributes:
    description: Instructions for the LLM, including the reply format.
    content_heading: Line placed between the instructions and the
      documentation.
  """

  description: str = EXTRACTION_INSTRUCTIONS
  content_heading: str = CONTENT_HEADING

  def render(self, content: str) -> str:
    """Generates the prompt for one piece of documentation.

    Args:
      content: The documentation text (README, manifest, etc.).

    Returns:
      Text prompt to be presented to a language model.
    """
    return f"{self.description}\n\n{self.content_heading}\n{content}"


def read_prompt_template_from_file(
    prompt_path: str | pathlib.Path,
    format_type: data.FormatType = data.FormatType.YAML,
) -> PromptTemplate:
  """Reads a prompt template from a file.

  Args:
    prompt_path: Path to a file with `description` and, optionally,
      `content_heading` keys.
    format_type: The format of the file; YAML or JSON.

  Returns:
    A PromptTemplate loaded from the file.

  Raises:
    ParseError: If the file cannot be read or does not describe a template.
  """
  adapter = pydantic.TypeAdapter(PromptTemplate)
  try:
    prompt_content = pathlib.Path(prompt_path).read_text()
    if format_type == data.FormatType.YAML:
      data_dict = yaml.safe_load(prompt_content)
    else:
      data_dict = json.loads(prompt_content)
    return adapter.validate_python(data_dict)
  except Exception as e:
    raise ParseError(
        f"Failed to parse prompt template from file: {prompt_path}"
    ) from e
