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

"""MCP server exposing the `lint` and `compare` tools.

Usage:
    doclint-server                              # stdio, default Claude model
    doclint-server --model_id=gpt-4o-mini
    doclint-server --transport=streamable-http

Tools:
- lint: documentation text -> ExtractionRecord JSON (one model call)
- compare: extraction + intended understanding -> AlignmentResult JSON
"""

import asyncio
from collections.abc import Callable
import functools
import json
from typing import Annotated, Any

from absl import app
from absl import flags
from absl import logging
from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
import pydantic

from doclint import alignment
from doclint import data
from doclint import exceptions
from doclint import factory
from doclint import linter as linter_lib
from doclint import prompting

SERVER_NAME = "doclint"

LINT_DESCRIPTION = (
    "Extracts structured understanding from documentation. Returns what an"
    " agent understood, confidence scores for each dimension, and gaps in the"
    " documentation."
)
COMPARE_DESCRIPTION = (
    "Compares extracted understanding against intended understanding. Returns"
    " alignment score and specific mismatches."
)

_TRANSPORTS = ("stdio", "sse", "streamable-http")

_MODEL_ID = flags.DEFINE_string(
    "model_id", factory.DEFAULT_MODEL_ID, "Model used by the lint tool."
)
_PROVIDER = flags.DEFINE_string(
    "provider", None, "Explicit provider name, e.g. anthropic or openai."
)
_PROMPT_TEMPLATE = flags.DEFINE_string(
    "prompt_template", None, "Optional path to a prompt template file."
)
_PROMPT_FORMAT = flags.DEFINE_enum(
    "prompt_format",
    data.FormatType.YAML.value,
    [f.value for f in data.FormatType],
    "Format of --prompt_template.",
)
_TRANSPORT = flags.DEFINE_enum(
    "transport", "stdio", list(_TRANSPORTS), "MCP transport to serve on."
)

LinterFactory = Callable[[], linter_lib.Linter]


def _to_json(payload: dict[str, Any]) -> str:
  return json.dumps(payload, indent=2, ensure_ascii=False)


async def run_lint(
    get_linter: LinterFactory, content: str, name: str | None = None
) -> str:
  """Runs the extraction proxy and renders its record as JSON text.

  The model call blocks, so it runs in a worker thread; cancelling the request
  stops waiting for it.

  Args:
    get_linter: Returns the Linter to use. Called on every request so a
      failed model construction is retried on the next one.
    content: The documentation text.
    name: Optional tool name recorded as provenance.

  Returns:
    The ExtractionRecord as JSON text.

  Raises:
    ToolError: If the model cannot be created, the call fails, or the reply
      cannot be parsed.
  """
  try:
    doc_linter = get_linter()
    record = await asyncio.to_thread(doc_linter.lint, content, name)
  except exceptions.DoclintError as e:
    logging.warning("Extraction failed: %s", e)
    raise ToolError(f"Error during extraction: {e}") from e
  return _to_json(record.to_dict())


def run_compare(extracted: Any, intended: Any) -> str:
  """Runs the alignment engine and renders its result as JSON text."""
  return _to_json(alignment.compare(extracted, intended).to_dict())


def register_tools(mcp: FastMCP, linter_factory: LinterFactory) -> None:
  """Registers the doclint tools on a FastMCP server.

  Args:
    mcp: The server to register on.
    linter_factory: Builds the Linter on first use. Successful results are
      cached for the lifetime of the server.
  """
  get_linter = functools.cache(linter_factory)

  @mcp.tool(name="lint", description=LINT_DESCRIPTION)
  async def lint(
      content: Annotated[
          str,
          pydantic.Field(
              description="The documentation content (README, manifest, etc.)"
          ),
      ],
      name: Annotated[
          str | None,
          pydantic.Field(
              description=(
                  "Name of the tool/library being documented (optional)"
              )
          ),
      ] = None,
  ) -> str:
    return await run_lint(get_linter, content, name)

  @mcp.tool(name="compare", description=COMPARE_DESCRIPTION)
  def compare(
      extracted: Annotated[
          dict[str, Any],
          pydantic.Field(
              description="The extraction result from the lint tool"
          ),
      ],
      intended: Annotated[
          dict[str, Any],
          pydantic.Field(
              description="What you intended the documentation to convey"
          ),
      ],
  ) -> str:
    return run_compare(extracted, intended)


def create_server(linter_factory: LinterFactory | None = None) -> FastMCP:
  """Creates the doclint MCP server.

  Args:
    linter_factory: Builds the Linter used by `lint`. Defaults to the default
      model configuration, with credentials from the environment.

  Returns:
    A FastMCP server with `lint` and `compare` registered.
  """
  if linter_factory is None:
    linter_factory = functools.partial(
        linter_lib.Linter.from_config, factory.ModelConfig()
    )
  mcp = FastMCP(SERVER_NAME)
  register_tools(mcp, linter_factory)
  return mcp


def _linter_from_flags(
    prompt_template: prompting.PromptTemplate | None,
) -> linter_lib.Linter:
  config = factory.ModelConfig(
      model_id=_MODEL_ID.value, provider=_PROVIDER.value
  )
  return linter_lib.Linter.from_config(config, prompt_template=prompt_template)


def main(argv: list[str]) -> None:
  if len(argv) > 1:
    raise app.UsageError("Too many command-line arguments.")

  prompt_template = None
  if _PROMPT_TEMPLATE.value:
    prompt_template = prompting.read_prompt_template_from_file(
        _PROMPT_TEMPLATE.value, data.FormatType(_PROMPT_FORMAT.value)
    )

  mcp = create_server(functools.partial(_linter_from_flags, prompt_template))
  logging.info("doclint MCP server running on %s", _TRANSPORT.value)
  mcp.run(transport=_TRANSPORT.value)


def run() -> None:
  app.run(main)


if __name__ == "__main__":
  run()
