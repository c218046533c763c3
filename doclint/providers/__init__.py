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

"""Language model providers used by the extraction proxy.

Built-in providers (Anthropic, OpenAI, Gemini) register their model-ID
patterns when their modules are imported. Third-party providers ship an entry
point in the `doclint.providers` group whose import performs the same
registration, e.g. in the plugin's pyproject.toml:

    [project.entry-points."doclint.providers"]
    mistral = "doclint_mistral.provider:MistralLanguageModel"
"""
# pylint: disable=cyclic-import

from importlib import metadata
import os

from absl import logging

from doclint.providers import registry

ENTRY_POINT_GROUP = "doclint.providers"
DISABLE_PLUGINS_ENV = "DOCLINT_DISABLE_PLUGINS"

_BUILTINS_LOADED = False
_PLUGINS_LOADED = False


def load_builtins_once() -> None:
  """Registers the built-in providers.

  Importing a provider module does not import its SDK, so this succeeds even
  when the optional openai or google-genai packages are missing.
  """
  global _BUILTINS_LOADED  # pylint: disable=global-statement
  if not _BUILTINS_LOADED:
    _BUILTINS_LOADED = True
    # pylint: disable-next=import-outside-toplevel,unused-import
    from doclint.providers import anthropic, gemini, openai  # noqa: F401


def load_plugins_once() -> None:
  """Imports every `doclint.providers` entry point, once per process.

  Discovery is skipped when DOCLINT_DISABLE_PLUGINS=1. A plugin that fails to
  import is logged and ignored; the remaining providers stay usable.
  """
  global _PLUGINS_LOADED  # pylint: disable=global-statement
  if _PLUGINS_LOADED:
    return
  _PLUGINS_LOADED = True

  if os.getenv(DISABLE_PLUGINS_ENV) == "1":
    logging.info("Provider plugins disabled by %s=1", DISABLE_PLUGINS_ENV)
    return

  for entry_point in metadata.entry_points(group=ENTRY_POINT_GROUP):
    try:
      entry_point.load()
    except Exception as e:  # pylint: disable=broad-exception-caught
      logging.warning(
          "Skipping provider plugin %s (%s): %s",
          entry_point.name,
          entry_point.value,
          e,
      )
    else:
      logging.info("Loaded provider plugin %s", entry_point.name)


__all__ = ["registry", "load_builtins_once", "load_plugins_once"]
