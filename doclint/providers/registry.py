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

"""Maps model-ID patterns to language model provider classes.

Providers register one or more regex patterns. A model ID such as
"claude-sonnet-4-20250514" resolves to the highest-priority provider with a
matching pattern. Lazy entries defer importing the provider module (and its
SDK) until the provider is actually resolved.

Usage example:
    @registry.register(r'^mymodel', priority=20)
    class MyProvider(inference.BaseLanguageModel):
      ...

    registry.register_lazy(r'^other', target='my_pkg.other:OtherProvider')
"""
# pylint: disable=cyclic-import

from __future__ import annotations

from collections.abc import Callable
import dataclasses
import functools
import importlib
import re

from absl import logging

from doclint import inference

ProviderClass = type[inference.BaseLanguageModel]
Pattern = str | re.Pattern[str]


@dataclasses.dataclass(frozen=True, slots=True)
class _Entry:
  patterns: tuple[re.Pattern[str], ...]
  load: Callable[[], ProviderClass]
  priority: int

  def matches(self, model_id: str) -> bool:
    return any(pattern.search(model_id) for pattern in self.patterns)

  def names(self) -> tuple[str, ...]:
    return tuple(pattern.pattern for pattern in self.patterns)


# Registration order is kept; resolve() orders by priority on lookup.
_ENTRIES: list[_Entry] = []


def _invalidate_caches() -> None:
  resolve.cache_clear()
  resolve_provider.cache_clear()


def _add(
    patterns: tuple[Pattern, ...],
    load: Callable[[], ProviderClass],
    priority: int,
) -> None:
  entry = _Entry(
      patterns=tuple(re.compile(p) for p in patterns),
      load=load,
      priority=priority,
  )
  _ENTRIES.append(entry)
  _invalidate_caches()
  logging.debug("Registered %s (priority %d)", list(entry.names()), priority)


def _import_target(target: str) -> ProviderClass:
  module_name, _, attribute = target.partition(":")
  return getattr(importlib.import_module(module_name), attribute)


def register_lazy(*patterns: Pattern, target: str, priority: int = 0) -> None:
  """Registers a provider by import path; nothing is imported until resolved.

  Args:
    *patterns: Regex patterns searched against model IDs.
    target: "package.module:ClassName" of the provider.
    priority: Higher priorities win when several patterns match.
  """
  _add(patterns, functools.partial(_import_target, target), priority)


def register(
    *patterns: Pattern, priority: int = 0
) -> Callable[[ProviderClass], ProviderClass]:
  """Class decorator form of `register_lazy` for already imported classes."""

  def _decorator(cls: ProviderClass) -> ProviderClass:
    _add(patterns, lambda: cls, priority)
    return cls

  return _decorator


def _ensure_loaded() -> None:
  from doclint import providers  # pylint: disable=import-outside-toplevel

  providers.load_builtins_once()
  providers.load_plugins_once()


@functools.lru_cache(maxsize=128)
def resolve(model_id: str) -> ProviderClass:
  """Returns the provider class for a model ID.

  Built-in providers and entry-point plugins are loaded on first use.

  Raises:
    ValueError: If no registered pattern matches the model ID.
  """
  _ensure_loaded()

  # sorted() is stable, so equal priorities keep registration order.
  for entry in sorted(_ENTRIES, key=lambda e: -e.priority):
    if entry.matches(model_id):
      return entry.load()

  known = [name for entry in _ENTRIES for name in entry.names()]
  raise ValueError(
      f"No provider registered for model_id={model_id!r}. Known patterns:"
      f" {known}"
  )


@functools.lru_cache(maxsize=128)
def resolve_provider(provider_name: str) -> ProviderClass:
  """Returns a provider class by name rather than by model ID.

  A pattern registered verbatim as `^<provider_name>$` wins. Otherwise the
  first provider whose class name contains `provider_name`
  (case-insensitive) is used, so "anthropic" finds AnthropicLanguageModel.
  Entries that fail to import are skipped.

  Args:
    provider_name: Provider alias or (part of) a provider class name.

  Raises:
    ValueError: If nothing matches.
  """
  _ensure_loaded()

  alias = f"^{re.escape(provider_name)}$"
  for entry in _ENTRIES:
    if alias in entry.names():
      return entry.load()

  wanted = provider_name.lower()
  for entry in _ENTRIES:
    try:
      provider_class = entry.load()
    except (ImportError, AttributeError):
      continue
    if wanted in provider_class.__name__.lower():
      return provider_class

  raise ValueError(
      f"No provider found matching: {provider_name!r}. See list_providers()"
      " for what is registered."
  )


def clear() -> None:
  """Removes every registration. Intended for tests."""
  _ENTRIES.clear()
  _invalidate_caches()


def list_providers() -> list[tuple[tuple[str, ...], int]]:
  """Returns (patterns, priority) for every registration, in order."""
  return [(entry.names(), entry.priority) for entry in _ENTRIES]
