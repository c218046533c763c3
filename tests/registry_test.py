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

"""Tests for the provider registry module."""

import re

from absl.testing import absltest

from doclint import inference
from doclint import providers
from doclint.providers import registry


class FakeProvider(inference.BaseLanguageModel):
  """Fake provider for testing."""

  def infer(self, batch_prompts, **kwargs):
    return [[inference.ScoredOutput(score=1.0, output="test")]]


class AnotherFakeProvider(inference.BaseLanguageModel):
  """Another fake provider for testing."""

  def infer(self, batch_prompts, **kwargs):
    return [[inference.ScoredOutput(score=1.0, output="another")]]


class RegistryTest(absltest.TestCase):

  def setUp(self):
    super().setUp()
    providers.load_builtins_once()
    saved_entries = list(registry._ENTRIES)
    saved_plugins_loaded = providers._PLUGINS_LOADED
    self.addCleanup(registry._ENTRIES.extend, saved_entries)
    self.addCleanup(registry.clear)
    self.addCleanup(
        setattr, providers, "_PLUGINS_LOADED", saved_plugins_loaded
    )
    registry.clear()
    providers._PLUGINS_LOADED = True

  def test_register_decorator(self):

    @registry.register(r"^test-model")
    class TestProvider(FakeProvider):
      pass

    self.assertEqual(registry.resolve("test-model-v1"), TestProvider)

  def test_register_lazy(self):
    registry.register_lazy(r"^fake-model", target="registry_test:FakeProvider")

    self.assertEqual(registry.resolve("fake-model-v2"), FakeProvider)

  def test_multiple_patterns(self):
    registry.register_lazy(
        r"^claude", r"^anthropic/", target="registry_test:FakeProvider"
    )

    self.assertEqual(registry.resolve("claude-3-5-haiku-latest"), FakeProvider)
    self.assertEqual(registry.resolve("anthropic/claude"), FakeProvider)

  def test_priority_resolution(self):
    registry.register_lazy(
        r"^model", target="registry_test:FakeProvider", priority=0
    )
    registry.register_lazy(
        r"^model", target="registry_test:AnotherFakeProvider", priority=10
    )

    self.assertEqual(registry.resolve("model-v1"), AnotherFakeProvider)

  def test_registration_after_resolve_is_visible(self):
    registry.register_lazy(
        r"^model", target="registry_test:FakeProvider", priority=0
    )
    self.assertEqual(registry.resolve("model-v1"), FakeProvider)

    registry.register_lazy(
        r"^model", target="registry_test:AnotherFakeProvider", priority=10
    )

    self.assertEqual(registry.resolve("model-v1"), AnotherFakeProvider)

  def test_no_provider_registered(self):
    with self.assertRaisesRegex(
        ValueError, "No provider registered for model_id='unknown-model'"
    ):
      registry.resolve("unknown-model")

  def test_caching(self):
    registry.register_lazy(r"^cached", target="registry_test:FakeProvider")

    self.assertIs(
        registry.resolve("cached-model"), registry.resolve("cached-model")
    )

  def test_clear_registry(self):
    registry.register_lazy(r"^temp", target="registry_test:FakeProvider")
    self.assertEqual(registry.resolve("temp-model"), FakeProvider)

    registry.clear()

    with self.assertRaises(ValueError):
      registry.resolve("temp-model")

  def test_list_providers(self):
    registry.register_lazy(r"^test1", target="fake:Target1", priority=5)
    registry.register_lazy(
        r"^test2", r"^test3", target="fake:Target2", priority=10
    )

    self.assertEqual(
        registry.list_providers(),
        [(("^test1",), 5), (("^test2", "^test3"), 10)],
    )

  def test_lazy_loading_defers_import(self):
    registry.register_lazy(r"^lazy", target="non.existent.module:Provider")

    self.assertIn((("^lazy",), 0), registry.list_providers())
    with self.assertRaises(ModuleNotFoundError):
      registry.resolve("lazy-model")

  def test_regex_pattern_objects(self):

    @registry.register(re.compile(r"^custom-\d+"))
    class CustomProvider(FakeProvider):
      pass

    self.assertEqual(registry.resolve("custom-123"), CustomProvider)
    with self.assertRaises(ValueError):
      registry.resolve("custom-abc")

  def test_resolve_provider_by_name(self):

    @registry.register(r"^test-model", r"^TestProvider$")
    class TestProvider(FakeProvider):
      pass

    self.assertEqual(registry.resolve_provider("TestProvider"), TestProvider)
    self.assertEqual(registry.resolve_provider("test"), TestProvider)

  def test_resolve_provider_skips_unloadable_entries(self):
    registry.register_lazy(r"^broken", target="non.existent.module:Provider")
    registry.register_lazy(r"^fake", target="registry_test:FakeProvider")

    self.assertEqual(registry.resolve_provider("fakeprovider"), FakeProvider)

  def test_resolve_provider_not_found(self):
    with self.assertRaisesRegex(ValueError, "No provider found matching"):
      registry.resolve_provider("UnknownProvider")


if __name__ == "__main__":
  absltest.main()
