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

from unittest import mock

from absl.testing import absltest

from doclint import exceptions
from doclint import inference
from doclint.providers import anthropic as anthropic_provider
from doclint.providers import gemini as gemini_provider
from doclint.providers import openai as openai_provider


class _StaticModel(inference.BaseLanguageModel):

  def __init__(self, outputs):
    self.outputs = outputs

  def infer(self, batch_prompts, **kwargs):
    for _ in batch_prompts:
      yield self.outputs


class BaseLanguageModelTest(absltest.TestCase):

  def test_infer_one_returns_top_output(self):
    model = _StaticModel([
        inference.ScoredOutput(score=0.9, output="best"),
        inference.ScoredOutput(score=0.1, output="worst"),
    ])

    self.assertEqual(model.infer_one("prompt").output, "best")

  def test_infer_one_raises_without_output(self):
    with self.assertRaises(inference.InferenceOutputError):
      _StaticModel([]).infer_one("prompt")

    with self.assertRaises(inference.InferenceOutputError):
      _StaticModel([inference.ScoredOutput(score=1.0)]).infer_one("prompt")

  def test_inference_output_error_is_an_inference_error(self):
    self.assertTrue(
        issubclass(inference.InferenceOutputError, exceptions.InferenceError)
    )


class AnthropicLanguageModelTest(absltest.TestCase):

  @mock.patch("anthropic.Anthropic")
  def test_anthropic_infer(self, mock_anthropic_class):
    mock_client = mock.Mock()
    mock_anthropic_class.return_value = mock_client
    mock_client.messages.create.return_value = mock.Mock(
        content=[
            mock.Mock(type="text", text='{"extraction": '),
            mock.Mock(type="tool_use", text="ignored"),
            mock.Mock(type="text", text="{}}"),
        ]
    )

    model = anthropic_provider.AnthropicLanguageModel(
        model_id="claude-sonnet-4-20250514", api_key="test-key"
    )
    results = list(model.infer(["Extract this."], temperature=0.3))

    mock_anthropic_class.assert_called_once_with(
        api_key="test-key", base_url=None
    )
    mock_client.messages.create.assert_called_once_with(
        model="claude-sonnet-4-20250514",
        messages=[{"role": "user", "content": "Extract this."}],
        max_tokens=2000,
        temperature=0.3,
    )
    self.assertEqual(
        results,
        [[inference.ScoredOutput(score=1.0, output='{"extraction": {}}')]],
    )

  @mock.patch("anthropic.Anthropic")
  def test_anthropic_omits_unset_temperature(self, mock_anthropic_class):
    mock_client = mock_anthropic_class.return_value
    mock_client.messages.create.return_value = mock.Mock(
        content=[mock.Mock(type="text", text="{}")]
    )

    model = anthropic_provider.AnthropicLanguageModel(
        api_key="test-key", max_tokens=512
    )
    list(model.infer(["p"]))

    _, kwargs = mock_client.messages.create.call_args
    self.assertNotIn("temperature", kwargs)
    self.assertEqual(kwargs["max_tokens"], 512)
    self.assertEqual(kwargs["model"], anthropic_provider.DEFAULT_MODEL_ID)

  def test_anthropic_requires_api_key(self):
    with self.assertRaisesRegex(
        exceptions.InferenceConfigError, "API key not provided"
    ):
      anthropic_provider.AnthropicLanguageModel()

  @mock.patch("anthropic.Anthropic")
  def test_anthropic_api_error(self, mock_anthropic_class):
    mock_anthropic_class.return_value.messages.create.side_effect = (
        RuntimeError("overloaded")
    )
    model = anthropic_provider.AnthropicLanguageModel(api_key="test-key")

    with self.assertRaisesRegex(
        exceptions.InferenceRuntimeError, "Anthropic API error: overloaded"
    ) as cm:
      list(model.infer(["p"]))
    self.assertEqual(cm.exception.provider, "anthropic")
    self.assertIsInstance(cm.exception.original, RuntimeError)


class OpenAILanguageModelTest(absltest.TestCase):

  @mock.patch("openai.OpenAI")
  def test_openai_infer(self, mock_openai_class):
    mock_client = mock.Mock()
    mock_openai_class.return_value = mock_client
    mock_response = mock.Mock()
    mock_response.choices = [
        mock.Mock(message=mock.Mock(content='{"extraction": {}}'))
    ]
    mock_client.chat.completions.create.return_value = mock_response

    model = openai_provider.OpenAILanguageModel(
        model_id="gpt-4o-mini", api_key="test-api-key", temperature=0.5
    )
    results = list(model.infer(["Extract this."]))

    mock_client.chat.completions.create.assert_called_once_with(
        model="gpt-4o-mini",
        messages=[
            {
                "role": "system",
                "content": (
                    "You are a helpful assistant that responds in JSON format."
                ),
            },
            {"role": "user", "content": "Extract this."},
        ],
        n=1,
        temperature=0.5,
        response_format={"type": "json_object"},
    )
    self.assertEqual(
        results,
        [[inference.ScoredOutput(score=1.0, output='{"extraction": {}}')]],
    )

  @mock.patch("openai.OpenAI")
  def test_openai_generation_overrides(self, mock_openai_class):
    mock_client = mock_openai_class.return_value
    mock_client.chat.completions.create.return_value = mock.Mock(
        choices=[mock.Mock(message=mock.Mock(content="{}"))]
    )

    model = openai_provider.OpenAILanguageModel(
        api_key="test-api-key", max_tokens=300, json_mode=False
    )
    list(model.infer(["p"], top_p=0.9, temperature=0.1))

    _, kwargs = mock_client.chat.completions.create.call_args
    self.assertEqual(kwargs["model"], openai_provider.DEFAULT_MODEL_ID)
    self.assertEqual(kwargs["max_tokens"], 300)
    self.assertEqual(kwargs["top_p"], 0.9)
    self.assertEqual(kwargs["temperature"], 0.1)
    self.assertNotIn("response_format", kwargs)

  def test_openai_requires_api_key(self):
    with self.assertRaisesRegex(
        exceptions.InferenceConfigError, "API key not provided"
    ):
      openai_provider.OpenAILanguageModel()

  @mock.patch("openai.OpenAI")
  def test_openai_api_error(self, mock_openai_class):
    mock_openai_class.return_value.chat.completions.create.side_effect = (
        RuntimeError("rate limited")
    )
    model = openai_provider.OpenAILanguageModel(api_key="test-api-key")

    with self.assertRaises(exceptions.InferenceRuntimeError) as cm:
      list(model.infer(["p"]))
    self.assertEqual(cm.exception.provider, "openai")


class GeminiLanguageModelTest(absltest.TestCase):

  @mock.patch("google.genai.Client")
  def test_gemini_infer(self, mock_client_class):
    mock_client = mock_client_class.return_value
    mock_client.models.generate_content.return_value = mock.Mock(
        text='{"extraction": {}}'
    )

    model = gemini_provider.GeminiLanguageModel(
        model_id="gemini-2.5-flash",
        api_key="test-key",
        stop_sequences=["END"],
        unsupported_option=True,
    )
    results = list(model.infer(["Extract this."], max_tokens=100))

    mock_client.models.generate_content.assert_called_once_with(
        model="gemini-2.5-flash",
        contents="Extract this.",
        config={
            "temperature": 0.0,
            "max_output_tokens": 100,
            "stop_sequences": ["END"],
            "response_mime_type": "application/json",
        },
    )
    self.assertEqual(results[0][0].output, '{"extraction": {}}')

  def test_gemini_requires_api_key(self):
    with self.assertRaisesRegex(
        exceptions.InferenceConfigError, "API key not provided"
    ):
      gemini_provider.GeminiLanguageModel()


if __name__ == "__main__":
  absltest.main()
