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

from absl.testing import absltest
from absl.testing import parameterized

from doclint import tokenizer


class CanonicalizeTest(parameterized.TestCase):

  @parameterized.named_parameters(
      dict(testcase_name="none", value=None, expected=""),
      dict(
          testcase_name="string", value="Resize IMAGES", expected="resize images"
      ),
      dict(testcase_name="integer", value=10, expected="10"),
      dict(testcase_name="float", value=0.5, expected="0.5"),
      dict(testcase_name="boolean", value=True, expected="true"),
      dict(
          testcase_name="list",
          value=["First item", "Second"],
          expected="first item\nsecond",
      ),
      dict(
          testcase_name="mapping_sorted_by_key",
          value={"width": 3, "Path": "str"},
          expected="path: str\nwidth: 3",
      ),
      dict(
          testcase_name="nested",
          value=[{"name": "Path"}, ["A", None]],
          expected="name: path\na\n",
      ),
      dict(testcase_name="empty_list", value=[], expected=""),
  )
  def test_canonicalize(self, value, expected):
    self.assertEqual(tokenizer.canonicalize(value), expected)

  def test_mapping_order_does_not_matter(self):
    self.assertEqual(
        tokenizer.canonicalize({"a": 1, "b": [2, 3]}),
        tokenizer.canonicalize({"b": [2, 3], "a": 1}),
    )

  def test_set_order_does_not_matter(self):
    self.assertEqual(
        tokenizer.canonicalize({"zeta", "alpha"}),
        tokenizer.canonicalize({"alpha", "zeta"}),
    )

  def test_tuple_and_list_render_the_same(self):
    self.assertEqual(
        tokenizer.canonicalize(("one", "two")),
        tokenizer.canonicalize(["one", "two"]),
    )


class KeyTermsTest(parameterized.TestCase):

  @parameterized.named_parameters(
      dict(
          testcase_name="drops_short_terms",
          text="the max file size is 10mb",
          expected={"file", "size", "10mb"},
      ),
      dict(
          testcase_name="collapses_duplicates",
          text="files files files",
          expected={"files"},
      ),
      dict(
          testcase_name="underscores_are_word_characters",
          text="when_to_use",
          expected={"when_to_use"},
      ),
      dict(
          testcase_name="punctuation_splits_terms",
          text="resize(image_path, width)",
          expected={"resize", "image_path", "width"},
      ),
      dict(
          testcase_name="non_ascii_letters_split_terms",
          text="café naïve",
          expected=set(),
      ),
      dict(testcase_name="empty", text="", expected=set()),
  )
  def test_key_terms(self, text, expected):
    self.assertEqual(tokenizer.key_terms(text), frozenset(expected))


if __name__ == "__main__":
  absltest.main()
