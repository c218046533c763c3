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

"""Exception hierarchy for doclint.

Everything doclint raises on purpose derives from `DoclintError`, so callers
(and the MCP server) can report any failure with a single except clause.
"""

from __future__ import annotations

__all__ = [
    "DoclintError",
    "InferenceError",
    "InferenceConfigError",
    "InferenceRuntimeError",
]


class DoclintError(Exception):
  """Root of all doclint errors."""


class InferenceError(DoclintError):
  """A language model could not be created or did not answer usefully."""


class InferenceConfigError(InferenceError):
  """The model cannot be created: missing SDK, missing key or bad arguments."""


class InferenceRuntimeError(InferenceError):
  """The upstream model call failed.

  Calls are never retried. The SDK exception is kept as `original`.
  """

  def __init__(
      self,
      message: str,
      *,
      original: BaseException | None = None,
      provider: str | None = None,
  ) -> None:
    super().__init__(message)
    self.original = original
    self.provider = provider
