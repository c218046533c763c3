"""Pytest configuration for absltest-based tests."""

from absl import flags


def pytest_configure(config):
  del config  # Unused.
  # absltest.main() normally parses flags; under pytest they must be marked
  # parsed so helpers such as create_tempdir() can read --test_tmpdir.
  if not flags.FLAGS.is_parsed():
    flags.FLAGS.mark_as_parsed()
