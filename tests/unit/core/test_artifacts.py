"""Tests for build artifact paths."""

import re

import pytest

from chunksplit.core import artifacts

pytestmark = pytest.mark.unit


def test_new_build_id_format():
    """Test that build ids are timestamped and distinct."""
    first = artifacts.new_build_id()

    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}_\d{6}_[0-9a-f]{4}", first)
    assert first != artifacts.new_build_id()


def test_phase_dir_is_created(workspace):
    """Test that phase directories live under var/builds/<build_id>."""
    path = artifacts.phase_dir("b1", "split")

    assert path.is_dir()
    assert path == workspace / "var" / "builds" / "b1" / "split"
    assert artifacts.builds_dir() == workspace / "var" / "builds"
