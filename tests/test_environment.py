"""Tests for the engine environment store."""

from __future__ import annotations

import pytest

from imagepipe.environment import (
    Environment,
    EnvironmentKey,
    EnvironmentOption,
    FilterKind,
    ResizeSamplingFilter,
)


def test_unset_key_returns_none():
    env = Environment()
    assert env.get(EnvironmentKey.RESIZE_SAMPLING_FILTER) is None
    assert len(env) == 0


def test_insert_or_update_is_last_write_wins():
    env = Environment()
    env.insert_or_update(ResizeSamplingFilter(FilterKind.TRIANGLE))
    env.insert_or_update(ResizeSamplingFilter(FilterKind.NEAREST))

    assert len(env) == 1
    assert env.get(EnvironmentKey.RESIZE_SAMPLING_FILTER) == ResizeSamplingFilter(FilterKind.NEAREST)


def test_key_does_not_depend_on_value():
    assert ResizeSamplingFilter(FilterKind.LANCZOS3).key is EnvironmentKey.RESIZE_SAMPLING_FILTER
    assert ResizeSamplingFilter(FilterKind.NEAREST).key == ResizeSamplingFilter(FilterKind.GAUSSIAN).key
    assert EnvironmentKey.RESIZE_SAMPLING_FILTER.value == "Resize_SamplingFilter"


def test_sampling_filter_is_an_option():
    assert isinstance(ResizeSamplingFilter(FilterKind.NEAREST), EnvironmentOption)


def test_filter_kind_default_is_gaussian():
    assert FilterKind.default() is FilterKind.GAUSSIAN


@pytest.mark.parametrize(
    "name, kind",
    [
        ("nearest", FilterKind.NEAREST),
        ("Triangle", FilterKind.TRIANGLE),
        ("catmullrom", FilterKind.CATMULL_ROM),
        (" gaussian ", FilterKind.GAUSSIAN),
        ("LANCZOS3", FilterKind.LANCZOS3),
    ],
)
def test_filter_kind_from_name(name, kind):
    assert FilterKind.from_name(name) is kind


def test_filter_kind_from_unknown_name():
    with pytest.raises(ValueError, match="Unknown sampling filter"):
        FilterKind.from_name("bicubic")
