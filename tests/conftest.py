# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

import pytest

from lionarray.protocols.generic.array import as_array


class RangeRecorder:
    """Array observer that records every range change it receives."""

    def __init__(self):
        self.events = []
        self.sources = []
        self.lengths = []

    def _record(self, phase, array, start, removed, added):
        self.events.append((phase, start, removed, added))
        self.sources.append(array)
        self.lengths.append(len(array))

    def array_will_change(self, array, start, removed, added):
        self._record("will", array, start, removed, added)

    def array_did_change(self, array, start, removed, added):
        self._record("did", array, start, removed, added)

    def clear(self):
        self.events.clear()
        self.sources.clear()
        self.lengths.clear()


@pytest.fixture
def recorder():
    return RangeRecorder()


@pytest.fixture
def pets():
    return as_array(["dog", "cat", "fish"])
