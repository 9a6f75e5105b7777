# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

import pytest

from origin import Responder, Root


@pytest.fixture
def chain():
    """Three-level hierarchy A -> B -> C where only B overrides ``method``."""
    A = Root.extend(
        name="A",
        initializer=lambda self, label="a": setattr(self, "label", label),
        properties={
            "method": lambda self: f"A.method({self.label})",
            "only_a": lambda self: "only in A",
            "kind": "a",
        },
    )
    B = A.extend(
        name="B",
        properties={"method": lambda self: f"B.method({self.label})"},
    )
    C = B.extend(name="C")
    return A, B, C


@pytest.fixture
def responders():
    """A (source, listener) pair of fresh responders."""
    return Responder(), Responder()
