"""Tests for the WK-recursive generator."""

from __future__ import annotations

import math
from collections import Counter

import networkx as nx
import numpy as np
import pytest

from topoengine.generators.wk_recursive import (
    base_k_digits,
    generate_wk_recursive,
    open_nodes,
    repeated_digit,
)
from topoengine.params import WKParams

SMALL_WK = [(3, 1), (3, 2), (4, 2), (3, 3), (5, 2), (4, 3)]


def test_repeated_digit() -> None:
    assert repeated_digit(2, 3, 4) == 2 * 16 + 2 * 4 + 2
    assert repeated_digit(1, 0, 5) == 0


def test_base_k_digits_most_significant_first() -> None:
    digits = base_k_digits(3, 2)

    assert digits.shape == (9, 2)
    assert digits[5].tolist() == [1, 2]
    assert digits[8].tolist() == [2, 2]


def test_open_nodes() -> None:
    assert open_nodes(4, 2) == [0, 5, 10, 15]
    assert open_nodes(3, 3) == [0, 13, 26]


def test_k4_l2_scenario() -> None:
    topo = generate_wk_recursive(WKParams(k=4, l=2))
    degrees = topo.degrees()

    assert topo.num_nodes == 16
    assert Counter(degrees.tolist()) == {4: 12, 3: 4}
    assert sorted(topo.nodes_with_role("open")) == [0, 5, 10, 15]
    assert nx.diameter(nx.Graph(list(topo.edges))) == 3


@pytest.mark.parametrize("k, l", SMALL_WK)
def test_degree_profile(k, l) -> None:
    topo = generate_wk_recursive(WKParams(k=k, l=l))
    degrees = topo.degrees()
    corners = open_nodes(k, l)

    assert topo.num_nodes == k**l
    assert (degrees[corners] == k - 1).all()
    interior = np.setdiff1d(np.arange(k**l), corners)
    assert (degrees[interior] == k).all()


@pytest.mark.parametrize("k, l", SMALL_WK)
def test_edge_count_and_diameter(k, l) -> None:
    topo = generate_wk_recursive(WKParams(k=k, l=l))
    graph = nx.Graph(list(topo.edges))

    assert topo.num_edges == (k ** (l + 1) - k) // 2
    assert nx.diameter(graph) == 2**l - 1


def test_base_blocks_are_cliques() -> None:
    k = 4
    topo = generate_wk_recursive(WKParams(k=k, l=2))
    local = set(topo.edges_of_kind("local"))

    for start in range(0, 16, k):
        block = range(start, start + k)
        for u in block:
            for v in block:
                if u < v:
                    assert (u, v) in local


def test_level_edges_join_sibling_blocks() -> None:
    topo = generate_wk_recursive(WKParams(k=3, l=2))

    assert sorted(topo.edges_of_kind("level")) == [(1, 3), (2, 6), (5, 7)]


def test_single_level_is_complete_graph() -> None:
    topo = generate_wk_recursive(WKParams(k=5, l=1))

    assert nx.is_isomorphic(nx.Graph(list(topo.edges)), nx.complete_graph(5))
    assert topo.edges_of_kind("level") == []


def test_positions_nested_circles() -> None:
    params = WKParams(k=4, l=2)
    topo = generate_wk_recursive(params)

    # Top-level circle radius 20, children scaled by 0.35 around each center.
    first = topo.positions[0]
    assert np.allclose(first, [0.0, 20.0 + 7.0, 0.0])
    block_centers = topo.positions.reshape(4, 4, 3).mean(axis=1)
    assert np.allclose(np.linalg.norm(block_centers, axis=1), 20.0)
    assert np.allclose(topo.positions[:, 2], 0.0)


def test_small_k_uses_wider_scale() -> None:
    topo = generate_wk_recursive(WKParams(k=3, l=2))

    # Node 1: top digit 0 (angle pi/2), leaf digit 1 (angle pi/2 + 2pi/3)
    angle = math.pi / 2 + 2 * math.pi / 3
    expected = [9.0 * math.cos(angle), 20.0 + 9.0 * math.sin(angle), 0.0]
    assert np.allclose(topo.positions[1], expected)


def test_deepest_network_generates() -> None:
    topo = generate_wk_recursive(WKParams(k=8, l=5))

    assert topo.num_nodes == 8**5
    assert topo.num_edges == (8**6 - 8) // 2
    assert len(topo.nodes_with_role("open")) == 8
