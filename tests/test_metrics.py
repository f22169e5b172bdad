"""Tests for closed-form topology metrics."""

from __future__ import annotations

import pytest

from topoengine.generators import generate
from topoengine.graph import compare, measure
from topoengine.metrics import DegreeRange, calculate_metrics
from topoengine.params import (
    Family,
    FatTreeParams,
    MeshParams,
    TorusParams,
    WKParams,
)


def test_mesh_scenario() -> None:
    record = calculate_metrics(MeshParams(size=3, dims=2))

    assert record.family is Family.MESH
    assert record.total_nodes == 9
    assert record.total_links == 12
    assert record.degree == DegreeRange(2, 4)
    assert record.diameter == 4
    assert record.connectivity == 2
    assert record.bisection_width == 3
    assert record.symmetric is False
    assert record.homogeneous is False
    assert record.total_hosts is None


def test_torus_scenario() -> None:
    record = calculate_metrics(TorusParams(size=4, dims=2))

    assert record.total_nodes == 16
    assert record.total_links == 32
    assert record.degree == DegreeRange(4, 4)
    assert record.degree.is_constant
    assert record.diameter == 4
    assert record.connectivity == 4
    assert record.bisection_width == 8
    assert record.symmetric is True
    assert record.homogeneous is True


def test_fat_tree_scenario() -> None:
    record = calculate_metrics(FatTreeParams(k=2, n=3))

    assert record.total_hosts == 8
    assert record.total_nodes == 12
    assert record.diameter == 6
    assert record.connectivity == 2
    assert record.degree == DegreeRange(4, 4)
    assert record.total_links == 24
    assert record.bisection_width == 4


def test_fat_tree_odd_host_count_bisection() -> None:
    record = calculate_metrics(FatTreeParams(k=3, n=3))

    assert record.total_hosts == 27
    assert record.bisection_width == 13


def test_wk_scenario() -> None:
    record = calculate_metrics(WKParams(k=4, l=2))

    assert record.total_nodes == 16
    assert record.degree == DegreeRange(3, 4)
    assert record.diameter == 3
    assert record.connectivity == 3
    assert record.bisection_width == 4
    assert record.total_links == (16 * 4 - 4) // 2


def test_degenerate_refinements() -> None:
    assert calculate_metrics(MeshParams(size=2, dims=3)).degree == DegreeRange(3, 3)
    wk_single = calculate_metrics(WKParams(k=5, l=1))
    assert wk_single.degree == DegreeRange(4, 4)
    assert wk_single.homogeneous is True


def test_degree_range_str() -> None:
    assert str(DegreeRange(4, 4)) == "4"
    assert str(DegreeRange(2, 4)) == "Max: 4, Min: 2"


def test_as_dict_is_json_friendly() -> None:
    data = calculate_metrics(FatTreeParams(k=2, n=2)).as_dict()

    assert data["family"] == "fat_tree"
    assert data["degree"] == {"min": 4, "max": 4}
    assert data["total_hosts"] == 4


@pytest.mark.parametrize(
    "params",
    [
        MeshParams(2, 2),
        MeshParams(4, 2),
        MeshParams(3, 3),
        MeshParams(3, 4),
        TorusParams(3, 2),
        TorusParams(6, 2),
        TorusParams(3, 3),
        TorusParams(4, 3),
        FatTreeParams(2, 2),
        FatTreeParams(2, 4),
        FatTreeParams(3, 3),
        FatTreeParams(4, 2),
        WKParams(3, 1),
        WKParams(3, 3),
        WKParams(4, 2),
        WKParams(5, 2),
    ],
)
def test_closed_forms_match_generated_graph(params) -> None:
    record = calculate_metrics(params)
    measured = measure(generate(params))

    assert compare(record, measured) == []
