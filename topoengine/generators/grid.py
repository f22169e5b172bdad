"""Mesh and torus generators (k-ary n-cubes).

Both families share the same node numbering: a ``dims``-digit mixed-radix
index in row-major order, so node ``i`` has coordinates
``np.unravel_index(i, (size,) * dims)``. They differ only in whether the last
node on each axis wraps back to coordinate 0.
"""

from __future__ import annotations

import numpy as np

from topoengine.config import LayoutConfig
from topoengine.log_config import get_logger
from topoengine.params import MeshParams, TorusParams
from topoengine.topology import EdgeBuilder, Topology

logger = get_logger(__name__)


def grid_coordinates(size: int, dims: int) -> np.ndarray:
    """Return integer lattice coordinates of every node, shape ``(size**dims, dims)``.

    Row ``i`` holds the coordinates of node ``i`` in row-major order, i.e.
    ``i = sum(c[j] * size**(dims - 1 - j))``.
    """
    return np.indices((size,) * dims).reshape(dims, -1).T


def grid_index(coords: tuple[int, ...] | list[int], size: int) -> int:
    """Return the row-major index of a coordinate tuple."""
    index = 0
    for c in coords:
        index = index * size + int(c)
    return index


def _axis_strides(size: int, dims: int) -> list[int]:
    return [size ** (dims - 1 - axis) for axis in range(dims)]


def _centered(coords: np.ndarray, size: int) -> np.ndarray:
    return coords.astype(float) - size / 2


def _mesh_positions(coords: np.ndarray, size: int, shear: float) -> np.ndarray:
    """Embed mesh lattice coordinates in 3-D.

    2-D meshes lie in the XZ plane. For 4-D meshes the fourth coordinate is
    not spatial: each ``w`` slice is shifted along all three axes by
    ``(w - size/2) * shear`` so slices show up as nested, offset cubes.
    """
    n_nodes, dims = coords.shape
    centered = _centered(coords, size)
    positions = np.zeros((n_nodes, 3), dtype=float)
    if dims == 2:
        positions[:, 0] = centered[:, 0]
        positions[:, 2] = centered[:, 1]
    elif dims == 3:
        positions[:, :] = centered
    else:
        offset = centered[:, 3] * shear
        positions[:, :] = centered[:, :3] + offset[:, None]
    return positions


def _torus_positions(coords: np.ndarray, size: int) -> np.ndarray:
    """Embed torus lattice coordinates in 3-D; 2-D tori lie in the XY plane."""
    n_nodes, dims = coords.shape
    positions = np.zeros((n_nodes, 3), dtype=float)
    positions[:, :dims] = _centered(coords, size)
    return positions


def _grid_edges(coords: np.ndarray, size: int, wrap: bool) -> EdgeBuilder:
    """Connect every node to its +1 neighbor on each axis.

    With ``wrap`` the last node on an axis connects back to coordinate 0
    (edge kind ``wrap``). When ``size == 2`` that wrap target is the forward
    neighbor already connected, and the builder drops the duplicate.
    """
    dims = coords.shape[1]
    strides = _axis_strides(size, dims)
    builder = EdgeBuilder()
    for node, node_coords in enumerate(coords.tolist()):
        for axis, c in enumerate(node_coords):
            if c < size - 1:
                builder.add(node, node + strides[axis], "link")
            elif wrap:
                builder.add(node, node - c * strides[axis], "wrap")
    return builder


def generate_mesh(params: MeshParams, layout: LayoutConfig | None = None) -> Topology:
    """Generate a ``size``-ary ``dims``-dimensional mesh.

    Args:
        params: Validated mesh parameters.
        layout: Embedding constants; defaults to ``LayoutConfig()``.

    Returns:
        Topology with ``size**dims`` nodes and
        ``dims * size**(dims - 1) * (size - 1)`` edges.
    """
    layout = layout or LayoutConfig()
    coords = grid_coordinates(params.size, params.dims)
    positions = _mesh_positions(coords, params.size, layout.mesh_shear)
    edges, kinds = _grid_edges(coords, params.size, wrap=False).build()
    logger.debug(
        f"Mesh {params.size}^{params.dims}: {len(positions)} nodes, {len(edges)} edges"
    )
    return Topology(
        params=params,
        positions=positions,
        edges=edges,
        roles=("node",) * len(positions),
        edge_kinds=kinds,
    )


def generate_torus(
    params: TorusParams, layout: LayoutConfig | None = None
) -> Topology:
    """Generate a ``size``-ary ``dims``-dimensional torus.

    Args:
        params: Validated torus parameters.
        layout: Unused; accepted so every generator shares one signature.

    Returns:
        Topology where every node has ``2 * dims`` incident edges when
        ``size > 2``.
    """
    coords = grid_coordinates(params.size, params.dims)
    positions = _torus_positions(coords, params.size)
    edges, kinds = _grid_edges(coords, params.size, wrap=True).build()
    logger.debug(
        f"Torus {params.size}^{params.dims}: {len(positions)} nodes, {len(edges)} edges"
    )
    return Topology(
        params=params,
        positions=positions,
        edges=edges,
        roles=("node",) * len(positions),
        edge_kinds=kinds,
    )
