"""Interconnection-network topology engine.

Generates node embeddings, edge lists and closed-form structural metrics for
mesh, torus, fat-tree and WK-recursive topologies.
"""

__version__ = "0.1.0"

# Core classes and utilities
from .config import EngineConfig
from .engine import TopologyEngine, TopologyResult, build, generate, validate
from .errors import ValidationError
from .metrics import MetricsRecord, calculate_metrics
from .params import (
    DEFAULT_PARAMS,
    Family,
    FatTreeParams,
    MeshParams,
    TopologyParams,
    TorusParams,
    WKParams,
)
from .topology import Topology

__all__ = [
    "DEFAULT_PARAMS",
    "EngineConfig",
    "Family",
    "FatTreeParams",
    "MeshParams",
    "MetricsRecord",
    "Topology",
    "TopologyEngine",
    "TopologyParams",
    "TopologyResult",
    "TorusParams",
    "ValidationError",
    "WKParams",
    "build",
    "calculate_metrics",
    "generate",
    "validate",
]
