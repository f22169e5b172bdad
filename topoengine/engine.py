"""Topology engine facade.

``TopologyEngine`` ties validation, generation and metrics together behind
one object configured by an ``EngineConfig``. Every call is independent and
side-effect free, so one engine may be shared across threads.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from topoengine.config import EngineConfig
from topoengine.errors import UnknownFamily, ValidationError
from topoengine.generators import generate as _generate
from topoengine.log_config import get_logger
from topoengine.metrics import MetricsRecord, calculate_metrics
from topoengine.params import DEFAULT_PARAMS, Family, TopologyParams
from topoengine.topology import Topology
from topoengine.validation import validate as _validate

logger = get_logger(__name__)


@dataclass(frozen=True)
class TopologyResult:
    """Generated topology together with its closed-form metrics."""

    topology: Topology
    metrics: MetricsRecord


class TopologyEngine:
    """Validate parameters, generate topologies and compute their metrics.

    Args:
        config: Engine configuration; defaults to ``EngineConfig()``.
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()

    def validate(self, family: Any, raw: Any) -> TopologyParams | ValidationError:
        """Validate raw parameters against the configured limits.

        Returns the normalized record or a ``ValidationError``; never raises.
        """
        return _validate(family, raw, self.config.limits)

    def generate(self, params: TopologyParams) -> Topology:
        """Generate nodes and edges for validated parameters."""
        return _generate(params, self.config.layout)

    def metrics(self, family: Any, params: TopologyParams) -> MetricsRecord:
        """Return closed-form metrics for validated parameters of ``family``.

        Raises:
            ValueError: If ``family`` is unknown or ``params`` belong to a
                different family.
        """
        parsed = Family.parse(family)
        if parsed is None:
            raise ValidationError(family, [UnknownFamily(family)])
        if params.family is not parsed:
            raise ValueError(
                f"Parameters for '{params.family.value}' given for family "
                f"'{parsed.value}'"
            )
        return calculate_metrics(params)

    def build(self, family: Any, raw: Any = None) -> TopologyResult:
        """Validate, generate and measure in one step.

        Args:
            family: Family tag or alias.
            raw: Raw parameters; None selects the family defaults.

        Returns:
            Generated topology with its metrics.

        Raises:
            ValidationError: If the family or parameters are invalid.
        """
        parsed = Family.parse(family)
        if raw is None and parsed is not None:
            raw = DEFAULT_PARAMS[parsed]

        result = self.validate(family, raw)
        if isinstance(result, ValidationError):
            logger.warning(str(result))
            raise result

        topology = self.generate(result)
        metrics = calculate_metrics(result)
        logger.info(
            f"Built {result.family.value} {result}: "
            f"{topology.num_nodes:,} nodes, {topology.num_edges:,} edges"
        )
        return TopologyResult(topology=topology, metrics=metrics)


_DEFAULT_ENGINE = TopologyEngine()


def validate(family: Any, raw: Any) -> TopologyParams | ValidationError:
    """Validate raw parameters with the default limits."""
    return _DEFAULT_ENGINE.validate(family, raw)


def generate(params: TopologyParams) -> Topology:
    """Generate a topology with the default layout."""
    return _DEFAULT_ENGINE.generate(params)


def metrics(family: Any, params: TopologyParams) -> MetricsRecord:
    """Return closed-form metrics for ``params``."""
    return _DEFAULT_ENGINE.metrics(family, params)


def build(family: Any, raw: Any = None) -> TopologyResult:
    """Validate, generate and compute metrics with the default engine."""
    return _DEFAULT_ENGINE.build(family, raw)
