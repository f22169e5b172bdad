"""Command line interface for topology generation and metrics."""

from __future__ import annotations

import argparse
import json
import sys
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from topoengine.config import EngineConfig
from topoengine.engine import TopologyEngine
from topoengine.errors import ValidationError
from topoengine.log_config import get_logger
from topoengine.params import DEFAULT_PARAMS, Family

logger = get_logger(__name__)


@contextmanager
def Timer(description: str):
    """Context manager for timing operations with both print and log output.

    Args:
        description: Operation description for timing messages.

    Yields:
        None: Context manager yields nothing.
    """
    print(f"🔄 {description}...")
    logger.info(f"Starting {description}")
    start = time.time()
    try:
        yield
        elapsed = time.time() - start
        print(f"✅ {description} (completed in {elapsed:.1f}s)")
        logger.info(f"Completed {description} in {elapsed:.1f}s")
    except Exception as e:
        elapsed = time.time() - start
        print(f"❌ {description} (failed after {elapsed:.1f}s)")
        logger.error(f"Failed {description} after {elapsed:.1f}s: {e}")
        raise


def _load_config(config_path: str | None) -> EngineConfig:
    """Load configuration, or return defaults when no path is given.

    Raises:
        SystemExit: If configuration loading or validation fails.
    """
    if not config_path:
        return EngineConfig()
    try:
        config = EngineConfig.from_yaml(Path(config_path))
        logger.info(f"Loaded configuration from {config_path}")
        return config
    except FileNotFoundError:
        print(f"❌ Configuration file not found: {config_path}")
        logger.error(f"Configuration file not found: {config_path}")
        sys.exit(2)  # Config problem
    except Exception as e:
        logger.error(f"Failed to load config: {e}")
        print(f"❌ Configuration error: {e}")
        print(f"💡 Check YAML syntax in: {config_path}")
        sys.exit(2)  # Config problem


def _parse_params(pairs: list[str] | None) -> dict[str, str] | None:
    """Parse ``key=value`` strings; None when no parameters were given."""
    if not pairs:
        return None
    params: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            print(f"❌ Invalid parameter '{pair}', expected key=value")
            sys.exit(3)
        params[key.strip()] = value.strip()
    return params


def _build(args: argparse.Namespace) -> tuple[EngineConfig, Any]:
    """Load config and build the requested topology, exiting on invalid input."""
    config = _load_config(getattr(args, "config", None))
    engine = TopologyEngine(config)
    try:
        return config, engine.build(args.family, _parse_params(args.param))
    except ValidationError as e:
        print("❌ Invalid topology parameters:")
        for violation in e.violations:
            print(f"   - {violation.message}")
        sys.exit(3)  # Validation failure


def _print_metrics(record: Any) -> None:
    rows = [
        ("Symmetry", record.symmetry),
        ("Homogeneity", record.homogeneity),
        ("Degree", str(record.degree)),
        ("Hop count (diameter)", record.diameter),
        ("Bisection width", record.bisection_width),
        ("Connectivity", record.connectivity),
    ]
    if record.total_hosts is not None:
        rows.append(("Total hosts", f"{record.total_hosts:,}"))
        rows.append(("Total switches", f"{record.total_nodes:,}"))
    else:
        rows.append(("Total nodes", f"{record.total_nodes:,}"))
    rows.append(("Total links", f"{record.total_links:,}"))
    width = max(len(label) for label, _ in rows)
    for label, value in rows:
        print(f"{label + ':':<{width + 1}} {value}")


def families_command(args: argparse.Namespace) -> None:
    """List supported families with their defaults and bounds."""
    limits = _load_config(getattr(args, "config", None)).limits

    print("Topology Families")
    print("=" * 30)
    for family in Family:
        defaults = ", ".join(
            f"{k}={v}" for k, v in vars(DEFAULT_PARAMS[family]).items()
        )
        print(f"{family.value:<10} defaults: {defaults}")

    print("\nBounds")
    print("=" * 30)
    for name, grid in (("mesh", limits.mesh), ("torus", limits.torus)):
        sizes = ", ".join(
            f"dims={d}: {grid.min_size}-{s}"
            for d, s in sorted(grid.max_size_by_dims.items())
        )
        print(f"{name:<10} size by dims: {sizes}")
    ft = limits.fat_tree
    print(
        f"{'fat_tree':<10} k: {ft.k_min}-{ft.k_max}, n: {ft.n_min}-{ft.n_max}, "
        f"hosts <= {ft.max_hosts:,}"
    )
    print(
        f"{'wk':<10} k: {limits.wk.k_min}-{limits.wk.k_max}, "
        f"l: {limits.wk.l_min}-{limits.wk.l_max}"
    )
    if limits.max_nodes is not None:
        print(f"Global node cap: {limits.max_nodes:,}")


def generate_command(args: argparse.Namespace) -> None:
    """Generate a topology and print a summary or its JSON document."""
    from topoengine.graph import topology_to_dict

    config, result = _build(args)
    topology = result.topology
    if args.json:
        document = topology_to_dict(topology, result.metrics)
        print(json.dumps(document, indent=config.output.json_indent))
        return

    print(f"📊 {topology.family.value}: {topology.params}")
    print(f"   Nodes: {topology.num_nodes:,}")
    print(f"   Edges: {topology.num_edges:,}")
    for role in sorted(set(topology.roles)):
        print(f"   Role '{role}': {len(topology.nodes_with_role(role)):,}")
    for kind in sorted(set(topology.edge_kinds)):
        print(f"   Edge kind '{kind}': {len(topology.edges_of_kind(kind)):,}")


def metrics_command(args: argparse.Namespace) -> None:
    """Print the closed-form metrics of a topology."""
    _, result = _build(args)
    print(f"Topology Analysis: {result.topology.family.value}")
    print("=" * 30)
    _print_metrics(result.metrics)


def check_command(args: argparse.Namespace) -> None:
    """Compare closed-form metrics with measurements of the generated graph."""
    from topoengine.graph import compare, measure

    _, result = _build(args)
    with Timer("Measure generated graph"):
        measured = measure(result.topology)
    issues = compare(result.metrics, measured)
    if issues:
        print("❌ Closed-form metrics disagree with the generated graph:")
        for issue in issues:
            print(f"   - {issue}")
        sys.exit(3)
    print("✅ Closed-form metrics match the generated graph")


def _add_topology_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "family",
        help="Topology family: mesh, torus, fat_tree or wk",
    )
    parser.add_argument(
        "-p",
        "--param",
        action="append",
        default=None,
        metavar="KEY=VALUE",
        help="Topology parameter, repeatable (e.g. -p size=4 -p dims=2). "
        "Family defaults are used when omitted.",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="Optional YAML configuration file with limits and layout",
    )


def main() -> None:
    """Parse command line arguments and execute the appropriate subcommand.

    Configures logging, parses CLI arguments, and dispatches to the correct
    command function (families, generate, metrics or check).
    """
    parser = argparse.ArgumentParser(
        prog="topoengine",
        description="Generate interconnection-network topologies and their structural metrics.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Global options
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress console output (logs only)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    families_parser = subparsers.add_parser(
        "families", help="List topology families, defaults and bounds"
    )
    families_parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="Optional YAML configuration file with limits",
    )
    families_parser.set_defaults(func=families_command)

    generate_parser = subparsers.add_parser(
        "generate", help="Generate a topology and summarize it"
    )
    _add_topology_arguments(generate_parser)
    generate_parser.add_argument(
        "--json",
        action="store_true",
        help="Print nodes, edges and metrics as JSON to stdout",
    )
    generate_parser.set_defaults(func=generate_command)

    metrics_parser = subparsers.add_parser(
        "metrics", help="Show closed-form topology metrics"
    )
    _add_topology_arguments(metrics_parser)
    metrics_parser.set_defaults(func=metrics_command)

    check_parser = subparsers.add_parser(
        "check", help="Cross-check closed-form metrics against the generated graph"
    )
    _add_topology_arguments(check_parser)
    check_parser.set_defaults(func=check_command)

    # Parse arguments and dispatch
    args = parser.parse_args()

    # Configure logging based on arguments
    import logging

    from topoengine.log_config import set_global_log_level

    if args.verbose:
        log_level = logging.DEBUG
    else:
        log_level = logging.INFO

    set_global_log_level(log_level)

    # Suppress print output if --quiet is set
    if args.quiet:
        import builtins

        builtins.print = lambda *args, **kwargs: None

    if not hasattr(args, "func") or args.func is None:
        parser.print_help()
        sys.exit(1)

    try:
        args.func(args)
    except SystemExit:
        raise
    except Exception as e:
        logger.error(f"Command failed: {e}")
        print("💡 Use -v for detailed error information")
        sys.exit(1)  # Runtime error


if __name__ == "__main__":
    main()
