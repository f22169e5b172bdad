"""Parameter validation and normalization for topology families.

``validate`` turns a family tag plus raw parameter values (a mapping such as
parsed form input, or an existing parameter record) into a normalized
parameter record. Validation never raises: failures come back as a
``ValidationError`` listing every violated constraint, not only the first.
"""

from __future__ import annotations

import dataclasses
import numbers
import re
from collections.abc import Mapping
from typing import Any

from topoengine.config import GridLimits, LimitsConfig
from topoengine.errors import (
    MissingField,
    NotAnInteger,
    OutOfRange,
    TooLarge,
    UnknownFamily,
    ValidationError,
    Violation,
)
from topoengine.log_config import get_logger
from topoengine.params import (
    PARAM_FIELDS,
    PARAMS_TYPES,
    Family,
    TopologyParams,
)

logger = get_logger(__name__)

# Alternate spellings accepted for parameter names.
_FIELD_ALIASES: dict[str, tuple[str, ...]] = {"dims": ("dimensions",)}

_INT_RE = re.compile(r"^[+-]?\d+$")


def _coerce_int(value: Any) -> int | None:
    """Return ``value`` as an int, or None if it is not integral.

    Accepts ints, integral floats and decimal strings. Booleans are rejected
    even though they are ints in Python.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real):
        as_float = float(value)
        if as_float.is_integer():
            return int(as_float)
        return None
    if isinstance(value, str) and _INT_RE.match(value.strip()):
        try:
            return int(value.strip())
        except ValueError:
            # Beyond the interpreter's int string conversion limit
            return None
    return None


def _as_mapping(raw: Any) -> Mapping[str, Any]:
    """Return raw parameters as a mapping; records are expanded field by field."""
    if raw is None:
        return {}
    if dataclasses.is_dataclass(raw) and not isinstance(raw, type):
        return dataclasses.asdict(raw)
    if isinstance(raw, Mapping):
        return raw
    return {}


def _read_fields(
    family: Family, raw: Any
) -> tuple[dict[str, int], list[Violation]]:
    """Extract and coerce the fields required by ``family``."""
    source = _as_mapping(raw)
    values: dict[str, int] = {}
    violations: list[Violation] = []
    for name in PARAM_FIELDS[family]:
        keys = (name,) + _FIELD_ALIASES.get(name, ())
        present = [key for key in keys if key in source]
        if not present:
            violations.append(MissingField(name))
            continue
        raw_value = source[present[0]]
        value = _coerce_int(raw_value)
        if value is None:
            violations.append(NotAnInteger(name, raw_value))
            continue
        values[name] = value
    return values, violations


def _check_between(
    name: str, values: dict[str, int], low: int, high: int
) -> list[Violation]:
    if name not in values:
        return []
    value = values[name]
    if value < low or value > high:
        return [OutOfRange(name, value, low, high)]
    return []


def _check_grid(values: dict[str, int], limits: GridLimits) -> list[Violation]:
    """Check side length and dimensionality for mesh and torus.

    The side-length ceiling depends on ``dims``; when ``dims`` is itself
    invalid or missing, the loosest ceiling across all dimensionalities is
    used.
    """
    dims = values.get("dims")
    max_size = limits.max_size(dims) if dims is not None else None
    dims_violations: list[Violation] = []
    if dims is not None and max_size is None:
        dims_violations.append(
            OutOfRange("dims", dims, limits.dims_min, limits.dims_max)
        )
    if max_size is None:
        max_size = max(limits.max_size_by_dims.values())
    size_violations = _check_between("size", values, limits.min_size, max_size)
    return size_violations + dims_violations


def _check_ranges(
    family: Family, values: dict[str, int], limits: LimitsConfig
) -> list[Violation]:
    if family is Family.MESH:
        return _check_grid(values, limits.mesh)
    if family is Family.TORUS:
        return _check_grid(values, limits.torus)
    if family is Family.FAT_TREE:
        ft = limits.fat_tree
        return _check_between("k", values, ft.k_min, ft.k_max) + _check_between(
            "n", values, ft.n_min, ft.n_max
        )
    wk = limits.wk
    return _check_between("k", values, wk.k_min, wk.k_max) + _check_between(
        "l", values, wk.l_min, wk.l_max
    )


def _check_size(params: TopologyParams, limits: LimitsConfig) -> list[Violation]:
    """Check derived counts against the safety caps.

    Only called once every field is in range, so the counts stay small.
    """
    violations: list[Violation] = []
    if params.family is Family.FAT_TREE:
        hosts = params.num_hosts  # type: ignore[union-attr]
        if hosts > limits.fat_tree.max_hosts:
            violations.append(TooLarge(hosts, limits.fat_tree.max_hosts))
    if limits.max_nodes is not None and params.num_nodes > limits.max_nodes:
        violations.append(TooLarge(params.num_nodes, limits.max_nodes))
    return violations


def validate(
    family: Any, raw: Any, limits: LimitsConfig | None = None
) -> TopologyParams | ValidationError:
    """Validate and normalize raw parameters for a topology family.

    Args:
        family: Family tag (``Family`` member or string alias).
        raw: Mapping of parameter names to values, or an existing parameter
            record. Validating an already-normalized record returns an equal
            record.
        limits: Bounds to check against. Defaults to ``LimitsConfig()``.

    Returns:
        The normalized parameter record, or a ``ValidationError`` carrying
        every violated constraint.
    """
    parsed = Family.parse(family)
    if parsed is None:
        logger.debug(f"Rejected unknown topology family: {family!r}")
        return ValidationError(family, [UnknownFamily(family)])

    limits = limits or LimitsConfig()
    values, violations = _read_fields(parsed, raw)
    violations.extend(_check_ranges(parsed, values, limits))
    if violations:
        logger.debug(f"{parsed.value}: {len(violations)} parameter violation(s)")
        return ValidationError(parsed, violations)

    params = PARAMS_TYPES[parsed](**values)
    size_violations = _check_size(params, limits)
    if size_violations:
        return ValidationError(parsed, size_violations)
    return params
