"""
Kubernetes quantity parsing.

CPU amounts normalize to millicores and memory amounts to mebibytes. Every
parser is total: an empty, missing or unrecognised quantity counts as 0.
"""

import re
from typing import Callable, Iterable, List, Optional, Tuple

from ..models.resources import ResourceKind

Rule = Tuple[re.Pattern, Callable[[re.Match], int]]


def _fractional_millicores(match: re.Match) -> int:
    whole, frac = match.group(1), match.group(2)
    # Three digits of the fraction are millicores; the rest are dropped, not rounded.
    return int(whole) * 1000 + int(frac.ljust(3, "0")[:3])


CPU_RULES: List[Rule] = [
    (re.compile(r"(\d+)m"), lambda m: int(m.group(1))),
    (re.compile(r"(\d+)"), lambda m: int(m.group(1)) * 1000),
    (re.compile(r"(\d+)\.(\d+)"), _fractional_millicores),
]

MEMORY_RULES: List[Rule] = [
    (re.compile(r"(\d+)Ki"), lambda m: int(m.group(1)) // 1024),
    (re.compile(r"(\d+)Mi"), lambda m: int(m.group(1))),
    (re.compile(r"(\d+)Gi"), lambda m: int(m.group(1)) * 1024),
    # Plain bytes: two truncating divisions, so 1048575 bytes is 0Mi.
    (re.compile(r"(\d+)"), lambda m: int(m.group(1)) // 1024 // 1024),
]

# metrics.k8s.io reports CPU usage in nanocores or microcores.
CPU_USAGE_RULES: List[Rule] = [
    (re.compile(r"(\d+)n"), lambda m: int(m.group(1)) // 1_000_000),
    (re.compile(r"(\d+)u"), lambda m: int(m.group(1)) // 1000),
] + CPU_RULES


def apply_rules(rules: List[Rule], quantity: Optional[str]) -> int:
    """Returns the conversion of the first rule matching the whole quantity, or 0."""
    if not quantity:
        return 0
    quantity = str(quantity).strip()
    for pattern, convert in rules:
        match = pattern.fullmatch(quantity)
        if match:
            return convert(match)
    return 0


def parse_cpu(cpu: Optional[str]) -> int:
    """Converts a K8s CPU string ('250m', '2', '0.5') to millicores."""
    return apply_rules(CPU_RULES, cpu)


def parse_memory(memory: Optional[str]) -> int:
    """Converts a K8s memory string ('512Ki', '500Mi', '1Gi', bytes) to mebibytes."""
    return apply_rules(MEMORY_RULES, memory)


def parse_cpu_usage(cpu: Optional[str]) -> int:
    """Converts a metrics API CPU usage string to millicores."""
    return apply_rules(CPU_USAGE_RULES, cpu)


def parse_memory_usage(memory: Optional[str]) -> int:
    """Converts a metrics API memory usage string to mebibytes."""
    return parse_memory(memory)


def parse_quantity(quantity: Optional[str], kind: ResourceKind) -> int:
    if kind == ResourceKind.CPU:
        return parse_cpu(quantity)
    return parse_memory(quantity)


def sum_requests(requests: Iterable[Optional[str]], kind: ResourceKind) -> int:
    """Sums raw request strings of one kind after normalizing each."""
    return sum(parse_quantity(request, kind) for request in requests)


def parse_count(value: Optional[str]) -> int:
    """Parses an integer count such as allocatable pods; anything else is 0."""
    if value is None:
        return 0
    try:
        return int(str(value).strip())
    except ValueError:
        return 0
