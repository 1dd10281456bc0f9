# tests/utils/test_quantity_parsing.py

import pytest

from kubefit.models.resources import ResourceKind
from kubefit.utils.k8s_utils import (
    parse_count,
    parse_cpu,
    parse_cpu_usage,
    parse_memory,
    parse_memory_usage,
    sum_requests,
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("100m", 100),
        ("1", 1000),
        ("0.5", 500),
        ("1.5", 1500),
        ("2.25", 2250),
        ("0.25", 250),
        ("", 0),
        ("garbage", 0),
        ("1.23456", 1234),
        ("1.2349", 1234),
        ("4000m", 4000),
        (" 250m ", 250),
    ],
)
def test_parse_cpu(raw, expected):
    assert parse_cpu(raw) == expected


def test_parse_cpu_truncates_rather_than_rounds():
    # 0.9999 cores would round to 1000m; truncation keeps 999m.
    assert parse_cpu("0.9999") == 999


def test_parse_cpu_none_and_unsupported_forms_are_zero():
    assert parse_cpu(None) == 0
    assert parse_cpu("-1") == 0
    assert parse_cpu("1.5m") == 0
    assert parse_cpu("2k") == 0


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("512Ki", 0),
        ("2048Ki", 2),
        ("500Mi", 500),
        ("1Gi", 1024),
        ("1048576", 1),
        ("", 0),
        ("7901788Ki", 7716),
        ("garbage", 0),
    ],
)
def test_parse_memory(raw, expected):
    assert parse_memory(raw) == expected


def test_parse_memory_bytes_use_two_truncating_divisions():
    assert parse_memory("1048575") == 0
    assert parse_memory("2097151") == 1


def test_parse_memory_unsupported_suffixes_are_zero():
    assert parse_memory(None) == 0
    assert parse_memory("1G") == 0
    assert parse_memory("1.5Gi") == 0
    assert parse_memory("1Ti") == 0


def test_parse_cpu_usage_handles_metrics_api_units():
    assert parse_cpu_usage("250000000n") == 250
    assert parse_cpu_usage("999999n") == 0
    assert parse_cpu_usage("1500u") == 1
    assert parse_cpu_usage("12m") == 12
    assert parse_cpu_usage("2") == 2000
    assert parse_cpu_usage(None) == 0


def test_parse_memory_usage_matches_memory_parser():
    assert parse_memory_usage("204800Ki") == 200
    assert parse_memory_usage("64Mi") == 64
    assert parse_memory_usage("") == 0


def test_sum_requests_mixed_formats():
    assert sum_requests(["100m", "1", "0.5", None, "bogus"], ResourceKind.CPU) == 1600
    assert sum_requests(["1Gi", "512Mi", "2048Ki", ""], ResourceKind.MEMORY) == 1538


def test_sum_requests_empty_and_order_independent():
    assert sum_requests([], ResourceKind.CPU) == 0
    assert sum_requests(["1", "250m"], ResourceKind.CPU) == sum_requests(["250m", "1"], ResourceKind.CPU)


def test_parse_count():
    assert parse_count("110") == 110
    assert parse_count(None) == 0
    assert parse_count("lots") == 0
