"""Shared test fixtures for the quant_optimizer test suite."""
from __future__ import annotations

import json

import pytest


def make_result(**statistics):
    """Result document with the given entries under the ``Statistics`` section."""
    return {
        "Statistics": {name.replace("_", " "): value for name, value in statistics.items()},
        "RuntimeStatistics": {"Equity": "$100,000.00"},
    }


@pytest.fixture
def result_document():
    """Factory for result documents keyed by statistic name."""
    return make_result


@pytest.fixture
def result_files(tmp_path):
    """Write result documents as numbered JSON files and return their directory.

    Usage: ``result_files([{"Sharpe Ratio": "0.5"}, ...])``.
    """

    def _write(statistics_list, directory="results"):
        out = tmp_path / directory
        out.mkdir(parents=True, exist_ok=True)
        for i, statistics in enumerate(statistics_list):
            document = {"Statistics": statistics, "AlgorithmConfiguration": {"Parameters": {"run": i}}}
            (out / f"backtest_{i:03d}.json").write_text(json.dumps(document), encoding="utf-8")
        return out

    return _write
