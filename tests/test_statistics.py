import json

import pytest

from core.enums import ColumnType, Severity, CorrelationStrength, CorrelationDirection
from core.models import ParsedTable
from stages.s0_reception.parsers import parse_json_table
from stages.s1_profiling import (
    column_statistics, dataset_statistics, representative_sample, detect_anomalies,
    calculate_box_plot, calculate_correlation, correlation_matrix
)


def _table(records):
    return parse_json_table(json.dumps(records))


def test_numeric_column_statistics():
    table = _table([{"v": 1}, {"v": 2}, {"v": 3}, {"v": 4}, {"v": None}, {"v": 10}])

    stats = column_statistics(table, "v")

    assert stats.type == ColumnType.NUMBER
    assert stats.count == 6
    assert stats.null_count == 1
    assert stats.unique_count == 5
    assert stats.min == 1
    assert stats.max == 10
    assert stats.mean == pytest.approx(4.0)
    assert stats.median == pytest.approx(3.0)
    assert stats.sum == pytest.approx(20.0)
    assert stats.sample_values == [1, 2, 3]
    assert stats.top_values == []


def test_category_top_values():
    table = _table([{"c": c} for c in ["A", "B", "A", "B", "A", "C", "A", "B"]])

    stats = column_statistics(table, "c")

    assert stats.type == ColumnType.CATEGORY
    assert [(t.value, t.count) for t in stats.top_values] == [("A", 4), ("B", 3), ("C", 1)]
    assert stats.mean is None


def test_unique_count_matches_type_detection():
    table = ParsedTable(
        columns=["v"],
        types=[ColumnType.TEXT],
        rows=[{"v": True}, {"v": 1}, {"v": "1"}, {"v": 1.0}],
    )

    stats = column_statistics(table, "v")

    assert stats.unique_count == 3


def test_dataset_statistics():
    table = _table([{"a": 1, "b": "x"}, {"a": 2, "b": "y"}])

    stats = dataset_statistics(table)

    assert stats.total_rows == 2
    assert stats.total_columns == 2
    assert [s.column for s in stats.column_stats] == ["a", "b"]


def test_representative_sample():
    rows = [{"i": i} for i in range(100)]

    sample = representative_sample(rows, 10)

    assert [r["i"] for r in sample] == [0, 1, 2, 48, 49, 50, 97, 98, 99]
    assert representative_sample(rows[:10], 10) == rows[:10]
    assert representative_sample(rows[:5], 2) == rows[:2]


def test_dataset_statistics_carries_sample():
    table = _table([{"i": i} for i in range(30)])

    stats = dataset_statistics(table)

    assert len(stats.representative_sample) == 9
    assert stats.representative_sample[0] == {"i": 0}
    assert stats.representative_sample[-1] == {"i": 29}


def test_detect_anomalies():
    table = _table([{"v": 10} for _ in range(20)] + [{"v": 100}])

    anomalies = detect_anomalies(table, "v")

    assert len(anomalies) == 1
    assert anomalies[0].index == 20
    assert anomalies[0].value == 100
    assert anomalies[0].z_score == pytest.approx(4.47, abs=0.01)
    assert anomalies[0].severity == Severity.HIGH
    assert anomalies[0].row == {"v": 100}


def test_detect_anomalies_skips_non_numeric_cells():
    table = _table([{"v": 10} for _ in range(20)] + [{"v": "n/a"}, {"v": 100}])

    anomalies = detect_anomalies(table, "v")

    assert [a.index for a in anomalies] == [21]


def test_detect_anomalies_threshold():
    table = _table([{"v": v} for v in [1, 2, 3, 4, 5, 6, 7, 8, 9, 30]])

    assert detect_anomalies(table, "v", threshold=10) == []
    assert len(detect_anomalies(table, "v", threshold=2)) == 1


def test_constant_column_has_no_anomalies():
    table = _table([{"v": 5} for _ in range(10)])
    assert detect_anomalies(table, "v") == []


def test_text_column_has_no_anomalies():
    table = _table([{"v": "word"} for _ in range(10)])
    assert detect_anomalies(table, "v") == []


def test_box_plot():
    box = calculate_box_plot([4, 1, 100, 3, 2])

    assert box.median == 3
    assert box.q1 == 2
    assert box.q3 == 4
    assert box.outliers == [100]
    assert box.min == 1
    assert box.max == 4
    assert box.mean == pytest.approx(22.0)


def test_box_plot_empty():
    box = calculate_box_plot([])
    assert box.median == 0
    assert box.outliers == []


def test_correlation():
    assert calculate_correlation([1, 2, 3], [2, 4, 6]) == pytest.approx(1.0)
    assert calculate_correlation([1, 2, 3], [3, 2, 1]) == pytest.approx(-1.0)
    assert calculate_correlation([1, 2], [1, 2, 3]) == 0.0
    assert calculate_correlation([], []) == 0.0
    assert calculate_correlation([1, 1, 1], [1, 2, 3]) == 0.0


def test_correlation_matrix():
    records = [
        {"x": x, "y": 2 * x + 1, "z": z, "label": "k"}
        for x, z in zip(range(1, 9), [5, 1, 4, 2, 8, 3, 7, 6])
    ]
    table = _table(records)

    result = correlation_matrix(table)

    assert result.columns == ["x", "y", "z"]
    assert result.matrix[0][0] == 1.0
    assert result.matrix[0][1] == pytest.approx(1.0)
    assert result.matrix[1][0] == pytest.approx(1.0)

    top = result.significant_pairs[0]
    assert (top.column_a, top.column_b) == ("x", "y")
    assert top.strength == CorrelationStrength.STRONG
    assert top.direction == CorrelationDirection.POSITIVE
