import json

from core.enums import ColumnType
from core.models import ParsedTable, OutlierSummary
from stages.s0_reception.parsers import parse_json_table
from stages.s1_profiling import analyze_data_quality, iqr_outliers, is_missing


def _table(records):
    return parse_json_table(json.dumps(records))


def test_clean_table_scores_full_marks():
    table = _table([{"id": i, "name": f"n{i}"} for i in range(1, 6)])

    report = analyze_data_quality(table)

    assert report.overall_score == 100
    assert report.duplicates == 0
    assert report.missing_values == []
    assert [c.detected_type for c in report.data_types] == ["number", "string"]
    assert report.recommendations == [
        "✓ Data quality is excellent - no issues detected!",
        "✓ No duplicate rows found",
        "✓ No missing values detected",
    ]


def test_missing_values_count_null_strings():
    table = _table([{"v": v} for v in [1, None, "null", "NULL", 5]])

    report = analyze_data_quality(table)

    assert report.missing_values[0].count == 3
    assert report.missing_values[0].percentage == 60.0
    assert report.data_types[0].detected_type == "mixed"
    assert report.data_types[0].issues == "Mixed types found: number, string"
    # 10 for the missing values, 5 for the mixed column
    assert report.overall_score == 85.0


def test_empty_column_is_reported():
    table = _table([{"a": 1, "b": None}, {"a": 2, "b": None}])

    report = analyze_data_quality(table)

    assert report.missing_values[0].column == "b"
    assert report.missing_values[0].percentage == 100.0
    assert report.data_types[1].detected_type == "empty"
    assert report.overall_score == 90.0


def test_duplicate_rows():
    table = _table([
        {"a": 1, "b": "x"},
        {"a": 1.0, "b": "x"},
        {"a": 2, "b": "y"},
        {"a": 1, "b": "y"},
    ])

    report = analyze_data_quality(table)

    assert report.duplicates == 1
    assert "Found 1 duplicate rows (25.0%) - consider removing" in report.recommendations
    assert "✓ No missing values detected" in report.recommendations
    assert report.overall_score == 85.0


def test_boolean_and_number_rows_are_not_duplicates():
    table = _table([{"a": True}, {"a": 1}])

    assert analyze_data_quality(table).duplicates == 0


def test_iqr_outliers_reported_without_deduction():
    table = _table([{"id": i, "v": 10} for i in range(11)] + [{"id": 11, "v": 100}])

    report = analyze_data_quality(table)

    assert report.outliers == [OutlierSummary(column="v", values=[100.0], count=1)]
    assert 'Column "v" has 1 outliers - review for data quality' in report.recommendations
    assert report.overall_score == 100


def test_outliers_need_more_than_ten_numbers():
    table = _table([{"id": i, "v": 10} for i in range(9)] + [{"id": 9, "v": 100}])

    assert analyze_data_quality(table).outliers == []


def test_empty_table_scores_zero():
    table = ParsedTable(columns=["a"], types=[ColumnType.TEXT], rows=[])

    report = analyze_data_quality(table)

    assert report.overall_score == 0
    assert report.recommendations == ["Dataset is empty - please upload data with values"]


def test_iqr_outliers():
    assert iqr_outliers([1, 2, 3]) == []
    assert iqr_outliers([100, 1, 2, 3, 4, 5, 6, 7]) == [100]


def test_is_missing():
    assert is_missing(None)
    assert is_missing("")
    assert is_missing("Null")
    assert not is_missing(0)
    assert not is_missing(False)
    assert not is_missing("nullable")
