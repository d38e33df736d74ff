import pytest

from core.enums import ColumnType
from core.models import UploadedFile, ParsedTable
from core.exceptions import PipelineError, StageError
from orchestrator import Orchestrator
from stages import Profiler
from ui.progress import ProgressTracker, ConsoleProgress


class RecordingProgress(ProgressTracker):
    def __init__(self):
        self.events = []

    def start_stage(self, stage_num: int, stage_name: str):
        self.events.append(("start", stage_num))

    def complete_stage(self, stage_num: int):
        self.events.append(("done", stage_num))

    def fail(self, stage_num: int, message: str):
        self.events.append(("fail", stage_num, message))

    def complete(self):
        self.events.append(("complete",))


SALES_CSV = (
    "Region,Units,Revenue\n"
    + "".join(f"{'North' if i % 2 else 'South'},{i},{i * 10}\n" for i in range(1, 21))
    + "North,500,20\n"
).encode()


@pytest.mark.asyncio
async def test_pipeline_runs_all_stages():
    progress = RecordingProgress()
    orchestrator = Orchestrator(progress=progress)

    ctx = await orchestrator.run(UploadedFile.from_bytes("sales.csv", SALES_CSV))

    assert ctx.validation.valid
    assert ctx.table.types == [ColumnType.CATEGORY, ColumnType.NUMBER, ColumnType.NUMBER]
    assert ctx.table.row_count == 21
    assert ctx.profile.statistics.total_rows == 21
    assert [a.value for a in ctx.profile.anomalies["Units"]] == [500]
    assert ctx.profile.correlations.columns == ["Units", "Revenue"]
    assert ctx.profile.quality.overall_score == 100
    assert [o.column for o in ctx.profile.quality.outliers] == ["Units"]
    assert len(ctx.profile.statistics.representative_sample) == 9
    assert progress.events == [
        ("start", 0), ("done", 0), ("start", 1), ("done", 1), ("complete",)
    ]


@pytest.mark.asyncio
async def test_pipeline_rejects_invalid_upload():
    progress = RecordingProgress()
    orchestrator = Orchestrator(progress=progress)

    with pytest.raises(PipelineError) as exc_info:
        await orchestrator.run(UploadedFile(name="malware.exe", size=10, content=b"MZ"))

    assert exc_info.value.stage == 0
    assert progress.events[-1][0] == "fail"
    assert "Invalid file type" in progress.events[-1][2]


@pytest.mark.asyncio
async def test_pipeline_reports_parse_failures():
    progress = RecordingProgress()
    orchestrator = Orchestrator(progress=progress)

    with pytest.raises(PipelineError):
        await orchestrator.run(UploadedFile.from_bytes("broken.json", b"{not json"))

    assert progress.events[0] == ("start", 0)
    assert progress.events[-1][:2] == ("fail", 0)


@pytest.mark.asyncio
async def test_pipeline_reports_unreadable_upload():
    progress = RecordingProgress()
    orchestrator = Orchestrator(progress=progress)

    with pytest.raises(PipelineError) as exc_info:
        await orchestrator.run(UploadedFile(name="data.csv", size=10))

    assert exc_info.value.stage == 0
    assert progress.events[-1][:2] == ("fail", 0)
    assert "No content available for data.csv" in progress.events[-1][2]


@pytest.mark.asyncio
async def test_profiler_without_numbers():
    table = ParsedTable(
        columns=["name"],
        types=[ColumnType.TEXT],
        rows=[{"name": "a"}, {"name": "b"}],
    )

    result = await Profiler().execute(table)

    assert result.anomalies == {}
    assert result.correlations is None
    assert result.statistics.column_stats[0].top_values[0].count == 1


@pytest.mark.asyncio
async def test_profiler_accepts_zero_threshold():
    table = ParsedTable(
        columns=["v"],
        types=[ColumnType.NUMBER],
        rows=[{"v": 1}, {"v": 2}, {"v": 3}],
    )

    result = await Profiler(anomaly_threshold=0.0).execute(table)

    assert [a.index for a in result.anomalies["v"]] == [0, 2]


@pytest.mark.asyncio
async def test_console_progress_names_stages(capsys):
    orchestrator = Orchestrator(progress=ConsoleProgress())

    await orchestrator.run(UploadedFile.from_bytes("sales.csv", SALES_CSV))

    output = capsys.readouterr().out
    assert "Stage 0: Reception complete" in output
    assert "Stage 1: Profiling complete" in output


@pytest.mark.asyncio
async def test_console_progress_reports_failed_stage(capsys):
    orchestrator = Orchestrator(progress=ConsoleProgress())

    with pytest.raises(PipelineError):
        await orchestrator.run(UploadedFile.from_bytes("broken.json", b"{not json"))

    assert "Stage 0: Reception failed" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_profiler_rejects_other_input():
    with pytest.raises(StageError):
        await Profiler().execute({"rows": []})


def test_cli_prints_summary(tmp_path, monkeypatch, capsys):
    import main

    file_path = tmp_path / "sales.csv"
    file_path.write_bytes(SALES_CSV)
    monkeypatch.setattr("sys.argv", ["main.py", str(file_path)])

    assert main.main() == 0

    output = capsys.readouterr().out
    assert "sales.csv: 21 rows x 3 columns" in output
    assert "Anomalies in Units:" in output
    assert "Data quality: 100/100" in output


def test_cli_rejects_unsupported_file(tmp_path, monkeypatch, capsys):
    import main

    file_path = tmp_path / "notes.txt"
    file_path.write_text("hello")
    monkeypatch.setattr("sys.argv", ["main.py", str(file_path)])

    assert main.main() == 1
    assert "Invalid file type" in capsys.readouterr().out
