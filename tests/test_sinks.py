"""Tests for serialization and output sinks."""

import json
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import pytest

from career_loans.funds import Funds
from career_loans.ledger import LoanLedger
from career_loans.models import OriginationRequest, RetirementReason, SweepReport
from career_loans.scenarios import ScenarioReport
from career_loans.sinks import ConsoleSink, JsonFileSink
from career_loans.sinks.serialization import dataclass_to_dict, serialize_value, to_dict


class _SampleEnum(str, Enum):
    VALUE_A = "VALUE_A"


@dataclass
class _Inner:
    amount: float


@dataclass
class _Outer:
    name: str
    inner: _Inner
    kind: _SampleEnum
    counts: Counter = field(default_factory=Counter)


@pytest.fixture
def populated_ledger(ledger: LoanLedger) -> LoanLedger:
    for amount, term in [(120_000.0, 12), (40_000.0, 24)]:
        ledger.originate(OriginationRequest(amount, term, apr=0.1), 0.0, 1000.0, Funds())
    return ledger


class TestSerialization:
    """Tests for serialization helpers."""

    def test_to_dict_dataclass(self) -> None:
        obj = _Outer(name="x", inner=_Inner(amount=1.5), kind=_SampleEnum.VALUE_A, counts=Counter(a=2))

        result = to_dict(obj)

        assert result == {"name": "x", "inner": {"amount": 1.5}, "kind": "VALUE_A", "counts": {"a": 2}}

    def test_to_dict_dict_passthrough(self) -> None:
        d = {"key": "value"}
        assert to_dict(d) is d

    def test_to_dict_other_type(self) -> None:
        assert to_dict(42) == {"value": "42"}

    def test_sweep_report(self) -> None:
        report = SweepReport(now=1.0, retired={"abc": RetirementReason.PAID_DOWN})

        assert dataclass_to_dict(report)["retired"] == {"abc": "PAID_DOWN"}

    def test_serialize_nested_list(self) -> None:
        assert serialize_value([_SampleEnum.VALUE_A, (1, 2)]) == ["VALUE_A", [1, 2]]

    def test_serialize_passthrough(self) -> None:
        assert serialize_value(3.25) == 3.25
        assert serialize_value(None) is None


class TestJsonFileSink:
    """Tests for JsonFileSink."""

    def test_creates_directory(self, tmp_path: Path) -> None:
        out = tmp_path / "nested" / "out"
        JsonFileSink(out)
        assert out.is_dir()

    def test_ledger_round_trip(self, tmp_path: Path, populated_ledger: LoanLedger) -> None:
        sink = JsonFileSink(tmp_path, pretty=True)

        path = sink.write_ledger(populated_ledger)
        restored = LoanLedger.from_node(sink.read_ledger(), populated_ledger.config)

        assert path == tmp_path / "ledger.json"
        assert restored.loans == populated_ledger.loans

    def test_write_report(self, tmp_path: Path) -> None:
        sink = JsonFileSink(tmp_path)
        report = ScenarioReport(ticks=5, originated=1, rejections=Counter(CAPACITY_EXCEEDED=2))

        path = sink.write_report("report", report)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["ticks"] == 5
        assert data["rejections"] == {"CAPACITY_EXCEEDED": 2}

    def test_close_lists_files(self, tmp_path: Path, populated_ledger: LoanLedger, capsys: pytest.CaptureFixture) -> None:
        sink = JsonFileSink(tmp_path)
        sink.write_ledger(populated_ledger, name="save1")

        sink.close()

        assert "save1.json" in capsys.readouterr().out


class TestConsoleSink:
    """Tests for ConsoleSink."""

    def test_write_summary(self, populated_ledger: LoanLedger, capsys: pytest.CaptureFixture) -> None:
        summary = populated_ledger.summary(0.0)

        ConsoleSink().write_summary(summary)

        out = capsys.readouterr().out
        assert "Active loans: 2" in out
        assert f"Total monthly outgoing: {summary.total_monthly:,.0f}" in out
        assert "0/12 paid" in out

    def test_write_report(self, capsys: pytest.CaptureFixture) -> None:
        ConsoleSink(pretty=False).write_report("Scenario report", ScenarioReport(ticks=3))

        out = capsys.readouterr().out
        assert "Scenario report" in out
        assert '"ticks": 3' in out
