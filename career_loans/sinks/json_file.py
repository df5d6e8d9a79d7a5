"""JSON file sink for ledger snapshots."""

import json
import logging
from pathlib import Path
from typing import Any

from career_loans.ledger import LoanLedger
from career_loans.sinks.serialization import to_dict

logger = logging.getLogger(__name__)


class JsonFileSink:
    """Save ledger nodes and reports as JSON files."""

    def __init__(self, output_dir: str | Path, pretty: bool = False) -> None:
        """Initialize JSON file sink.

        Parameters
        ----------
        output_dir : str | Path
            Directory to write JSON files.
        pretty : bool
            Pretty-print JSON output.
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.pretty = pretty
        self._written: list[Path] = []

    def write_ledger(self, ledger: LoanLedger, name: str = "ledger") -> Path:
        """Write the ledger's save node to ``<name>.json``."""
        return self._write(name, ledger.save())

    def write_report(self, name: str, report: Any) -> Path:
        """Write a dataclass report (or plain dict) to ``<name>.json``."""
        return self._write(name, to_dict(report))

    def read_ledger(self, name: str = "ledger") -> dict[str, Any]:
        """Read a saved ledger node back; restore it with ``LoanLedger.restore``."""
        file_path = self.output_dir / f"{name}.json"
        with open(file_path, encoding="utf-8") as f:
            return json.load(f)

    def close(self) -> None:
        """Print summary."""
        print(f"JSON files written to: {self.output_dir}")
        for path in self._written:
            print(f"  {path.name}")

    def _write(self, name: str, data: Any) -> Path:
        file_path = self.output_dir / f"{name}.json"
        with open(file_path, "w", encoding="utf-8") as f:
            if self.pretty:
                json.dump(data, f, indent=2, ensure_ascii=False)
            else:
                json.dump(data, f, ensure_ascii=False)
        self._written.append(file_path)
        logger.debug("Wrote %s", file_path)
        return file_path
