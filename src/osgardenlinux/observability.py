"""Structured logging helpers."""

from __future__ import annotations

import json
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

# A process-wide actuator logs on every reconcile; only the newest records are kept.
DEFAULT_MAX_RECORDS = 512


@dataclass(slots=True)
class StructuredLogger:
    """Ring buffer of reconcile records, newest last."""

    max_records: int | None = DEFAULT_MAX_RECORDS
    records: deque[dict[str, Any]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.max_records is not None and self.max_records < 1:
            raise ValueError("max_records must be positive or None.")
        self.records = deque(maxlen=self.max_records)

    def log(
        self,
        *,
        operation: str,
        purpose: str | None,
        namespace: str | None,
        name: str | None,
        message: str,
        level: str = "info",
        extra: dict[str, Any] | None = None,
    ) -> None:
        record: dict[str, Any] = {
            "level": level,
            "operation": operation,
            "purpose": purpose,
            "namespace": namespace,
            "name": name,
            "message": message,
        }
        if extra is not None:
            record["extra"] = extra
        self.records.append(record)

    def records_for_operation(self, operation: str) -> list[dict[str, Any]]:
        return [record for record in self.records if record.get("operation") == operation]

    def records_for_object(self, namespace: str, name: str) -> list[dict[str, Any]]:
        """Records of one OperatingSystemConfig, oldest first."""
        return [
            record
            for record in self.records
            if record.get("namespace") == namespace and record.get("name") == name
        ]

    def errors(self) -> list[dict[str, Any]]:
        return [record for record in self.records if record.get("level") == "error"]

    def to_json_lines(self, path: str | Path) -> Path:
        output_path = Path(path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        lines = [json.dumps(record, sort_keys=True) for record in self.records]
        output_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return output_path
