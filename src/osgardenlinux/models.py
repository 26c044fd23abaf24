"""Typed dataclasses for operating system config requests and emitted artifacts."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Any, Literal

import cbor2

FileEncoding = Literal["", "b64"]


class Purpose(StrEnum):
    """What the caller wants the config to be turned into."""

    PROVISION = "provision"
    RECONCILE = "reconcile"


@dataclass(frozen=True, slots=True)
class FileContentInline:
    data: str
    encoding: FileEncoding = ""


@dataclass(frozen=True, slots=True)
class FileContentSecretRef:
    name: str
    data_key: str


@dataclass(frozen=True, slots=True)
class FileContent:
    inline: FileContentInline | None = None
    secret_ref: FileContentSecretRef | None = None
    transmit_unencoded: bool = False

    @classmethod
    def from_inline(cls, data: str, *, encoding: FileEncoding = "") -> FileContent:
        return cls(inline=FileContentInline(data=data, encoding=encoding))

    @classmethod
    def from_secret(cls, name: str, data_key: str) -> FileContent:
        return cls(secret_ref=FileContentSecretRef(name=name, data_key=data_key))


@dataclass(frozen=True, slots=True)
class File:
    path: str
    content: FileContent
    permissions: int | None = None


@dataclass(frozen=True, slots=True)
class DropIn:
    name: str
    content: str


@dataclass(frozen=True, slots=True)
class Unit:
    name: str
    command: Literal["start", "restart", "stop"] | None = None
    enable: bool | None = None
    content: str | None = None
    drop_ins: tuple[DropIn, ...] = ()
    file_paths: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class MemoryOneConfiguration:
    system_memory: str | None = None
    memory_topology: str | None = None


@dataclass(frozen=True, slots=True)
class OperatingSystemConfig:
    """Desired state handed in by the control loop for one reconciliation cycle.

    ``purpose`` may hold values outside :class:`Purpose`; the actuator
    rejects those.
    """

    purpose: Purpose | str
    type: str = "gardenlinux"
    name: str = ""
    namespace: str = ""
    files: tuple[File, ...] = ()
    units: tuple[Unit, ...] = ()
    os_version: str | None = None
    provider_config: bytes | str | Mapping[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class InPlaceUpdateConfig:
    os_update_command: str
    os_update_command_args: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ReconcileResult:
    units: tuple[Unit, ...] = ()
    files: tuple[File, ...] = ()
    in_place_update_config: InPlaceUpdateConfig | None = None
    schema_version: int = 1

    def file_paths(self) -> tuple[str, ...]:
        return tuple(file.path for file in self.files)

    def to_json(self, path: str | Path | None = None) -> str:
        payload = self._payload()
        encoded = json.dumps(payload, indent=2, sort_keys=True) + "\n"
        if path is not None:
            Path(path).write_text(encoded, encoding="utf-8")
        return encoded

    def to_cbor(self, path: str | Path | None = None) -> bytes:
        payload = self._payload()
        encoded = cbor2.dumps(payload, canonical=True)
        if path is not None:
            Path(path).write_bytes(encoded)
        return encoded

    def _payload(self) -> dict[str, object]:
        update: dict[str, object] | None = None
        if self.in_place_update_config is not None:
            update = {
                "os_update_command": self.in_place_update_config.os_update_command,
                "os_update_command_args": list(
                    self.in_place_update_config.os_update_command_args
                ),
            }
        return {
            "schema_version": self.schema_version,
            "files": [_file_payload(file) for file in self.files],
            "units": [_unit_payload(unit) for unit in self.units],
            "in_place_update_config": update,
        }


@dataclass(frozen=True, slots=True)
class ActuatorResult:
    """Outcome of one reconcile/restore call.

    Provision fills ``user_data`` only, reconcile fills the remaining fields.
    """

    user_data: bytes | None = None
    units: tuple[Unit, ...] = ()
    files: tuple[File, ...] = ()
    in_place_update_config: InPlaceUpdateConfig | None = None


def _file_payload(file: File) -> dict[str, object]:
    inline = file.content.inline
    secret_ref = file.content.secret_ref
    return {
        "path": file.path,
        "permissions": file.permissions,
        "inline": (
            {"data": inline.data, "encoding": inline.encoding} if inline is not None else None
        ),
        "secret_ref": (
            {"name": secret_ref.name, "data_key": secret_ref.data_key}
            if secret_ref is not None
            else None
        ),
        "transmit_unencoded": file.content.transmit_unencoded,
    }


def _unit_payload(unit: Unit) -> dict[str, object]:
    return {
        "name": unit.name,
        "command": unit.command,
        "enable": unit.enable,
        "content": unit.content,
        "drop_ins": [{"name": d.name, "content": d.content} for d in unit.drop_ins],
        "file_paths": list(unit.file_paths),
    }
