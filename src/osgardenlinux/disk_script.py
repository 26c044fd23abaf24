"""Shell fragments that write declared files and units to disk on first boot."""

from __future__ import annotations

import base64
import binascii
import posixpath
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from osgardenlinux.errors import RenderError
from osgardenlinux.models import File, FileContent, Unit

SYSTEMD_UNIT_DIR = "/etc/systemd/system"


@runtime_checkable
class SecretReader(Protocol):
    """Resolves secret-backed file content inside a namespace."""

    def get_secret_data(self, namespace: str, name: str) -> Mapping[str, bytes]:
        """Return the secret's data map, raising ``KeyError`` if it does not exist."""


@dataclass(slots=True)
class InMemorySecretReader:
    secrets: dict[tuple[str, str], dict[str, bytes]] = field(default_factory=dict)

    def add(self, namespace: str, name: str, data: Mapping[str, bytes]) -> None:
        self.secrets[(namespace, name)] = dict(data)

    def get_secret_data(self, namespace: str, name: str) -> Mapping[str, bytes]:
        return self.secrets[(namespace, name)]


def files_to_disk_script(
    secret_reader: SecretReader | None,
    namespace: str,
    files: Iterable[File],
) -> str:
    out = ""
    for file in files:
        data = _data_for_file_content(secret_reader, namespace, file)
        out += (
            f'\nmkdir -p "{posixpath.dirname(file.path)}"\n'
            + _cat_data_into_file(
                file.path,
                data,
                transmit_unencoded=file.content.transmit_unencoded,
            )
        )
        if file.permissions is not None:
            out += f'\nchmod "{file.permissions:04o}" "{file.path}"'
    return out


def units_to_disk_script(units: Iterable[Unit]) -> str:
    out = ""
    for unit in units:
        unit_file_path = posixpath.join(SYSTEMD_UNIT_DIR, unit.name)
        if unit.content is not None:
            out += "\n" + _cat_data_into_file(unit_file_path, unit.content.encode("utf-8"))
        if unit.drop_ins:
            drop_ins_dir = unit_file_path + ".d"
            out += f'\nmkdir -p "{drop_ins_dir}"'
            for drop_in in unit.drop_ins:
                out += "\n" + _cat_data_into_file(
                    posixpath.join(drop_ins_dir, drop_in.name),
                    drop_in.content.encode("utf-8"),
                )
    return out


def _data_for_file_content(
    secret_reader: SecretReader | None,
    namespace: str,
    file: File,
) -> bytes:
    content: FileContent = file.content
    if content.inline is not None:
        if content.inline.encoding == "b64":
            try:
                return base64.b64decode(content.inline.data, validate=True)
            except binascii.Error as exc:
                raise RenderError(
                    "Inline file content is not valid base64.",
                    context={"path": file.path, "error": str(exc)},
                ) from exc
        return content.inline.data.encode("utf-8")

    if content.secret_ref is not None:
        ref = content.secret_ref
        context = {"path": file.path, "namespace": namespace, "secret": ref.name}
        if secret_reader is None:
            raise RenderError(
                "File content references a secret but no secret reader is configured.",
                context=context,
            )
        try:
            data = secret_reader.get_secret_data(namespace, ref.name)
        except KeyError as exc:
            raise RenderError("Referenced secret does not exist.", context=context) from exc
        if ref.data_key not in data:
            raise RenderError(
                "Referenced secret has no such data key.",
                context={**context, "data_key": ref.data_key},
            )
        return data[ref.data_key]

    raise RenderError(
        "File content has neither inline data nor a secret reference.",
        context={"path": file.path},
    )


def _cat_data_into_file(path: str, data: bytes, *, transmit_unencoded: bool = False) -> str:
    if transmit_unencoded:
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise RenderError(
                "File content cannot be transmitted unencoded: it is not valid UTF-8.",
                hint="Drop transmit_unencoded so the content is written base64 encoded.",
                context={"path": path, "error": str(exc)},
            ) from exc
        return f'cat << EOF > "{path}"\n{text}\nEOF'
    encoded = base64.b64encode(data).decode("ascii")
    return f'cat << EOF | base64 -d > "{path}"\n{encoded}\nEOF'


__all__ = [
    "InMemorySecretReader",
    "SYSTEMD_UNIT_DIR",
    "SecretReader",
    "files_to_disk_script",
    "units_to_disk_script",
]
