"""Provider configuration for the memory-one (vSMP MemoryONE) Garden Linux variant."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from osgardenlinux.errors import MemoryConfigError
from osgardenlinux.models import MemoryOneConfiguration, OperatingSystemConfig

OS_TYPE_MEMORYONE_GARDENLINUX = "memoryone-gardenlinux"
API_VERSION = "memoryone-gardenlinux.os.extensions.gardener.cloud/v1alpha1"
KIND = "OperatingSystemConfiguration"

_FIELDS = {
    "memoryTopology": "memory_topology",
    "systemMemory": "system_memory",
}
_TYPE_META = {"apiVersion", "kind"}


def is_memoryone(osc: OperatingSystemConfig) -> bool:
    return osc.type == OS_TYPE_MEMORYONE_GARDENLINUX


def configuration(osc: OperatingSystemConfig) -> MemoryOneConfiguration | None:
    """Decode ``osc.provider_config``; ``None`` when the config carries none."""
    raw = osc.provider_config
    if raw is None:
        return None
    document = _decode(raw)

    api_version = document.get("apiVersion")
    kind = document.get("kind")
    if api_version != API_VERSION or kind != KIND:
        raise MemoryConfigError(
            "failed to decode provider config: unexpected type meta",
            hint=f"Expected apiVersion {API_VERSION} and kind {KIND}.",
            context={"apiVersion": str(api_version), "kind": str(kind)},
        )

    unknown = sorted(str(key) for key in document if key not in _FIELDS and key not in _TYPE_META)
    if unknown:
        raise MemoryConfigError(
            "failed to decode provider config: unknown fields",
            context={"fields": ",".join(unknown)},
        )

    values: dict[str, str] = {}
    for key, attr in _FIELDS.items():
        value = document.get(key)
        if value is None:
            continue
        if not isinstance(value, str):
            raise MemoryConfigError(
                f"failed to decode provider config: {key} must be a string",
                context={"field": key, "type": type(value).__name__},
            )
        values[attr] = value
    return MemoryOneConfiguration(**values)


def _decode(raw: bytes | str | Mapping[str, Any]) -> Mapping[str, Any]:
    if isinstance(raw, Mapping):
        return raw
    try:
        document = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MemoryConfigError(
            "failed to decode provider config",
            context={"error": str(exc)},
        ) from exc
    if not isinstance(document, dict):
        raise MemoryConfigError(
            "failed to decode provider config: expected an object",
            context={"type": type(document).__name__},
        )
    return document


__all__ = [
    "API_VERSION",
    "KIND",
    "OS_TYPE_MEMORYONE_GARDENLINUX",
    "configuration",
    "is_memoryone",
]
