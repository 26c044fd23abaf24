"""Packaged node scripts and the read-only store they are loaded into."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from types import MappingProxyType

from osgardenlinux.errors import AssetLoadError

SCRIPT_INPLACE_UPDATE = "inplace-update.sh"
SCRIPT_FUNCTIONS_HELPER = "g_functions.sh"
SCRIPT_KUBELET_CGROUP_DRIVER = "kubelet_cgroup_driver.sh"
SCRIPT_CONTAINERD_CGROUP_DRIVER = "containerd_cgroup_driver.sh"

TEMPLATE_NAMES = (
    SCRIPT_INPLACE_UPDATE,
    SCRIPT_FUNCTIONS_HELPER,
    SCRIPT_KUBELET_CGROUP_DRIVER,
    SCRIPT_CONTAINERD_CGROUP_DRIVER,
)


@dataclass(frozen=True, slots=True)
class TemplateStore:
    """Immutable name -> bytes mapping, populated once at process start."""

    _assets: Mapping[str, bytes] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_assets", MappingProxyType(dict(self._assets)))

    def read(self, name: str) -> bytes:
        try:
            return self._assets[name]
        except KeyError:
            raise AssetLoadError(
                f"Template {name!r} is not part of the store.",
                context={"available": ",".join(sorted(self._assets))},
            ) from None

    def text(self, name: str) -> str:
        return self.read(name).decode("utf-8")

    def names(self) -> tuple[str, ...]:
        return tuple(self._assets)


def packaged_scripts() -> Traversable:
    return resources.files(__name__).joinpath("scripts")


def load_templates(
    root: Traversable | Path | None = None,
    names: Iterable[str] = TEMPLATE_NAMES,
) -> TemplateStore:
    """Read every named script from *root* (the packaged scripts by default).

    A single unreadable asset aborts the whole load; a partial store is never
    returned.
    """
    source = packaged_scripts() if root is None else root
    assets: dict[str, bytes] = {}
    for name in names:
        try:
            assets[name] = source.joinpath(name).read_bytes()
        except OSError as exc:
            raise AssetLoadError(
                f"Failed to load script template {name!r}.",
                hint="Reinstall the package so the bundled scripts are present.",
                context={"template": name, "error": str(exc)},
            ) from exc
    return TemplateStore(assets)


__all__ = [
    "SCRIPT_CONTAINERD_CGROUP_DRIVER",
    "SCRIPT_FUNCTIONS_HELPER",
    "SCRIPT_INPLACE_UPDATE",
    "SCRIPT_KUBELET_CGROUP_DRIVER",
    "TEMPLATE_NAMES",
    "TemplateStore",
    "load_templates",
    "packaged_scripts",
]
