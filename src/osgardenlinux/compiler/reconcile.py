"""Files, units and in-place update config for already running nodes."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass

from osgardenlinux.models import (
    DropIn,
    File,
    FileContent,
    InPlaceUpdateConfig,
    ReconcileResult,
    Unit,
)
from osgardenlinux.templates import (
    SCRIPT_CONTAINERD_CGROUP_DRIVER,
    SCRIPT_FUNCTIONS_HELPER,
    SCRIPT_INPLACE_UPDATE,
    SCRIPT_KUBELET_CGROUP_DRIVER,
    TemplateStore,
)

SCRIPT_LOCATION = "/opt/gardener/bin"
SCRIPT_PERMISSIONS = 0o755

KUBELET_UNIT_NAME = "kubelet.service"
CONTAINERD_UNIT_NAME = "containerd.service"
CGROUP_DRIVER_DROP_IN_NAME = "10-configure-cgroup-driver.conf"


@dataclass(frozen=True, slots=True)
class _CgroupDriverTarget:
    unit_name: str
    script_name: str


CGROUP_DRIVER_TARGETS = (
    _CgroupDriverTarget(KUBELET_UNIT_NAME, SCRIPT_KUBELET_CGROUP_DRIVER),
    _CgroupDriverTarget(CONTAINERD_UNIT_NAME, SCRIPT_CONTAINERD_CGROUP_DRIVER),
)


def script_path(name: str) -> str:
    return posixpath.join(SCRIPT_LOCATION, name)


def build_reconcile_artifacts(store: TemplateStore, os_version: str | None) -> ReconcileResult:
    """Emit the update script, the shared helper and one cgroup-driver hook per unit.

    Emission order: update script, helper, then for kubelet and containerd the
    detection script followed by its unit.
    """
    files: list[File] = []
    units: list[Unit] = []

    update_script_path = script_path(SCRIPT_INPLACE_UPDATE)
    files.append(_script_file(store, SCRIPT_INPLACE_UPDATE))
    in_place_update_config = InPlaceUpdateConfig(
        os_update_command=update_script_path,
        os_update_command_args=(os_version or "",),
    )

    helper_path = script_path(SCRIPT_FUNCTIONS_HELPER)
    files.append(_script_file(store, SCRIPT_FUNCTIONS_HELPER))

    for target in CGROUP_DRIVER_TARGETS:
        driver_script_path = script_path(target.script_name)
        files.append(_script_file(store, target.script_name))
        units.append(
            Unit(
                name=target.unit_name,
                drop_ins=(
                    DropIn(
                        name=CGROUP_DRIVER_DROP_IN_NAME,
                        content=f"[Service]\nExecStartPre={driver_script_path}\n",
                    ),
                ),
                file_paths=(helper_path, driver_script_path),
            )
        )

    return ReconcileResult(
        units=tuple(units),
        files=tuple(files),
        in_place_update_config=in_place_update_config,
    )


def _script_file(store: TemplateStore, name: str) -> File:
    return File(
        path=script_path(name),
        content=FileContent.from_inline(store.text(name)),
        permissions=SCRIPT_PERMISSIONS,
    )


__all__ = [
    "CGROUP_DRIVER_DROP_IN_NAME",
    "CONTAINERD_UNIT_NAME",
    "KUBELET_UNIT_NAME",
    "SCRIPT_LOCATION",
    "SCRIPT_PERMISSIONS",
    "build_reconcile_artifacts",
    "script_path",
]
