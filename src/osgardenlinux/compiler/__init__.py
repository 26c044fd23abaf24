"""Artifact compilers for the provision and reconcile purposes."""

from .provision import (
    CONTAINERD_CONFIG_PATH,
    CONTAINERD_EXEC_DROP_IN_PATH,
    MIME_BOUNDARY,
    compose_provision_script,
    wrap_into_memoryone,
)
from .reconcile import (
    CGROUP_DRIVER_DROP_IN_NAME,
    CONTAINERD_UNIT_NAME,
    KUBELET_UNIT_NAME,
    SCRIPT_LOCATION,
    SCRIPT_PERMISSIONS,
    build_reconcile_artifacts,
    script_path,
)

__all__ = [
    "CGROUP_DRIVER_DROP_IN_NAME",
    "CONTAINERD_CONFIG_PATH",
    "CONTAINERD_EXEC_DROP_IN_PATH",
    "CONTAINERD_UNIT_NAME",
    "KUBELET_UNIT_NAME",
    "MIME_BOUNDARY",
    "SCRIPT_LOCATION",
    "SCRIPT_PERMISSIONS",
    "build_reconcile_artifacts",
    "compose_provision_script",
    "script_path",
    "wrap_into_memoryone",
]
