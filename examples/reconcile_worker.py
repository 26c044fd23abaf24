"""Render the reconcile artifacts of a running node and export them."""

import sys

from osgardenlinux import OperatingSystemConfig, Purpose, ReconcileResult, new_actuator


def reconcile_artifacts(os_version: str) -> ReconcileResult:
    actuator = new_actuator()
    result = actuator.reconcile(
        OperatingSystemConfig(purpose=Purpose.RECONCILE, os_version=os_version),
    )
    return ReconcileResult(
        units=result.units,
        files=result.files,
        in_place_update_config=result.in_place_update_config,
    )


if __name__ == "__main__":
    version = sys.argv[1] if len(sys.argv) > 1 else "1312.0"
    sys.stdout.write(reconcile_artifacts(version).to_json())
