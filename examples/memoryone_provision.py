"""Render user-data for the vSMP MemoryONE variant."""

from osgardenlinux import OperatingSystemConfig, Purpose, new_actuator
from osgardenlinux.memoryone import API_VERSION, KIND, OS_TYPE_MEMORYONE_GARDENLINUX


def render_memoryone_user_data() -> bytes:
    osc = OperatingSystemConfig(
        purpose=Purpose.PROVISION,
        type=OS_TYPE_MEMORYONE_GARDENLINUX,
        provider_config={
            "apiVersion": API_VERSION,
            "kind": KIND,
            "systemMemory": "6x",
            "memoryTopology": "2",
        },
    )
    user_data = new_actuator().reconcile(osc).user_data
    assert user_data is not None
    return user_data


if __name__ == "__main__":
    print(render_memoryone_user_data().decode("utf-8"))
