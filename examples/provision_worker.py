"""Render first-boot user-data for a plain Garden Linux worker."""

from osgardenlinux import (
    File,
    FileContent,
    InMemorySecretReader,
    OperatingSystemConfig,
    Purpose,
    Unit,
    new_actuator,
)


def render_user_data() -> str:
    secrets = InMemorySecretReader()
    secrets.add("shoot--dev--local", "bootstrap-token", {"token": b"abcdef.0123456789abcdef"})
    actuator = new_actuator(secrets)

    osc = OperatingSystemConfig(
        purpose=Purpose.PROVISION,
        name="osc-worker-a",
        namespace="shoot--dev--local",
        files=(
            File(
                path="/var/lib/gardener-node-agent/credentials/bootstrap-token",
                content=FileContent.from_secret("bootstrap-token", "token"),
                permissions=0o640,
            ),
        ),
        units=(
            Unit(
                name="gardener-node-agent.service",
                enable=True,
                content="[Unit]\nDescription=Gardener Node Agent\n",
            ),
        ),
    )
    result = actuator.reconcile(osc)
    assert result.user_data is not None
    return result.user_data.decode("utf-8")


if __name__ == "__main__":
    print(render_user_data())
