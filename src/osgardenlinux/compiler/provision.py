"""First-boot user-data: the bootstrap script and its memory-one envelope."""

from __future__ import annotations

from collections.abc import Iterable
from textwrap import dedent

from osgardenlinux.memoryone import configuration
from osgardenlinux.models import OperatingSystemConfig, Unit

CONTAINERD_CONFIG_PATH = "/etc/containerd/config.toml"
CONTAINERD_EXEC_DROP_IN_PATH = "/etc/systemd/system/containerd.service.d/11-exec_config.conf"
MIME_BOUNDARY = "==BOUNDARY=="

# Statement order is part of the output contract.
PROVISION_SCRIPT_TEMPLATE = dedent("""\
    #!/bin/bash
    if [ ! -s {containerd_config} ]; then
      mkdir -p /etc/containerd/
      containerd config default > {containerd_config}
      chmod 0644 {containerd_config}
    fi

    mkdir -p /etc/systemd/system/containerd.service.d
    cat <<EOF > {containerd_drop_in}
    [Service]
    ExecStart=
    ExecStart=/usr/bin/containerd --config={containerd_config}
    EOF
    chmod 0644 {containerd_drop_in}
    {write_files}
    {write_units}
    grep -sq "^nfsd$" /etc/modules || echo "nfsd" >>/etc/modules
    modprobe nfsd
    nslookup $(hostname) || systemctl restart systemd-networkd

    systemctl daemon-reload
    systemctl enable containerd && systemctl restart containerd
    systemctl enable docker && systemctl restart docker
""")

UNIT_RESTART_TEMPLATE = "systemctl enable '{name}' && systemctl restart --no-block '{name}'\n"

MEMORYONE_HEADER = (
    f'Content-Type: multipart/mixed; boundary="{MIME_BOUNDARY}"\n'
    "MIME-Version: 1.0\n"
    f"--{MIME_BOUNDARY}\n"
    "Content-Type: text/x-vsmp; section=vsmp"
)
MEMORYONE_SCRIPT_PART = (
    f"\n--{MIME_BOUNDARY}\n"
    "Content-Type: text/x-shellscript\n"
    "{script}\n"
    f"--{MIME_BOUNDARY}"
)


def compose_provision_script(write_files: str, write_units: str, units: Iterable[Unit]) -> str:
    """Assemble the one-shot bootstrap script.

    ``write_files`` and ``write_units`` are pre-rendered shell fragments and are
    inlined as-is. Unit names are interpolated without shell quoting.
    """
    script = PROVISION_SCRIPT_TEMPLATE.format_map(
        {
            "containerd_config": CONTAINERD_CONFIG_PATH,
            "containerd_drop_in": CONTAINERD_EXEC_DROP_IN_PATH,
            "write_files": write_files,
            "write_units": write_units,
        }
    )
    for unit in units:
        script += UNIT_RESTART_TEMPLATE.format(name=unit.name)
    return script


def wrap_into_memoryone(osc: OperatingSystemConfig, script: str) -> str:
    """Wrap *script* into the two-part MIME document read by the vSMP cloud-init.

    Raises ``MemoryConfigError`` when the provider config cannot be decoded.
    """
    config = configuration(osc)

    out = MEMORYONE_HEADER
    if config is not None and config.system_memory is not None:
        out += f"\nsystem_memory={config.system_memory}"
    if config is not None and config.memory_topology is not None:
        out += f"\nmem_topology={config.memory_topology}"
    out += MEMORYONE_SCRIPT_PART.format(script=script)
    return out


__all__ = [
    "CONTAINERD_CONFIG_PATH",
    "CONTAINERD_EXEC_DROP_IN_PATH",
    "MIME_BOUNDARY",
    "compose_provision_script",
    "wrap_into_memoryone",
]
