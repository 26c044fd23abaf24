import dataclasses
from pathlib import Path

import pytest

from osgardenlinux.errors import AssetLoadError
from osgardenlinux.templates import (
    SCRIPT_INPLACE_UPDATE,
    TEMPLATE_NAMES,
    TemplateStore,
    load_templates,
)


def test_bundled_templates_are_all_loaded() -> None:
    store = load_templates()

    assert store.names() == TEMPLATE_NAMES
    for name in TEMPLATE_NAMES:
        assert store.text(name).startswith("#!/bin/bash\n")


def test_inplace_update_script_takes_version_argument() -> None:
    content = load_templates().text(SCRIPT_INPLACE_UPDATE)

    assert 'gardenlinux-update "$VERSION"' in content
    assert "reboot" in content


def test_cgroup_driver_scripts_source_shared_helper() -> None:
    store = load_templates()

    assert "function check_current_cgroup" in store.text("g_functions.sh")
    for name in ("kubelet_cgroup_driver.sh", "containerd_cgroup_driver.sh"):
        assert 'source "$(dirname "$0")/g_functions.sh"' in store.text(name)


def test_missing_asset_fails_the_whole_load(tmp_path: Path) -> None:
    for name in TEMPLATE_NAMES[:-1]:
        (tmp_path / name).write_text("#!/bin/bash\n", encoding="utf-8")

    with pytest.raises(AssetLoadError) as exc_info:
        load_templates(tmp_path)

    assert exc_info.value.context["template"] == TEMPLATE_NAMES[-1]


def test_load_from_directory_reads_bytes_verbatim(tmp_path: Path) -> None:
    for name in TEMPLATE_NAMES:
        (tmp_path / name).write_bytes(f"#!/bin/bash\n# {name}\n".encode())

    store = load_templates(tmp_path)

    assert store.read("g_functions.sh") == b"#!/bin/bash\n# g_functions.sh\n"


def test_store_is_read_only() -> None:
    store = TemplateStore({"a.sh": b"echo a\n"})

    with pytest.raises(dataclasses.FrozenInstanceError):
        store._assets = {}  # type: ignore[misc]
    with pytest.raises(TypeError):
        store._assets["b.sh"] = b"echo b\n"  # type: ignore[index]
    with pytest.raises(AssetLoadError):
        store.read("b.sh")
