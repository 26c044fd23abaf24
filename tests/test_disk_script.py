import base64

import pytest

from osgardenlinux.disk_script import (
    InMemorySecretReader,
    SecretReader,
    files_to_disk_script,
    units_to_disk_script,
)
from osgardenlinux.errors import RenderError
from osgardenlinux.models import (
    DropIn,
    File,
    FileContent,
    FileContentInline,
    FileContentSecretRef,
    Unit,
)


def test_inline_file_is_written_base64_encoded_with_permissions() -> None:
    file = File(path="/etc/foo/bar", content=FileContent.from_inline("hello"), permissions=0o644)

    script = files_to_disk_script(None, "default", [file])

    assert script == (
        '\nmkdir -p "/etc/foo"\n'
        'cat << EOF | base64 -d > "/etc/foo/bar"\n'
        "aGVsbG8=\n"
        "EOF\n"
        'chmod "0644" "/etc/foo/bar"'
    )


def test_b64_inline_content_is_decoded_before_reencoding() -> None:
    encoded = base64.b64encode(b"payload").decode()
    file = File(
        path="/var/lib/data",
        content=FileContent(inline=FileContentInline(data=encoded, encoding="b64")),
    )

    script = files_to_disk_script(None, "default", [file])

    assert f"\n{encoded}\nEOF" in script
    assert "chmod" not in script


def test_unencoded_transmission_writes_raw_heredoc() -> None:
    file = File(
        path="/etc/motd",
        content=FileContent(inline=FileContentInline(data="welcome"), transmit_unencoded=True),
    )

    script = files_to_disk_script(None, "default", [file])

    assert 'cat << EOF > "/etc/motd"\nwelcome\nEOF' in script
    assert "base64 -d" not in script


def test_secret_reference_is_resolved_in_namespace() -> None:
    reader = InMemorySecretReader()
    reader.add("shoot--dev", "bootstrap", {"token": b"secret"})
    file = File(
        path="/var/lib/token",
        content=FileContent.from_secret("bootstrap", "token"),
        permissions=0o600,
    )

    script = files_to_disk_script(reader, "shoot--dev", [file])

    assert "\nc2VjcmV0\nEOF" in script
    assert 'chmod "0600" "/var/lib/token"' in script
    assert isinstance(reader, SecretReader)


@pytest.mark.parametrize(
    ("namespace", "file"),
    [
        ("other", File(path="/a", content=FileContent.from_secret("bootstrap", "token"))),
        ("shoot--dev", File(path="/a", content=FileContent.from_secret("missing", "token"))),
        ("shoot--dev", File(path="/a", content=FileContent.from_secret("bootstrap", "nokey"))),
        ("shoot--dev", File(path="/a", content=FileContent.from_inline("%%%", encoding="b64"))),
        ("shoot--dev", File(path="/a", content=FileContent())),
    ],
)
def test_unresolvable_content_raises_render_error(namespace: str, file: File) -> None:
    reader = InMemorySecretReader()
    reader.add("shoot--dev", "bootstrap", {"token": b"secret"})

    with pytest.raises(RenderError):
        files_to_disk_script(reader, namespace, [file])


def test_secret_reference_without_reader_raises_render_error() -> None:
    file = File(path="/a", content=FileContent.from_secret("bootstrap", "token"))

    with pytest.raises(RenderError):
        files_to_disk_script(None, "shoot--dev", [file])


def test_units_are_written_with_drop_ins() -> None:
    unit = Unit(
        name="foo.service",
        content="[Unit]\nDescription=foo\n",
        drop_ins=(DropIn(name="10-env.conf", content="[Service]\nEnvironment=A=1\n"),),
    )

    script = units_to_disk_script([unit])

    unit_b64 = base64.b64encode(b"[Unit]\nDescription=foo\n").decode()
    drop_in_b64 = base64.b64encode(b"[Service]\nEnvironment=A=1\n").decode()
    assert script == (
        f'\ncat << EOF | base64 -d > "/etc/systemd/system/foo.service"\n{unit_b64}\nEOF'
        '\nmkdir -p "/etc/systemd/system/foo.service.d"'
        f'\ncat << EOF | base64 -d > "/etc/systemd/system/foo.service.d/10-env.conf"'
        f"\n{drop_in_b64}\nEOF"
    )


def test_unit_without_content_or_drop_ins_renders_nothing() -> None:
    assert units_to_disk_script([Unit(name="bar.service", enable=True)]) == ""


BINARY_BLOB = b"\xff\xfe"


@pytest.mark.parametrize(
    "content",
    [
        FileContent(
            secret_ref=FileContentSecretRef(name="binary", data_key="blob"),
            transmit_unencoded=True,
        ),
        FileContent(
            inline=FileContentInline(data=base64.b64encode(BINARY_BLOB).decode(), encoding="b64"),
            transmit_unencoded=True,
        ),
    ],
)
def test_binary_content_sent_unencoded_raises_render_error(content: FileContent) -> None:
    reader = InMemorySecretReader()
    reader.add("shoot--dev", "binary", {"blob": BINARY_BLOB})
    file = File(path="/var/lib/blob", content=content)

    with pytest.raises(RenderError) as exc_info:
        files_to_disk_script(reader, "shoot--dev", [file])

    assert exc_info.value.context["path"] == "/var/lib/blob"


def test_binary_content_is_written_when_base64_transmitted() -> None:
    reader = InMemorySecretReader()
    reader.add("shoot--dev", "binary", {"blob": BINARY_BLOB})
    file = File(path="/var/lib/blob", content=FileContent.from_secret("binary", "blob"))

    script = files_to_disk_script(reader, "shoot--dev", [file])

    encoded = base64.b64encode(BINARY_BLOB).decode()
    assert f"\n{encoded}\nEOF" in script
