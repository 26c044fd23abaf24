"""Public package entrypoint for the Garden Linux operating system config handler."""

from .actuator import Actuator, new_actuator
from .disk_script import InMemorySecretReader, SecretReader
from .errors import (
    AssetLoadError,
    ErrorCode,
    MemoryConfigError,
    OSConfigError,
    RenderError,
    UnknownPurposeError,
)
from .models import (
    ActuatorResult,
    DropIn,
    File,
    FileContent,
    FileContentInline,
    FileContentSecretRef,
    InPlaceUpdateConfig,
    MemoryOneConfiguration,
    OperatingSystemConfig,
    Purpose,
    ReconcileResult,
    Unit,
)
from .observability import StructuredLogger
from .templates import TemplateStore, load_templates

__all__ = [
    "Actuator",
    "ActuatorResult",
    "AssetLoadError",
    "DropIn",
    "ErrorCode",
    "File",
    "FileContent",
    "FileContentInline",
    "FileContentSecretRef",
    "InMemorySecretReader",
    "InPlaceUpdateConfig",
    "MemoryConfigError",
    "MemoryOneConfiguration",
    "OSConfigError",
    "OperatingSystemConfig",
    "Purpose",
    "ReconcileResult",
    "RenderError",
    "SecretReader",
    "StructuredLogger",
    "TemplateStore",
    "UnknownPurposeError",
    "Unit",
    "load_templates",
    "new_actuator",
]
