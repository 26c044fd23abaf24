"""Actuator that turns OperatingSystemConfig requests into node artifacts."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from .compiler import build_reconcile_artifacts, compose_provision_script, wrap_into_memoryone
from .disk_script import SecretReader, files_to_disk_script, units_to_disk_script
from .errors import OSConfigError, UnknownPurposeError
from .memoryone import is_memoryone
from .models import ActuatorResult, File, OperatingSystemConfig, Purpose, Unit
from .observability import StructuredLogger
from .templates import TemplateStore, load_templates

FilesRenderer = Callable[[SecretReader | None, str, Iterable[File]], str]
UnitsRenderer = Callable[[Iterable[Unit]], str]


@dataclass(slots=True)
class Actuator:
    """Routes requests by purpose. Holds no per-request state."""

    store: TemplateStore
    secret_reader: SecretReader | None = None
    logger: StructuredLogger = field(default_factory=StructuredLogger)
    render_files: FilesRenderer = files_to_disk_script
    render_units: UnitsRenderer = units_to_disk_script

    def reconcile(self, osc: OperatingSystemConfig) -> ActuatorResult:
        try:
            purpose = _parse_purpose(osc)
            if purpose is Purpose.PROVISION:
                user_data = self._handle_provision(osc)
                result = ActuatorResult(user_data=user_data.encode("utf-8"))
            elif purpose is Purpose.RECONCILE:
                artifacts = build_reconcile_artifacts(self.store, osc.os_version)
                result = ActuatorResult(
                    units=artifacts.units,
                    files=artifacts.files,
                    in_place_update_config=artifacts.in_place_update_config,
                )
            else:
                raise UnknownPurposeError(purpose)
        except OSConfigError as exc:
            exc.for_object(namespace=osc.namespace, name=osc.name)
            self._log(
                osc,
                "reconcile",
                str(exc),
                level="error",
                extra={"code": exc.code, "retryable": exc.retryable},
            )
            raise
        self._log(
            osc,
            "reconcile",
            "Generated operating system config artifacts.",
            extra={"files": len(result.files), "units": len(result.units)},
        )
        return result

    def restore(self, osc: OperatingSystemConfig) -> ActuatorResult:
        return self.reconcile(osc)

    def delete(self, osc: OperatingSystemConfig) -> None:
        self._log(osc, "delete", "Nothing to clean up.")

    def migrate(self, osc: OperatingSystemConfig) -> None:
        self.delete(osc)

    def force_delete(self, osc: OperatingSystemConfig) -> None:
        self.delete(osc)

    def _handle_provision(self, osc: OperatingSystemConfig) -> str:
        write_files = self.render_files(self.secret_reader, osc.namespace, osc.files)
        write_units = self.render_units(osc.units)
        script = compose_provision_script(write_files, write_units, osc.units)
        if is_memoryone(osc):
            return wrap_into_memoryone(osc, script)
        return script

    def _log(
        self,
        osc: OperatingSystemConfig,
        operation: str,
        message: str,
        *,
        level: str = "info",
        extra: dict[str, object] | None = None,
    ) -> None:
        self.logger.log(
            operation=operation,
            purpose=str(osc.purpose),
            namespace=osc.namespace or None,
            name=osc.name or None,
            message=message,
            level=level,
            extra=extra,
        )


def new_actuator(
    secret_reader: SecretReader | None = None,
    *,
    store: TemplateStore | None = None,
    logger: StructuredLogger | None = None,
) -> Actuator:
    """Build the process-wide actuator, loading the bundled scripts once.

    ``AssetLoadError`` from the template load is fatal to startup and is not
    caught here.
    """
    return Actuator(
        store=store if store is not None else load_templates(),
        secret_reader=secret_reader,
        logger=logger if logger is not None else StructuredLogger(),
    )


def _parse_purpose(osc: OperatingSystemConfig) -> Purpose:
    try:
        return Purpose(osc.purpose)
    except ValueError:
        raise UnknownPurposeError(
            osc.purpose,
            hint=f"Expected one of: {', '.join(p.value for p in Purpose)}.",
        ) from None


__all__ = [
    "Actuator",
    "FilesRenderer",
    "UnitsRenderer",
    "new_actuator",
]
