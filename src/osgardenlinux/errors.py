"""Typed error model with stable, machine-readable error codes."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Self


class ErrorCode(StrEnum):
    """Stable error identifiers surfaced to the calling control loop."""

    UNKNOWN_PURPOSE = "E_UNKNOWN_PURPOSE"
    RENDER = "E_RENDER"
    MEMORY_CONFIG = "E_MEMORY_CONFIG"
    ASSET_LOAD = "E_ASSET_LOAD"

    @property
    def retryable(self) -> bool:
        """Whether re-running the same request can succeed without changing it.

        Render failures usually come from content that is not resolvable yet
        (e.g. a secret still being created). The others need a new request or a
        new process.
        """
        return self is ErrorCode.RENDER


class OSConfigError(Exception):
    """Base error carrying code, hint, and the affected config's context.

    ``context`` holds string details such as the file ``path``, the secret
    name, or, once :meth:`for_object` ran, the ``namespace`` and ``name`` of
    the OperatingSystemConfig being handled.
    """

    code: str
    hint: str | None
    context: dict[str, str]

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code.value
        self.hint = hint
        self.context = dict(context or {})

    @property
    def retryable(self) -> bool:
        return ErrorCode(self.code).retryable

    def for_object(self, *, namespace: str, name: str) -> Self:
        """Record which OperatingSystemConfig failed; keys already set are kept."""
        if namespace:
            self.context.setdefault("namespace", namespace)
        if name:
            self.context.setdefault("name", name)
        return self

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.hint:
            parts.append(f"Hint: {self.hint}")
        for k, v in self.context.items():
            if v:
                parts.append(f"  {k}: {v}")
        return "\n".join(parts)

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "code": self.code,
            "message": str(self),
            "retryable": self.retryable,
            "context": dict(self.context),
        }
        if self.hint is not None:
            payload["hint"] = self.hint
        return payload


class UnknownPurposeError(OSConfigError):
    """The purpose discriminator matches no known variant. Not retryable."""

    purpose: str

    def __init__(
        self,
        purpose: object,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        self.purpose = str(purpose)
        super().__init__(
            f"unknown purpose: {self.purpose}",
            code=ErrorCode.UNKNOWN_PURPOSE,
            hint=hint,
            context=context,
        )


class RenderError(OSConfigError):
    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.RENDER, hint=hint, context=context)


class MemoryConfigError(OSConfigError):
    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.MEMORY_CONFIG, hint=hint, context=context)


class AssetLoadError(OSConfigError):
    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.ASSET_LOAD, hint=hint, context=context)


__all__ = [
    "AssetLoadError",
    "ErrorCode",
    "MemoryConfigError",
    "OSConfigError",
    "RenderError",
    "UnknownPurposeError",
]
