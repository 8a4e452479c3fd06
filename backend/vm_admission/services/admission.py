"""Admission Service — create/update/delete entry points around the pure rule chains.

Invariants:
    - Every entry point returns AdmissionResult(warnings, error); warnings are always empty
    - error is None on accept, the first failing rule's AdmissionError on reject
    - Rejections never raise; only caller bugs (UPDATE without old spec) raise ValueError
    - Every rejection is logged at WARNING with operation, error_code, field_path

Design Decisions:
    - Imperative shell: logging and settings live here, rules stay pure in core/
    - NamedTuple result: unpacks as `warnings, error = validate_create(spec)` like the
      (warnings, error) contract admission callers expect
"""

import logging
from typing import NamedTuple

from vm_admission.config import Settings, get_settings
from vm_admission.core.domain_types import AdmissionOperation
from vm_admission.core.enforce_swap import is_swap_self_healing
from vm_admission.core.errors import AdmissionError
from vm_admission.core.validate_spec import (
    validate_create_spec,
    validate_delete_spec,
    validate_update_spec,
)
from vm_admission.schemas.virtual_machine import VirtualMachineSpec

logger = logging.getLogger(__name__)


class AdmissionResult(NamedTuple):
    """Outcome of one admission review."""
    warnings: list[str]
    error: AdmissionError | None

    @property
    def allowed(self) -> bool:
        return self.error is None

    def to_response(self) -> dict:
        if self.error is not None:
            return self.error.to_status()
        return {"allowed": True, "warnings": list(self.warnings)}


def _finish(
    operation: AdmissionOperation,
    error: AdmissionError | None,
    settings: Settings | None,
) -> AdmissionResult:
    settings = settings or get_settings()
    if error is not None:
        error.context.operation = operation.value
        logger.warning(
            "Rejected %s: %s", operation.value, error.message,
            extra={
                "operation": operation.value,
                "error_code": error.code,
                "field_path": error.context.field_path,
                "allowed": False,
            },
        )
    elif settings.log_accepted:
        logger.info(
            "Accepted %s", operation.value,
            extra={"operation": operation.value, "allowed": True},
        )
    return AdmissionResult(warnings=[], error=error)


def validate_create(
    spec: VirtualMachineSpec, settings: Settings | None = None,
) -> AdmissionResult:
    """Review a VirtualMachine about to be created."""
    return _finish(AdmissionOperation.CREATE, validate_create_spec(spec), settings)


def validate_update(
    old_spec: VirtualMachineSpec,
    new_spec: VirtualMachineSpec,
    settings: Settings | None = None,
) -> AdmissionResult:
    """Review a VirtualMachine update from `old_spec` to `new_spec`."""
    error = validate_update_spec(old_spec, new_spec)
    if error is None and is_swap_self_healing(
        old_spec.guest.settings, new_spec.guest.settings,
    ):
        logger.info(
            "Allowing swap change: stored swap settings were invalid",
            extra={
                "operation": AdmissionOperation.UPDATE.value,
                "field_path": ".spec.guest.settings.{swap,swapInfo}",
            },
        )
    return _finish(AdmissionOperation.UPDATE, error, settings)


def validate_delete(
    spec: VirtualMachineSpec | None = None, settings: Settings | None = None,
) -> AdmissionResult:
    """Review a VirtualMachine deletion. Always allowed."""
    return _finish(AdmissionOperation.DELETE, validate_delete_spec(spec), settings)


def review(
    operation: AdmissionOperation | str,
    spec: VirtualMachineSpec,
    old_spec: VirtualMachineSpec | None = None,
    settings: Settings | None = None,
) -> AdmissionResult:
    """Dispatch by admission operation."""
    operation = AdmissionOperation(operation)
    if operation == AdmissionOperation.CREATE:
        return validate_create(spec, settings)
    if operation == AdmissionOperation.UPDATE:
        if old_spec is None:
            raise ValueError("UPDATE review requires the previous spec")
        return validate_update(old_spec, spec, settings)
    return validate_delete(spec, settings)
