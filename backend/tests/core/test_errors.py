"""Error Hierarchy — tests for codes, categories and the rejection envelope.

Tests cover:
    - every rejection class carries its code and category
    - to_status() shape and HTTP 403
    - delegated errors keep the cause message and the prefix
"""

import pytest

from vm_admission.core.errors import (
    AdmissionError,
    ConflictingSwapConfigError,
    DelegatedValidationError,
    ErrorCategory,
    ImmutableFieldChangedError,
    ImmutableSwapTransitionError,
    RangeViolationError,
    ReservedNameError,
    ReservedPortNameError,
)


@pytest.mark.parametrize("error,code,category", [
    (RangeViolationError("m", ".cpus.use"), "RANGE_VIOLATION", ErrorCategory.VALIDATION),
    (ReservedNameError("m", "runtime"), "RESERVED_NAME", ErrorCategory.VALIDATION),
    (ReservedPortNameError("qmp"), "RESERVED_PORT_NAME", ErrorCategory.VALIDATION),
    (ConflictingSwapConfigError(), "CONFLICTING_SWAP_CONFIG", ErrorCategory.VALIDATION),
    (ImmutableFieldChangedError(".spec.disks"), "IMMUTABLE_FIELD_CHANGED", ErrorCategory.IMMUTABILITY),
    (ImmutableSwapTransitionError(), "IMMUTABLE_SWAP_TRANSITION", ErrorCategory.IMMUTABILITY),
    (DelegatedValidationError("m"), "DELEGATED_VALIDATION_FAILURE", ErrorCategory.DELEGATED),
])
def test_error_codes_and_categories(error, code, category):
    assert isinstance(error, AdmissionError)
    assert error.code == code
    assert error.category == category
    assert error.http_status == 403


def test_to_status_envelope():
    status = ImmutableFieldChangedError(".spec.enableSSH").to_status()
    assert status["allowed"] is False
    assert status["status"]["code"] == 403
    assert status["status"]["reason"] == "IMMUTABLE_FIELD_CHANGED"
    assert status["status"]["message"] == ".spec.enableSSH is immutable"
    assert status["status"]["details"]["field_path"] == ".spec.enableSSH"
    assert status["status"]["details"]["category"] == "immutability"


def test_delegated_error_prefix_and_cause():
    error = DelegatedValidationError("bad slot size", prefix=".spec.guest: ")
    assert error.message == ".spec.guest: bad slot size"
    assert error.cause_message == "bad slot size"
    assert error.context.field_path == ".spec.guest"


def test_delegated_error_without_prefix_has_no_field_path():
    error = DelegatedValidationError("cannot have both 'swap' and 'swapInfo' enabled")
    assert error.context.field_path is None
    assert str(error) == "cannot have both 'swap' and 'swapInfo' enabled"


def test_errors_can_be_raised_by_callers():
    with pytest.raises(AdmissionError, match="is immutable"):
        raise ImmutableSwapTransitionError()
