"""Swap Enforcement — mutual exclusivity of swap fields and the swap transition rule.

Invariants:
    - All functions are PURE: no IO, no side effects
    - A valid spec sets at most one of `swap` / `swapInfo`
    - Swap may only change from an underivable (broken) state to a valid one,
      never between two valid-but-different descriptors
    - A failure deriving the NEW descriptor always rejects; a failure deriving the
      OLD descriptor is swallowed so stored objects in a bad state can be repaired

Design Decisions:
    - Descriptors compared after derivation: legacy `swap: X` and `swapInfo: {size: X}`
      are the same swap and may be exchanged freely
    - derive_swap_info returns (value, error) so callers branch without try/except chains
"""

from vm_admission.core.errors import (
    AdmissionError,
    ConflictingSwapConfigError,
    DelegatedValidationError,
    ImmutableSwapTransitionError,
)
from vm_admission.schemas.virtual_machine import GuestSettings, SpecFieldError, SwapInfo


def check_swap_exclusivity(settings: GuestSettings | None) -> ConflictingSwapConfigError | None:
    """Rule: `swap` and `swapInfo` must not both be set."""
    if settings is not None and settings.swap is not None and settings.swap_info is not None:
        return ConflictingSwapConfigError()
    return None


def derive_swap_info(
    settings: GuestSettings | None,
) -> tuple[SwapInfo | None, SpecFieldError | None]:
    """Derive the normalized swap descriptor. Never raises."""
    if settings is None:
        return None, None
    try:
        return settings.get_swap_info(), None
    except SpecFieldError as e:
        return None, e


def check_swap_transition(
    old: GuestSettings | None, new: GuestSettings | None,
) -> AdmissionError | None:
    """Rule: swap descriptor is immutable between valid states."""
    if new is None:
        return None

    new_info, new_error = derive_swap_info(new)
    if new_error:
        return DelegatedValidationError(str(new_error))

    old_info, old_error = derive_swap_info(old)
    if old_error:
        return None

    if new_info != old_info:
        return ImmutableSwapTransitionError()
    return None


def is_swap_self_healing(old: GuestSettings | None, new: GuestSettings | None) -> bool:
    """True when the old swap state is broken and the new one derives cleanly."""
    if new is None:
        return False
    _, old_error = derive_swap_info(old)
    _, new_error = derive_swap_info(new)
    return old_error is not None and new_error is None
