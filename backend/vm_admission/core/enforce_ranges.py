"""Range Enforcement — `use` must stay within [min, max] for CPUs and memory slots.

Invariants:
    - All functions are PURE: no IO, no side effects
    - Return RangeViolationError on violation, None on success
    - Bounds are inclusive: use == min and use == max are always allowed
    - Lower bound checked before upper bound — deterministic messages

Design Decisions:
    - `render` parameter instead of per-type helpers: CPUs render as cores, slots as ints
    - Path prefix passed in: create reports `.spec.guest.cpus`, update reports `.cpus`
"""

from collections.abc import Callable
from typing import Any

from vm_admission.core.errors import RangeViolationError
from vm_admission.core.quantity import format_milli_cpu
from vm_admission.schemas.virtual_machine import GuestSpec


def check_range(
    path: str,
    minimum: Any,
    use: Any,
    maximum: Any,
    render: Callable[[Any], str] = str,
) -> RangeViolationError | None:
    """Rule: min <= use <= max."""
    if use < minimum:
        return RangeViolationError(
            f"{path}.use ({render(use)}) should be greater than or equal to "
            f"the {path}.min ({render(minimum)})",
            f"{path}.use",
        )
    if use > maximum:
        return RangeViolationError(
            f"{path}.use ({render(use)}) should be less than or equal to "
            f"the {path}.max ({render(maximum)})",
            f"{path}.use",
        )
    return None


def check_cpu_range(guest: GuestSpec, path: str) -> RangeViolationError | None:
    cpus = guest.cpus
    return check_range(path, cpus.min, cpus.use, cpus.max, render=format_milli_cpu)


def check_memory_slot_range(guest: GuestSpec, path: str) -> RangeViolationError | None:
    slots = guest.memory_slots
    return check_range(path, slots.min, slots.use, slots.max)
