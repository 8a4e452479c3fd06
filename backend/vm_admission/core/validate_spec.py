"""Spec Validation — create, update and delete rule chains.

Invariants:
    - All functions are PURE: no IO, no side effects, inputs never mutated
    - Each chain returns the FIRST failing rule's error, or None
    - Create order: cpus range → memory provider → memory slots range → disk names
      → port names → swap exclusivity
    - Update order: immutable fields → swap transition → cpus range → memory slots range
    - Delete is always allowed

Design Decisions:
    - `or`-chained checks over a rule list: order is visible at the call site
      (ADR: same shape as every other enforce_* chain)
    - Update re-runs the range checks even though min/max are pinned: `use` may move
"""

from vm_admission.core.enforce_immutability import check_immutable_fields
from vm_admission.core.enforce_names import check_disk_names, check_port_names
from vm_admission.core.enforce_ranges import check_cpu_range, check_memory_slot_range
from vm_admission.core.enforce_swap import check_swap_exclusivity, check_swap_transition
from vm_admission.core.errors import AdmissionError, DelegatedValidationError
from vm_admission.schemas.virtual_machine import GuestSpec, SpecFieldError, VirtualMachineSpec


def check_memory_provider(guest: GuestSpec) -> DelegatedValidationError | None:
    """Rule: memorySlotSize must suit the memory provider, when one is set."""
    if guest.memory_provider is None:
        return None
    try:
        guest.validate_for_memory_provider(guest.memory_provider)
    except SpecFieldError as e:
        return DelegatedValidationError(str(e), prefix=".spec.guest: ")
    return None


def validate_create_spec(spec: VirtualMachineSpec) -> AdmissionError | None:
    """Static invariants for a new VirtualMachine."""
    guest = spec.guest
    return (
        check_cpu_range(guest, ".spec.guest.cpus")
        or check_memory_provider(guest)
        or check_memory_slot_range(guest, ".spec.guest.memorySlots")
        or check_disk_names(spec.disks)
        or check_port_names(guest.ports)
        or check_swap_exclusivity(guest.settings)
    )


def validate_update_spec(
    old: VirtualMachineSpec, new: VirtualMachineSpec,
) -> AdmissionError | None:
    """Transition rules from `old` to `new`."""
    return (
        check_immutable_fields(old, new)
        or check_swap_transition(old.guest.settings, new.guest.settings)
        or check_cpu_range(new.guest, ".cpus")
        or check_memory_slot_range(new.guest, ".memorySlots")
    )


def validate_delete_spec(spec: VirtualMachineSpec | None = None) -> AdmissionError | None:
    """No deletion policy yet."""
    return None
