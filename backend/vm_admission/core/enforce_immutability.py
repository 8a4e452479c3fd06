"""Immutability Enforcement — protected fields must not change on update.

Invariants:
    - All functions are PURE: no IO, no side effects
    - IMMUTABLE_FIELDS is the single source of truth for protected paths and their order
    - Values compared by structural equality (frozen models, tuples, dicts)
    - Guest settings compared with swap fields masked out — swap has its own rule

Design Decisions:
    - (path, projection) table over per-field if-chains: adding a protected field is one line
    - Projection + compare instead of field-by-field exclusions: fields with custom
      transition rules are stripped, everything else is compared uniformly
"""

from collections.abc import Callable
from typing import Any, NamedTuple

from vm_admission.core.errors import ImmutableFieldChangedError
from vm_admission.schemas.virtual_machine import GuestSettings, VirtualMachineSpec


class ImmutableField(NamedTuple):
    path: str
    project: Callable[[VirtualMachineSpec], Any]


def _settings_without_swap(spec: VirtualMachineSpec) -> GuestSettings | None:
    settings = spec.guest.settings
    if settings is None:
        return None
    return settings.without_swap_fields()


IMMUTABLE_FIELDS: tuple[ImmutableField, ...] = (
    ImmutableField(".spec.guest.cpus.min", lambda s: s.guest.cpus.min),
    ImmutableField(".spec.guest.cpus.max", lambda s: s.guest.cpus.max),
    ImmutableField(".spec.guest.memorySlots.min", lambda s: s.guest.memory_slots.min),
    ImmutableField(".spec.guest.memorySlots.max", lambda s: s.guest.memory_slots.max),
    ImmutableField(".spec.guest.memoryProvider", lambda s: s.guest.memory_provider),
    ImmutableField(".spec.guest.ports", lambda s: s.guest.ports),
    ImmutableField(".spec.guest.rootDisk", lambda s: s.guest.root_disk),
    ImmutableField(".spec.guest.command", lambda s: s.guest.command),
    ImmutableField(".spec.guest.args", lambda s: s.guest.args),
    ImmutableField(".spec.guest.env", lambda s: s.guest.env),
    ImmutableField(".spec.guest.settings", _settings_without_swap),
    ImmutableField(".spec.disks", lambda s: s.disks),
    ImmutableField(".spec.podResources", lambda s: s.pod_resources),
    ImmutableField(".spec.enableAcceleration", lambda s: s.enable_acceleration),
    ImmutableField(".spec.enableSSH", lambda s: s.enable_ssh),
    ImmutableField(".spec.initScript", lambda s: s.init_script),
)


def check_immutable_fields(
    old: VirtualMachineSpec, new: VirtualMachineSpec,
) -> ImmutableFieldChangedError | None:
    """Rule: every protected field keeps its old value. First changed field wins."""
    for field in IMMUTABLE_FIELDS:
        if field.project(new) != field.project(old):
            return ImmutableFieldChangedError(field.path)
    return None
