"""Name Enforcement — reserved disk names, disk name length, reserved port name.

Invariants:
    - All functions are PURE: no IO, no side effects
    - Disks checked in spec order; first offending disk wins
    - Reserved check precedes the length check for the same disk
    - Port names compared exactly: 'qmp' is rejected, 'qmp2' is not

Design Decisions:
    - Create-time only: on update `.spec.disks` is immutable as a whole,
      so a name that passed once can never change (ADR: no duplicate checks)
"""

from collections.abc import Iterable

from vm_admission.core.domain_types import (
    MAX_DISK_NAME_LENGTH,
    RESERVED_DISK_NAMES,
    RESERVED_PORT_NAME,
)
from vm_admission.core.errors import ReservedNameError, ReservedPortNameError
from vm_admission.schemas.virtual_machine import Disk, Port


def check_disk_name(name: str) -> ReservedNameError | None:
    if name in RESERVED_DISK_NAMES:
        return ReservedNameError(f"'{name}' is reserved for .spec.disks[].name", name)
    if len(name) > MAX_DISK_NAME_LENGTH:
        return ReservedNameError(
            f"disk name '{name}' too long, "
            f"should be less than or equal to {MAX_DISK_NAME_LENGTH}",
            name,
        )
    return None


def check_disk_names(disks: Iterable[Disk]) -> ReservedNameError | None:
    """Rule: no disk may shadow an internal volume or exceed the name limit."""
    for disk in disks:
        error = check_disk_name(disk.name)
        if error:
            return error
    return None


def check_port_names(ports: Iterable[Port]) -> ReservedPortNameError | None:
    """Rule: the hypervisor control channel name is not available to guests."""
    for port in ports:
        if port.name == RESERVED_PORT_NAME:
            return ReservedPortNameError(port.name)
    return None
