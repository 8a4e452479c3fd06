"""Domain Types — enums and constants shared by every admission rule.

Invariants:
    - RESERVED_DISK_NAMES is the single source of truth for internal volume names
    - MAX_DISK_NAME_LENGTH (32) bounds user-supplied disk names
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - str Enums: parse straight from the wire camelCase values, serialize back without encoders
    - frozenset for reserved names: O(1) membership, cannot be mutated at runtime
"""

from enum import Enum
from typing import NewType


# ─── Value Types ─────────────────────────────────────────────────

MilliCPU = NewType("MilliCPU", int)     # 1000 == one core
ByteCount = NewType("ByteCount", int)


# ─── Enums ───────────────────────────────────────────────────────

class MemoryProvider(str, Enum):
    """How guest memory is hot-plugged."""
    DIMM_SLOTS = "DIMMSlots"
    VIRTIO_MEM = "VirtioMem"


class PortProtocol(str, Enum):
    TCP = "TCP"
    UDP = "UDP"


class AdmissionOperation(str, Enum):
    """Lifecycle points at which a spec is reviewed."""
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


# ─── Constants ───────────────────────────────────────────────────

RESERVED_DISK_NAMES: frozenset[str] = frozenset({
    "virtualmachineimages",
    "rootdisk",
    "runtime",
    "swapdisk",
    "sysfscgroup",
    "containerdsock",
    "ssh-privatekey",
    "ssh-publickey",
    "ssh-authorized-keys",
})

MAX_DISK_NAME_LENGTH: int = 32

# Hypervisor control channel
RESERVED_PORT_NAME: str = "qmp"

VIRTIO_MEM_BLOCK_SIZE: int = 8 << 20    # 8Mi
