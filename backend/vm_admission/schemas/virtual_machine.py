"""VirtualMachine Schemas — frozen Pydantic models for the spec snapshots under review.

Invariants:
    - Every model is frozen: admission rules can never mutate a snapshot
    - Lists decode to tuples; an absent list and an empty list are the same value
    - Wire names are camelCase aliases; snake_case attribute names are accepted too
    - No defaulting beyond decode defaults: no field is rewritten after parsing

Design Decisions:
    - Quantities parsed at the boundary (BeforeValidator) so rules compare plain ints
    - Disk payload kept opaque via extra="allow": compared structurally, never interpreted
    - get_swap_info / validate_for_memory_provider live here, next to the data they read;
      they raise SpecFieldError and the core decides how to surface it
"""

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer

from vm_admission.core.domain_types import (
    MemoryProvider,
    PortProtocol,
    VIRTIO_MEM_BLOCK_SIZE,
)
from vm_admission.core.quantity import format_milli_cpu, parse_bytes, parse_milli_cpu


MilliCPUValue = Annotated[
    int,
    BeforeValidator(parse_milli_cpu),
    PlainSerializer(format_milli_cpu, return_type=str),
]
ByteValue = Annotated[int, BeforeValidator(parse_bytes)]


class SpecFieldError(ValueError):
    """A resource-description check failed on an otherwise well-formed spec."""


class _FrozenSpec(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


# --- Guest resources ----------------------------------------------------------

class CPUs(_FrozenSpec):
    """CPU bounds in millicores; `use` is the current allocation."""
    min: MilliCPUValue
    max: MilliCPUValue
    use: MilliCPUValue


class MemorySlots(_FrozenSpec):
    min: int = Field(ge=0)
    max: int = Field(ge=0)
    use: int = Field(ge=0)


class Port(_FrozenSpec):
    name: str = ""
    port: int = Field(ge=1, le=65535)
    protocol: PortProtocol = PortProtocol.TCP


class RootDisk(_FrozenSpec):
    image: str
    size: ByteValue | None = None
    image_pull_policy: str | None = Field(None, alias="imagePullPolicy")
    execute: tuple[str, ...] = ()


class EnvVar(_FrozenSpec):
    name: str
    value: str = ""


# --- Guest settings -----------------------------------------------------------

class SwapInfo(_FrozenSpec):
    """Normalized swap descriptor."""
    size: ByteValue
    skip_swapon: bool | None = Field(None, alias="skipSwapon")


class GuestSettings(_FrozenSpec):
    sysctl: tuple[str, ...] = ()
    swap: ByteValue | None = None
    swap_info: SwapInfo | None = Field(None, alias="swapInfo")

    def without_swap_fields(self) -> "GuestSettings":
        """Copy with `swap` and `swapInfo` cleared — they follow their own transition rule."""
        return self.model_copy(update={"swap": None, "swap_info": None})

    def get_swap_info(self) -> SwapInfo | None:
        """Derive the swap descriptor from whichever swap field is set."""
        if self.swap is not None and self.swap_info is not None:
            raise SpecFieldError("cannot have both 'swap' and 'swapInfo' enabled")
        if self.swap_info is not None:
            return self.swap_info
        if self.swap is not None:
            return SwapInfo(size=self.swap)
        return None


class GuestSpec(_FrozenSpec):
    cpus: CPUs
    memory_slot_size: ByteValue = Field(1 << 30, alias="memorySlotSize")
    memory_slots: MemorySlots = Field(alias="memorySlots")
    memory_provider: MemoryProvider | None = Field(None, alias="memoryProvider")
    ports: tuple[Port, ...] = ()
    root_disk: RootDisk = Field(alias="rootDisk")
    command: tuple[str, ...] = ()
    args: tuple[str, ...] = ()
    env: tuple[EnvVar, ...] = ()
    settings: GuestSettings | None = None

    def validate_for_memory_provider(self, provider: MemoryProvider) -> None:
        """Raise SpecFieldError if memorySlotSize is unusable with `provider`."""
        if (
            provider == MemoryProvider.VIRTIO_MEM
            and self.memory_slot_size % VIRTIO_MEM_BLOCK_SIZE != 0
        ):
            raise SpecFieldError(
                f"memorySlotSize invalid for memoryProvider {provider.value}: "
                f"must be a multiple of 8Mi"
            )


# --- Disks and pod resources --------------------------------------------------

class Disk(_FrozenSpec):
    """Named disk; source payload (emptyDisk, configMap, secret, tmpfs, ...) is opaque."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    name: str
    mount_path: str | None = Field(None, alias="mountPath")
    read_only: bool | None = Field(None, alias="readOnly")


class ResourceRequirements(_FrozenSpec):
    requests: dict[str, str | int] = Field(default_factory=dict)
    limits: dict[str, str | int] = Field(default_factory=dict)


class VirtualMachineSpec(_FrozenSpec):
    guest: GuestSpec
    disks: tuple[Disk, ...] = ()
    pod_resources: ResourceRequirements = Field(
        default_factory=ResourceRequirements, alias="podResources",
    )
    enable_acceleration: bool = Field(True, alias="enableAcceleration")
    enable_ssh: bool = Field(True, alias="enableSSH")
    init_script: str = Field("", alias="initScript")


def parse_spec(payload: dict[str, Any]) -> VirtualMachineSpec:
    """Decode a wire object — either a bare spec or a full VirtualMachine with `.spec`."""
    if "guest" not in payload and isinstance(payload.get("spec"), dict):
        payload = payload["spec"]
    return VirtualMachineSpec.model_validate(payload)
