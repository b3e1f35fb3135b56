"""Memory-mapped I/O addresses and a bus to route accesses to devices."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

MMIO_BASE = 0xA0000000
SERIAL_PORT = MMIO_BASE + 0x00003F8
KBD_ADDR = MMIO_BASE + 0x0000060
RTC_ADDR = MMIO_BASE + 0x0000040
VGACTL_ADDR = MMIO_BASE + 0x0000100
FB_ADDR = MMIO_BASE + 0x1000000
FFB_ADDR = MMIO_BASE + 0x2000000
DISK_CTL_ADDR = MMIO_BASE + 0x0000300

ReadFn = Callable[[int, int], int]
WriteFn = Callable[[int, int, int], None]


@dataclass(frozen=True)
class _Region:
    base: int
    size: int
    read: Optional[ReadFn]
    write: Optional[WriteFn]

    @property
    def end(self) -> int:
        return self.base + self.size


class Bus:
    """Routes byte, half-word and word accesses to attached devices.

    A device's ``read(offset, width)`` returns the value at ``offset``
    bytes into its region; ``write(offset, width, value)`` stores one.
    """

    def __init__(self) -> None:
        self._regions: list[_Region] = []

    def attach(
        self,
        base: int,
        size: int,
        read: Optional[ReadFn] = None,
        write: Optional[WriteFn] = None,
    ) -> None:
        """Map a device to ``size`` bytes starting at ``base``."""
        if base < 0 or size <= 0:
            raise ValueError(f"bad region: base={base:#x} size={size}")
        for region in self._regions:
            if base < region.end and region.base < base + size:
                raise ValueError(f"region at {base:#x} overlaps one at {region.base:#x}")
        self._regions.append(_Region(base, size, read, write))
        self._regions.sort(key=lambda r: r.base)

    def _region(self, addr: int, width: int) -> _Region:
        for region in self._regions:
            if region.base <= addr < region.end:
                if addr + width > region.end:
                    raise LookupError(f"access at {addr:#x} runs past its device")
                return region
        raise LookupError(f"no device at {addr:#x}")

    def _read(self, addr: int, width: int) -> int:
        region = self._region(addr, width)
        if region.read is None:
            raise LookupError(f"device at {addr:#x} is not readable")
        return region.read(addr - region.base, width) & ((1 << (8 * width)) - 1)

    def _write(self, addr: int, width: int, data: int) -> None:
        region = self._region(addr, width)
        if region.write is None:
            raise LookupError(f"device at {addr:#x} is not writable")
        region.write(addr - region.base, width, data & ((1 << (8 * width)) - 1))

    def inb(self, addr: int) -> int:
        return self._read(addr, 1)

    def inw(self, addr: int) -> int:
        return self._read(addr, 2)

    def inl(self, addr: int) -> int:
        return self._read(addr, 4)

    def outb(self, addr: int, data: int) -> None:
        self._write(addr, 1, data)

    def outw(self, addr: int, data: int) -> None:
        self._write(addr, 2, data)

    def outl(self, addr: int, data: int) -> None:
        self._write(addr, 4, data)