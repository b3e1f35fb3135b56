"""The abstract I/O layer: device registers served over memory-mapped I/O.

Register numbers come from :class:`trapkit.devices.DeviceRegister`.
``IOE.read`` returns a fresh register value filled in by the device;
``IOE.write`` hands a register value to the device. Ports that no
device serves make the machine panic.

Timer layout at ``RTC_ADDR``: the uptime in microseconds as two 32-bit
words (low word first), then second, minute, hour, day, month and year
as one 32-bit word each.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from trapkit.devices import (
    REGISTER_TYPES,
    DeviceRegister,
    GpuConfig,
    GpuFbdraw,
    GpuStatus,
    InputConfig,
    InputKeybrd,
    TimerConfig,
    TimerRtc,
    TimerUptime,
    UartConfig,
)
from trapkit.mmio import DISK_CTL_ADDR, FB_ADDR, KBD_ADDR, RTC_ADDR, VGACTL_ADDR, Bus
from trapkit.runtime import Machine

PORTS = 128
KEYDOWN_MASK = 0x8000
SYNC_ADDR = VGACTL_ADDR + 4

UPTIME_LO_ADDR = RTC_ADDR
UPTIME_HI_ADDR = RTC_ADDR + 4
_RTC_FIELDS = ("second", "minute", "hour", "day", "month", "year")
RTC_FIELD_ADDRS = {name: RTC_ADDR + 8 + 4 * index for index, name in enumerate(_RTC_FIELDS)}

DISK_CMD_READ = 1
DISK_CMD_WRITE = 2

_MASK32 = 0xFFFFFFFF

Handler = Callable[[Any], None]


class IOE:
    """Dispatches device register accesses to handlers that talk to a bus."""

    def __init__(self, bus: Bus, machine: Optional[Machine] = None) -> None:
        self.bus = bus
        self.machine = machine if machine is not None else Machine()
        self._lut: Optional[list[Handler]] = None

    def init(self) -> bool:
        """Set up the dispatch table and the devices; return True."""
        handlers: dict[int, Handler] = {
            DeviceRegister.TIMER_CONFIG: self._timer_config,
            DeviceRegister.TIMER_RTC: self._timer_rtc,
            DeviceRegister.TIMER_UPTIME: self._timer_uptime,
            DeviceRegister.INPUT_CONFIG: self._input_config,
            DeviceRegister.INPUT_KEYBRD: self._input_keybrd,
            DeviceRegister.GPU_CONFIG: self._gpu_config,
            DeviceRegister.GPU_FBDRAW: self._gpu_fbdraw,
            DeviceRegister.GPU_STATUS: self._gpu_status,
            DeviceRegister.UART_CONFIG: self._uart_config,
        }
        self._lut = [handlers.get(port, self._fail) for port in range(PORTS)]
        return True

    def _handler(self, reg: int) -> Handler:
        if self._lut is None:
            raise RuntimeError("the I/O layer is used before init()")
        if not 0 <= reg < PORTS:
            raise ValueError(f"no such I/O port: {reg}")
        return self._lut[reg]

    def read(self, reg: int) -> Any:
        """Read a device register and return its value."""
        handler = self._handler(reg)
        register_type = REGISTER_TYPES.get(reg)
        value = register_type() if register_type is not None else None
        handler(value)
        return value

    def write(self, reg: int, value: Any) -> None:
        """Write a value to a device register."""
        handler = self._handler(reg)
        register_type = REGISTER_TYPES.get(reg)
        if register_type is not None and not isinstance(value, register_type):
            raise TypeError(
                f"port {reg} takes {register_type.__name__}, not {type(value).__name__}"
            )
        handler(value)

    def _fail(self, _value: Any) -> None:
        self.machine.panic("unhandled ioe port")

    @staticmethod
    def _timer_config(cfg: TimerConfig) -> None:
        cfg.present = True
        cfg.has_rtc = True

    @staticmethod
    def _input_config(cfg: InputConfig) -> None:
        cfg.present = True

    @staticmethod
    def _uart_config(cfg: UartConfig) -> None:
        cfg.present = False

    def _timer_uptime(self, uptime: TimerUptime) -> None:
        low = self.bus.inl(UPTIME_LO_ADDR)
        high = self.bus.inl(UPTIME_HI_ADDR)
        uptime.us = (high << 32) | low

    def _timer_rtc(self, rtc: TimerRtc) -> None:
        for name, addr in RTC_FIELD_ADDRS.items():
            setattr(rtc, name, self.bus.inl(addr))

    def _input_keybrd(self, kbd: InputKeybrd) -> None:
        data = self.bus.inl(KBD_ADDR)
        kbd.keydown = bool(data & KEYDOWN_MASK)
        kbd.keycode = data & ~KEYDOWN_MASK & _MASK32

    def _screen_size(self) -> tuple[int, int]:
        size = self.bus.inl(VGACTL_ADDR)
        return (size >> 16) & 0xFFFF, size & 0xFFFF

    def _gpu_config(self, cfg: GpuConfig) -> None:
        width, height = self._screen_size()
        cfg.present = True
        cfg.has_accel = False
        cfg.width = width
        cfg.height = height
        cfg.vmemsz = 0

    def _gpu_fbdraw(self, ctl: GpuFbdraw) -> None:
        width, height = self._screen_size()
        if ctl.w > 0 and ctl.h > 0:
            if ctl.pixels is None:
                raise ValueError("a framebuffer draw needs pixels")
            for i in range(ctl.h):
                row = ctl.y + i
                if not 0 <= row < height:
                    continue
                for j in range(ctl.w):
                    col = ctl.x + j
                    if not 0 <= col < width:
                        continue
                    self.bus.outl(FB_ADDR + 4 * (row * width + col), ctl.pixels[i * ctl.w + j])
        if ctl.sync:
            self.bus.outl(SYNC_ADDR, 1)

    @staticmethod
    def _gpu_status(status: GpuStatus) -> None:
        status.ready = True


def _disk_command(bus: Bus, command: int, buf_addr: int, offset: int, length: int) -> int:
    bus.outl(DISK_CTL_ADDR, offset)
    bus.outl(DISK_CTL_ADDR + 4, buf_addr)
    bus.outl(DISK_CTL_ADDR + 8, length)
    bus.outl(DISK_CTL_ADDR + 12, command)
    return length


def ramdisk_read(bus: Bus, buf_addr: int, offset: int, length: int) -> int:
    """Ask the disk to copy ``length`` bytes at ``offset`` to ``buf_addr``."""
    return _disk_command(bus, DISK_CMD_READ, buf_addr, offset, length)


def ramdisk_write(bus: Bus, buf_addr: int, offset: int, length: int) -> int:
    """Ask the disk to store ``length`` bytes from ``buf_addr`` at ``offset``."""
    return _disk_command(bus, DISK_CMD_WRITE, buf_addr, offset, length)