"""Device registers, key codes and GPU structures of the I/O layer."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar, Optional, Sequence


class DeviceRegister(IntEnum):
    """Numbers of the abstract device registers."""

    UART_CONFIG = 1
    UART_TX = 2
    UART_RX = 3
    TIMER_CONFIG = 4
    TIMER_RTC = 5
    TIMER_UPTIME = 6
    INPUT_CONFIG = 7
    INPUT_KEYBRD = 8
    GPU_CONFIG = 9
    GPU_STATUS = 10
    GPU_FBDRAW = 11
    GPU_MEMCPY = 12
    GPU_RENDER = 13


@dataclass
class UartConfig:
    present: bool = False


@dataclass
class UartTx:
    data: int = 0


@dataclass
class UartRx:
    data: int = 0


@dataclass
class TimerConfig:
    present: bool = False
    has_rtc: bool = False


@dataclass
class TimerRtc:
    year: int = 0
    month: int = 0
    day: int = 0
    hour: int = 0
    minute: int = 0
    second: int = 0


@dataclass
class TimerUptime:
    us: int = 0


@dataclass
class InputConfig:
    present: bool = False


@dataclass
class InputKeybrd:
    keydown: bool = False
    keycode: int = 0


@dataclass
class GpuConfig:
    present: bool = False
    has_accel: bool = False
    width: int = 0
    height: int = 0
    vmemsz: int = 0


@dataclass
class GpuStatus:
    ready: bool = False


@dataclass
class GpuFbdraw:
    x: int = 0
    y: int = 0
    pixels: Optional[Sequence[int]] = None
    w: int = 0
    h: int = 0
    sync: bool = False


@dataclass
class GpuMemcpy:
    dest: int = 0
    src: bytes = b""
    size: int = 0


@dataclass
class GpuRender:
    root: int = 0


REGISTER_TYPES = {
    DeviceRegister.UART_CONFIG: UartConfig,
    DeviceRegister.UART_TX: UartTx,
    DeviceRegister.UART_RX: UartRx,
    DeviceRegister.TIMER_CONFIG: TimerConfig,
    DeviceRegister.TIMER_RTC: TimerRtc,
    DeviceRegister.TIMER_UPTIME: TimerUptime,
    DeviceRegister.INPUT_CONFIG: InputConfig,
    DeviceRegister.INPUT_KEYBRD: InputKeybrd,
    DeviceRegister.GPU_CONFIG: GpuConfig,
    DeviceRegister.GPU_STATUS: GpuStatus,
    DeviceRegister.GPU_FBDRAW: GpuFbdraw,
    DeviceRegister.GPU_MEMCPY: GpuMemcpy,
    DeviceRegister.GPU_RENDER: GpuRender,
}

_KEY_NAMES = (
    "ESCAPE", "F1", "F2", "F3", "F4", "F5", "F6", "F7", "F8", "F9", "F10", "F11", "F12",
    "GRAVE", "1", "2", "3", "4", "5", "6", "7", "8", "9", "0",
    "MINUS", "EQUALS", "BACKSPACE",
    "TAB", "Q", "W", "E", "R", "T", "Y", "U", "I", "O", "P",
    "LEFTBRACKET", "RIGHTBRACKET", "BACKSLASH",
    "CAPSLOCK", "A", "S", "D", "F", "G", "H", "J", "K", "L",
    "SEMICOLON", "APOSTROPHE", "RETURN",
    "LSHIFT", "Z", "X", "C", "V", "B", "N", "M", "COMMA", "PERIOD", "SLASH", "RSHIFT",
    "LCTRL", "APPLICATION", "LALT", "SPACE", "RALT", "RCTRL",
    "UP", "DOWN", "LEFT", "RIGHT", "INSERT", "DELETE", "HOME", "END", "PAGEUP", "PAGEDOWN",
)


def _member_name(name: str) -> str:
    return f"NUM{name}" if name.isdigit() else name


Key = IntEnum(
    "Key",
    [("NONE", 0)] + [(_member_name(name), code) for code, name in enumerate(_KEY_NAMES, start=1)],
    module=__name__,
)
Key.__doc__ = "Key codes; digit keys are named NUM0 to NUM9."


def key_name(code: int) -> Optional[str]:
    """Printable name of a key code; None for KEY_NONE."""
    code = int(code)
    if code == Key.NONE:
        return None
    if not 1 <= code <= len(_KEY_NAMES):
        raise ValueError(f"unknown key code: {code}")
    return _KEY_NAMES[code - 1]


GPU_TEXTURE = 1
GPU_SUBTREE = 2
GPU_NULL = 0xFFFFFFFF


@dataclass
class GpuTextureDesc:
    """Packed texture descriptor: width, height and pixel pointer."""

    w: int = 0
    h: int = 0
    pixels: int = 0

    _FORMAT: ClassVar[struct.Struct] = struct.Struct("<HHI")
    SIZE: ClassVar[int] = _FORMAT.size

    def pack(self) -> bytes:
        try:
            return self._FORMAT.pack(self.w, self.h, self.pixels)
        except struct.error as exc:
            raise ValueError(str(exc)) from exc

    @classmethod
    def unpack(cls, data: bytes) -> "GpuTextureDesc":
        data = bytes(data)
        if len(data) != cls.SIZE:
            raise ValueError(f"texture descriptor needs {cls.SIZE} bytes, got {len(data)}")
        return cls(*cls._FORMAT.unpack(data))


@dataclass
class GpuCanvas:
    """Packed canvas node; ``texture`` is used when ``kind`` is GPU_TEXTURE."""

    kind: int = GPU_SUBTREE
    w: int = 0
    h: int = 0
    x1: int = 0
    y1: int = 0
    w1: int = 0
    h1: int = 0
    sibling: int = GPU_NULL
    child: int = 0
    texture: Optional[GpuTextureDesc] = field(default=None)

    _HEAD: ClassVar[struct.Struct] = struct.Struct("<7HI")
    _CHILD: ClassVar[struct.Struct] = struct.Struct("<I4x")
    SIZE: ClassVar[int] = _HEAD.size + GpuTextureDesc.SIZE

    def pack(self) -> bytes:
        try:
            head = self._HEAD.pack(
                self.kind, self.w, self.h, self.x1, self.y1, self.w1, self.h1, self.sibling
            )
            if self.texture is not None:
                body = self.texture.pack()
            else:
                body = self._CHILD.pack(self.child)
        except struct.error as exc:
            raise ValueError(str(exc)) from exc
        return head + body

    @classmethod
    def unpack(cls, data: bytes) -> "GpuCanvas":
        data = bytes(data)
        if len(data) != cls.SIZE:
            raise ValueError(f"canvas needs {cls.SIZE} bytes, got {len(data)}")
        kind, w, h, x1, y1, w1, h1, sibling = cls._HEAD.unpack(data[: cls._HEAD.size])
        body = data[cls._HEAD.size :]
        if kind == GPU_TEXTURE:
            return cls(kind, w, h, x1, y1, w1, h1, sibling, texture=GpuTextureDesc.unpack(body))
        (child,) = cls._CHILD.unpack(body)
        return cls(kind, w, h, x1, y1, w1, h1, sibling, child=child)