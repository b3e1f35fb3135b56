"""Device demo programs: greeting, key echo, clock and a spiral animation.

Each demo talks to the devices only through :class:`trapkit.ioe.IOE`.
``main`` runs one of them against devices backed by the host: its clock,
a framebuffer in memory and a keyboard that never reports a key.
"""

from __future__ import annotations

import argparse
import sys
import time
from datetime import datetime, timezone
from itertools import islice
from typing import Iterator, Optional, Sequence

from trapkit.devices import DeviceRegister, GpuFbdraw, Key, key_name
from trapkit.formatting import sprintf
from trapkit.ioe import IOE, RTC_FIELD_ADDRS, SYNC_ADDR
from trapkit.mmio import FB_ADDR, KBD_ADDR, RTC_ADDR, VGACTL_ADDR, Bus
from trapkit.runtime import Machine

FPS = 30
N = 32
COLOR_BUF_SIZE = 32 * 32

_DX = (0, 1, 0, -1)
_DY = (1, 0, -1, 0)


def hello(machine: Machine) -> None:
    """Print the greeting ten times."""
    for i in range(10):
        machine.printf("%d: Hello, CECS 2023!\n", i)


def key_events(ioe: IOE) -> Iterator[str]:
    """Drain the pending keys once, yielding one report line per key."""
    has_uart = ioe.read(DeviceRegister.UART_CONFIG).present
    has_kbd = ioe.read(DeviceRegister.INPUT_CONFIG).present

    if has_uart:
        while True:
            ch = ioe.read(DeviceRegister.UART_RX).data & 0xFF
            if ch == 0xFF:
                break
            yield sprintf("Got (uart): %c (%d)\n", ch, ch)

    if has_kbd:
        while True:
            ev = ioe.read(DeviceRegister.INPUT_KEYBRD)
            if ev.keycode == Key.NONE:
                break
            yield sprintf(
                "Got  (kbd): %s (%d) %s\n",
                key_name(ev.keycode),
                ev.keycode,
                "DOWN" if ev.keydown else "UP",
            )


def rtc_reports(ioe: IOE) -> Iterator[str]:
    """Yield the wall-clock time once for every second of uptime, forever."""
    sec = 1
    while True:
        while ioe.read(DeviceRegister.TIMER_UPTIME).us // 1_000_000 < sec:
            pass
        rtc = ioe.read(DeviceRegister.TIMER_RTC)
        line = sprintf(
            "%d-%d-%d %02d:%02d:%02d GMT (",
            rtc.year, rtc.month, rtc.day, rtc.hour, rtc.minute, rtc.second,
        )
        if sec == 1:
            line += sprintf("%d second).\n", sec)
        else:
            line += sprintf("%d seconds).\n", sec)
        yield line
        sec += 1


def pixel(r: int, g: int, b: int) -> int:
    """Pack 8-bit channels into a 0x00RRGGBB pixel; each channel is truncated."""
    return ((r & 0xFF) << 16) | ((g & 0xFF) << 8) | (b & 0xFF)


def ramp_color(tsc: int) -> int:
    """Colour of the animation ramp at step ``tsc``."""
    b = tsc & 0xFF
    return pixel(b * 6, b * 7, b)


class SpiralAnimation:
    """An N x N grid of colours that a spiral walk repaints each frame."""

    def __init__(self) -> None:
        self.tsc = 0
        self.canvas = [[0] * N for _ in range(N)]

    def update(self) -> None:
        """Advance one frame and repaint the canvas along the spiral."""
        self.tsc += 1
        used = [[False] * N for _ in range(N)]
        init = self.tsc
        self.canvas[0][0] = ramp_color(init)
        used[0][0] = True
        x = y = d = 0
        for step in range(1, N * N):
            for _ in range(4):
                x1, y1 = x + _DX[d], y + _DY[d]
                if 0 <= x1 < N and 0 <= y1 < N and not used[x1][y1]:
                    x, y = x1, y1
                    used[x][y] = True
                    self.canvas[x][y] = ramp_color(init + step // 2)
                    break
                d = (d + 1) % 4

    def redraw(self, ioe: IOE) -> None:
        """Draw every cell as a block of the screen, then sync."""
        cfg = ioe.read(DeviceRegister.GPU_CONFIG)
        w = cfg.width // N
        h = cfg.height // N
        block_size = w * h
        if block_size > COLOR_BUF_SIZE:
            raise ValueError(
                f"a {w}x{h} block exceeds the {COLOR_BUF_SIZE}-pixel colour buffer"
            )
        for y in range(N):
            for x in range(N):
                pixels = [self.canvas[y][x]] * block_size
                ioe.write(DeviceRegister.GPU_FBDRAW, GpuFbdraw(x * w, y * h, pixels, w, h, False))
        ioe.write(DeviceRegister.GPU_FBDRAW, GpuFbdraw(0, 0, None, 0, 0, True))


def _video_loop(machine: Machine, ioe: IOE, frames: Optional[int]) -> None:
    animation = SpiralAnimation()
    last = fps_last = 0
    fps = drawn = 0
    while frames is None or drawn < frames:
        upt = ioe.read(DeviceRegister.TIMER_UPTIME).us // 1000
        if upt - last > 1000 // FPS:
            animation.update()
            animation.redraw(ioe)
            last = upt
            fps += 1
            drawn += 1
        if upt - fps_last > 1000:
            machine.printf("%d: FPS = %d\n", upt, fps)
            fps_last = upt
            fps = 0


class _HostDevices:
    """Timer, clock, screen and keyboard served from the host."""

    def __init__(self, width: int = 400, height: int = 300) -> None:
        self.width = width
        self.height = height
        self.framebuffer = bytearray(width * height * 4)
        self._start = time.monotonic()
        self._uptime = 0

    def bus(self) -> Bus:
        bus = Bus()
        bus.attach(RTC_ADDR, 8 + 4 * len(RTC_FIELD_ADDRS), self._rtc_read)
        bus.attach(KBD_ADDR, 4, lambda _offset, _width: 0)
        bus.attach(VGACTL_ADDR, SYNC_ADDR + 4 - VGACTL_ADDR, self._vga_read, self._vga_write)
        bus.attach(FB_ADDR, len(self.framebuffer), None, self._fb_write)
        return bus

    def _rtc_read(self, offset: int, _width: int) -> int:
        if offset == 0:
            self._uptime = int((time.monotonic() - self._start) * 1_000_000)
            return self._uptime & 0xFFFFFFFF
        if offset == 4:
            return self._uptime >> 32
        now = datetime.now(timezone.utc)
        fields = {
            "second": now.second, "minute": now.minute, "hour": now.hour,
            "day": now.day, "month": now.month, "year": now.year,
        }
        for name, addr in RTC_FIELD_ADDRS.items():
            if addr - RTC_ADDR == offset:
                return fields[name]
        return 0

    def _vga_read(self, offset: int, _width: int) -> int:
        return (self.width << 16) | self.height if offset == 0 else 0

    def _vga_write(self, _offset: int, _width: int, _value: int) -> None:
        pass

    def _fb_write(self, offset: int, width: int, value: int) -> None:
        self.framebuffer[offset : offset + width] = value.to_bytes(width, "little")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run one demo on host-backed devices; return its exit code."""
    parser = argparse.ArgumentParser(prog="trapkit-demo", description="Run a device demo.")
    parser.add_argument("demo", choices=("hello", "keyboard", "rtc", "video"))
    parser.add_argument(
        "--limit", type=int, default=None,
        help="stop after this many key scans, clock reports or frames",
    )
    args = parser.parse_args(argv)
    if args.limit is not None and args.limit < 0:
        parser.error("--limit must not be negative")

    machine = Machine(sys.stdout)
    ioe = IOE(_HostDevices().bus(), machine)

    def program(_argv: str) -> int:
        ioe.init()
        if args.demo == "hello":
            hello(machine)
        elif args.demo == "keyboard":
            machine.printf("Try to press any key (uart or keyboard)...\n")
            scans = 0
            while args.limit is None or scans < args.limit:
                for line in key_events(ioe):
                    machine.putstr(line)
                scans += 1
        elif args.demo == "rtc":
            for line in islice(rtc_reports(ioe), args.limit):
                machine.putstr(line)
        else:
            _video_loop(machine, ioe, args.limit)
        return 0

    code = machine.call_main(program, "")
    sys.stdout.flush()
    return code