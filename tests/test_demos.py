from itertools import islice

import pytest

from trapkit.demos import (
    COLOR_BUF_SIZE,
    N,
    SpiralAnimation,
    hello,
    key_events,
    main,
    pixel,
    ramp_color,
    rtc_reports,
)
from trapkit.devices import Key
from trapkit.ioe import IOE
from trapkit.mmio import FB_ADDR, KBD_ADDR, RTC_ADDR, VGACTL_ADDR, Bus
from trapkit.runtime import Machine


class FakeBoard:
    def __init__(self, width=64, height=64, keys=(), step_us=400_000,
                 rtc=(4, 3, 9, 7, 5, 2023)):
        self.width = width
        self.height = height
        self.keys = list(keys)
        self.step_us = step_us
        self.rtc = rtc
        self.us = 0
        self.fb = {}
        self.syncs = []
        self.bus = Bus()
        self.bus.attach(RTC_ADDR, 32, self._rtc_read)
        self.bus.attach(KBD_ADDR, 4, self._kbd_read)
        self.bus.attach(VGACTL_ADDR, 8, self._vga_read, self._vga_write)
        self.bus.attach(FB_ADDR, width * height * 4, None, self._fb_write)

    def _rtc_read(self, offset, width):
        if offset == 0:
            self.us += self.step_us
            return self.us & 0xFFFFFFFF
        if offset == 4:
            return self.us >> 32
        return self.rtc[(offset - 8) // 4]

    def _kbd_read(self, offset, width):
        return self.keys.pop(0) if self.keys else 0

    def _vga_read(self, offset, width):
        return (self.width << 16) | self.height if offset == 0 else 0

    def _vga_write(self, offset, width, value):
        self.syncs.append((offset, value))

    def _fb_write(self, offset, width, value):
        self.fb[offset // 4] = value

    def ioe(self):
        ioe = IOE(self.bus, Machine())
        ioe.init()
        return ioe


def test_hello_prints_ten_numbered_lines():
    machine = Machine()
    hello(machine)
    lines = machine.stream.getvalue().splitlines()
    assert len(lines) == 10
    assert lines[0] == "0: Hello, CECS 2023!"
    assert lines[9] == "9: Hello, CECS 2023!"


def test_key_events_reports_down_and_up():
    board = FakeBoard(keys=[0x8000 | Key.A, int(Key.A)])
    lines = list(key_events(board.ioe()))
    assert lines == [
        f"Got  (kbd): A ({int(Key.A)}) DOWN\n",
        f"Got  (kbd): A ({int(Key.A)}) UP\n",
    ]


def test_key_events_empty_when_no_keys():
    board = FakeBoard()
    assert list(key_events(board.ioe())) == []


def test_key_events_unknown_code_raises():
    board = FakeBoard(keys=[200])
    with pytest.raises(ValueError):
        list(key_events(board.ioe()))


def test_rtc_reports_format_and_plural():
    board = FakeBoard()
    reports = list(islice(rtc_reports(board.ioe()), 3))
    assert reports[0] == "2023-5-7 09:03:04 GMT (1 second).\n"
    assert reports[1].endswith("(2 seconds).\n")
    assert reports[2].endswith("(3 seconds).\n")


def test_rtc_reports_wait_for_each_second():
    board = FakeBoard()
    next(rtc_reports(board.ioe()))
    assert board.us >= 1_000_000


def test_pixel_packs_channels():
    assert pixel(0xFF, 0, 0) == 0xFF0000
    assert pixel(0x12, 0x34, 0x56) == 0x123456


def test_pixel_truncates_channels():
    assert pixel(0x106, 0x207, 0x301) == pixel(0x06, 0x07, 0x01)


def test_ramp_color_wraps_every_256_steps():
    assert ramp_color(0) == 0
    for t in (1, 17, 200):
        assert ramp_color(t) == ramp_color(t + 256)
        assert ramp_color(t) == pixel(t * 6, t * 7, t)


def test_update_starts_at_origin_with_tick_color():
    anim = SpiralAnimation()
    anim.update()
    assert anim.tsc == 1
    assert anim.canvas[0][0] == ramp_color(1)
    assert anim.canvas[0][1] == ramp_color(1)
    anim.update()
    assert anim.canvas[0][0] == ramp_color(2)


def test_update_colors_come_from_the_ramp():
    anim = SpiralAnimation()
    anim.update()
    allowed = {ramp_color(1 + k) for k in range(N * N // 2)}
    assert all(cell in allowed for row in anim.canvas for cell in row)
    assert len(anim.canvas) == N and all(len(row) == N for row in anim.canvas)


def test_redraw_fills_framebuffer_blocks_and_syncs():
    board = FakeBoard(width=64, height=64)
    anim = SpiralAnimation()
    anim.update()
    anim.redraw(board.ioe())
    assert len(board.fb) == 64 * 64
    for row in (0, 5, 63):
        for col in (0, 9, 62):
            assert board.fb[row * 64 + col] == anim.canvas[row // 2][col // 2]
    assert board.syncs == [(4, 1)]


def test_redraw_rejects_oversized_blocks():
    side = N * 40
    assert 40 * 40 > COLOR_BUF_SIZE
    board = FakeBoard(width=side, height=side)
    anim = SpiralAnimation()
    anim.update()
    with pytest.raises(ValueError):
        anim.redraw(board.ioe())


def test_main_hello(capsys):
    assert main(["hello"]) == 0
    out = capsys.readouterr().out
    assert out.count("Hello, CECS 2023!") == 10


def test_main_keyboard_with_limit(capsys):
    assert main(["keyboard", "--limit", "2"]) == 0
    assert capsys.readouterr().out == "Try to press any key (uart or keyboard)...\n"


def test_main_video_one_frame():
    assert main(["video", "--limit", "1"]) == 0


def test_main_rejects_unknown_demo():
    with pytest.raises(SystemExit):
        main(["nope"])