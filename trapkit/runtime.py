"""The bare-machine runtime: halting, console output and trap context."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Callable, NoReturn, Optional, TextIO, Union

from trapkit.formatting import vsprintf

PAGE_SHIFT = 12
PAGE_SIZE = 1 << PAGE_SHIFT
PMEM_SIZE = 128 * 1024 * 1024
PMEM_START = 0x80000000


class Halt(Exception):
    """Raised when the machine halts; ``code`` is the exit code."""

    def __init__(self, code: int) -> None:
        super().__init__(f"halted with code {code}")
        self.code = code


def check(cond: Any) -> None:
    """Halt with code 1 unless ``cond`` holds."""
    if not cond:
        raise Halt(1)


@dataclass(frozen=True)
class Area:
    """A memory range from ``start`` up to but excluding ``end``."""

    start: int
    end: int

    @property
    def size(self) -> int:
        return self.end - self.start


@dataclass
class Context:
    """Saved registers of a trap."""

    gpr: list[int] = field(default_factory=lambda: [0] * 32)
    mcause: int = 0
    mstatus: int = 0
    mepc: int = 0

    def __post_init__(self) -> None:
        if len(self.gpr) != 32:
            raise ValueError(f"a context holds 32 registers, not {len(self.gpr)}")

    @property
    def syscall_number(self) -> int:
        return self.gpr[17]

    @property
    def syscall_args(self) -> tuple[int, int, int]:
        return self.gpr[10], self.gpr[11], self.gpr[12]

    @property
    def ret(self) -> int:
        return self.gpr[10]

    @ret.setter
    def ret(self, value: int) -> None:
        self.gpr[10] = value


class EventKind(IntEnum):
    NULL = 0
    YIELD = 1
    SYSCALL = 2
    PAGEFAULT = 3
    IRQ_TIMER = 4
    IRQ_IODEV = 5
    ERROR = 6


@dataclass
class Event:
    event: EventKind = EventKind.NULL
    cause: int = 0
    ref: int = 0
    msg: Optional[str] = None


class Machine:
    """Console output, heap bounds and program start/stop."""

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        heap_start: int = PMEM_START,
        pmem_start: int = PMEM_START,
    ) -> None:
        self.stream: TextIO = stream if stream is not None else io.StringIO()
        self.heap = Area(heap_start, pmem_start + PMEM_SIZE)
        self.exit_code: Optional[int] = None

    def putch(self, ch: Union[str, int]) -> None:
        """Write one character to the serial console."""
        if isinstance(ch, int):
            ch = chr(ch & 0xFF)
        if len(ch) != 1:
            raise ValueError("putch writes exactly one character")
        self.stream.write(ch)

    def putstr(self, s: str) -> None:
        """Write a string up to its first NUL."""
        for ch in s.split("\0", 1)[0]:
            self.putch(ch)

    def printf(self, fmt: str, *args: Any) -> int:
        """Format and print; return the number of characters formatted."""
        text = vsprintf(fmt, args)
        self.putstr(text)
        return len(text)

    def halt(self, code: int) -> NoReturn:
        self.exit_code = code
        raise Halt(code)

    def panic(self, message: str) -> NoReturn:
        self.putstr(f"Panic: {message}\n")
        self.halt(1)

    def call_main(self, main: Callable[[str], Optional[int]], argv: str = "") -> int:
        """Run ``main`` and return the code the machine halted with."""
        try:
            ret = main(argv)
        except Halt as stop:
            return stop.code
        code = 0 if ret is None else ret
        self.exit_code = code
        return code