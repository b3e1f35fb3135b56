# trapkit

trapkit models the software side of a tiny bare-metal machine: the small C
library it ships with, the devices it talks to over memory-mapped I/O, the
I/O layer on top of them, and the self-checking programs and device demos
that exercise it. It has no dependencies beyond the standard library.

## Modules

- `trapkit.cstring` – NUL-terminated byte strings and raw memory:
  `strlen`, `strnlen`, `strcpy`, `strncpy`, `strcat`, `strcmp`, `strncmp`,
  `strchr`, `strrchr`, `memset`, `memcpy`, `memmove`, `memcmp`. Strings are
  `bytes`, `bytearray`, `memoryview` or Latin-1 `str`; writing functions take
  a `bytearray` and return it; `strchr`/`strrchr` return an index or `None`.
  `memmove(buffer, dst, src, n)` moves bytes between two offsets of one
  buffer. Negative sizes raise `ValueError`, out-of-range accesses
  `IndexError`. `strncmp` and `memcmp` keep the machine library's quirks
  (see their docstrings).
- `trapkit.int64` – 64-bit division helpers: `udivmoddi4` (returns a
  quotient/remainder pair), `udivdi3`, `umoddi3`, `divdi3`, `moddi3`,
  `divmoddi4`, and the 32-bit bit counters `clzsi2` and `ctzsi2` (32 for
  zero). Division by zero raises `ZeroDivisionError`.
- `trapkit.formatting` – the machine's printf engine: `sprintf`,
  `snprintf`, `vsprintf`, `vsnprintf`. Flags `- + space # 0`, width and
  precision (also `*`), the `h`/`l`/`L` qualifiers, and the conversions
  `%c %s %p %d %i %u %o %x %X %%`, plus `%a` (IPv4 address from 4 bytes),
  `%la`/`%lA` (MAC address from 6 bytes) and `%n` (stores the count so far
  into `slot[0]` of its argument). Integers are 32-bit.
- `trapkit.devices` – `DeviceRegister` numbers and one dataclass per
  register (`UartConfig`, `UartTx`, `UartRx`, `TimerConfig`, `TimerRtc`,
  `TimerUptime`, `InputConfig`, `InputKeybrd`, `GpuConfig`, `GpuStatus`,
  `GpuFbdraw`, `GpuMemcpy`, `GpuRender`), the `Key` codes (digits are
  `NUM0`…`NUM9`) with `key_name`, and the packed GPU structures
  `GpuTextureDesc` and `GpuCanvas` with `pack`/`unpack`.
- `trapkit.mmio` – device addresses (`SERIAL_PORT`, `KBD_ADDR`, `RTC_ADDR`,
  `VGACTL_ADDR`, `FB_ADDR`, `DISK_CTL_ADDR`, …) and a `Bus` to which devices
  are attached with `attach(base, size, read, write)`; accesses go through
  `inb`/`inw`/`inl` and `outb`/`outw`/`outl`.
- `trapkit.runtime` – `Machine` (`putch`, `putstr`, `printf`, `halt`,
  `panic`, `call_main`), the `Halt` exception, `Area`, `Context`, `Event`,
  `EventKind`, and `check`, which raises `Halt(1)` when its condition fails.
- `trapkit.ioe` – the I/O layer `IOE` with `init`, `read(reg)` and
  `write(reg, value)`, serving the timer, real-time clock, keyboard and GPU
  over a `Bus`; unserved ports make the machine panic. `ramdisk_read` and
  `ramdisk_write` issue disk commands through the disk control registers.
- `trapkit.arith` – fixed-width integers: `to_int32`, `to_uint32`,
  `to_int64`, `sign_extend`, wrapping `add32`, `add64`, `sub64`, `mul64`,
  `max32`, `min3`, `shift_right_logical`, `shift_right_arith`, bit access
  (`getbit`, `setbit`) and little-endian word access at any offset
  (`read_word`, `write_word`).
- `trapkit.algorithms` – the test programs as functions: `bubble_sort`,
  `select_sort`, `partition`, `quick_sort`, `crc32`, `mul_div_roundtrip`,
  `factorial`, `fibonacci`, `is_prime`, `goldbach`, `cost_tier`,
  `is_leap_year`, `matmul`, `is_prime_6k`, `mersenne_factor`, `pascal_row`,
  `primes_between`, `mutual_recursion`, `narcissistic_numbers`, `sum_to`,
  `switch_case`, `to_lower_case`, `perfect_numbers`.
- `trapkit.demos` – device demos: `hello`, `key_events`, `rtc_reports`,
  `pixel`, `ramp_color`, `SpiralAnimation` (`update`, `redraw`) and the
  command-line entry point `main`.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

```python
from trapkit.formatting import sprintf

sprintf("%d + %d = %d\n", 2, 10, 12)   # "2 + 10 = 12\n"
sprintf("%#x", 255)                     # "0xff"
```

```python
from trapkit.arith import add32

add32(0x7FFFFFFF, 1)   # -2147483648
```

```python
from trapkit.algorithms import crc32

crc32(b"The quick brown fox jumps over the lazy dog", 0)   # 0x414FA339
```

```python
from trapkit.runtime import Halt, Machine, check

def program(argv):
    check(1 + 1 == 3)
    return 0

Machine().call_main(program, "")   # 1
```

## Command line

`trapkit-demo` runs one demo against devices backed by the host:

```
trapkit-demo hello
trapkit-demo rtc --limit 3
trapkit-demo video --limit 60
trapkit-demo keyboard --limit 1
```

`--limit` stops after that many key scans, clock reports or frames; without
it the keyboard, clock and video demos run until interrupted.

## What it does not do

- It does not execute machine code. The test programs are Python functions;
  there is no instruction-set simulator.
- The host-backed devices used by `trapkit-demo` are minimal: the keyboard
  never reports a key, there is no UART, and the video demo draws into a
  framebuffer held in memory without showing it in a window.
- `ramdisk_read` and `ramdisk_write` only write the disk control registers
  on a `Bus`; no disk device is provided.