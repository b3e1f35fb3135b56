[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "trapkit"
version = "0.1.0"
description = "A model of a small bare-metal machine's runtime: C-style string, formatting and 64-bit arithmetic helpers, memory-mapped devices, an I/O layer, self-checking test programs and device demos."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "emulator",
    "bare-metal",
    "runtime",
    "mmio",
    "printf",
    "crc32",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Emulators",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
trapkit-demo = "trapkit.demos:main"

[tool.hatch.build.targets.wheel]
packages = ["trapkit"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
