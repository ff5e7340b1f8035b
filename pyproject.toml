[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ikbdemu"
version = "0.1.0"
description = "Building blocks for emulating the Atari ST keyboard controller: HD6301 peripherals, mouse, HID input, settings and a small OLED user interface"
requires-python = ">=3.10"
keywords = ["atari", "atari-st", "ikbd", "hd6301", "emulator", "keyboard", "mouse", "ssd1306"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: System :: Emulators",
]
dependencies = [
    "pyserial",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["ikbdemu"]

[tool.pytest.ini_options]
addopts = "-ra"
