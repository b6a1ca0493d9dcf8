[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hidremap"
version = "0.1.0"
description = "HID remapper logic: report descriptor parsing, CRC-32, inter-chip messages, board definitions and GPIO/LED state machines"
requires-python = ">=3.10"
dependencies = []
keywords = ["hid", "usb", "remapper", "report-descriptor", "crc32", "bluetooth", "gpio"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Hardware :: Universal Serial Bus (USB) :: Human Interface Device (HID)",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["hidremap"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
