[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "comterm"
version = "0.1.0"
description = "A small desktop terminal for talking to serial (COM) ports"
requires-python = ">=3.10"
keywords = ["serial", "com", "terminal", "uart", "rs232", "tkinter"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Environment :: Win32 (MS Windows)",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Natural Language :: Russian",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Terminals :: Serial",
]
dependencies = [
    "pyserial>=3.5",
]

[project.optional-dependencies]
test = [
    "pytest>=7",
]

[project.gui-scripts]
comterm = "comterm.app:main"

[tool.setuptools.packages.find]
include = ["comterm*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
