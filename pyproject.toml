[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ppmlocality"
version = "0.1.0"
description = "Rotate and flip PNM images using plain or cache-blocked 2D arrays, with CPU timing"
requires-python = ">=3.10"
dependencies = []
keywords = ["ppm", "pnm", "image", "rotation", "flip", "locality", "blocked-array", "cache"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ppmtrans = "ppmlocality.ppmtrans:main"

[tool.hatch.build.targets.wheel]
packages = ["ppmlocality"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
