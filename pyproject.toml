[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "visionlab"
version = "0.1.0"
description = "Small image-processing toolkit: histograms, lookup tables, colour reduction, filters and HSV colour tracking on NumPy arrays"
requires-python = ">=3.10"
keywords = [
    "image processing",
    "histogram",
    "lookup table",
    "contrast stretching",
    "hsv",
    "color detection",
    "sharpen",
    "serial",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Processing",
]
dependencies = [
    "numpy",
    "pillow",
    "pyserial",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
visionlab = "visionlab.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["visionlab"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
