[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "npukit"
version = "0.1.0"
description = "Audio filter design (FIR, biquad, Butterworth IIR), window functions and a JPEG image codec"
requires-python = ">=3.10"
keywords = ["dsp", "audio", "filter", "fir", "iir", "biquad", "butterworth", "window", "jpeg"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Analysis",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
    "Topic :: Scientific/Engineering",
]
dependencies = [
    "numpy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["npukit"]

[tool.pytest.ini_options]
addopts = "-ra"
