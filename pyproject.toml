[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jp2lam"
version = "0.1.0"
description = "Wavelet transforms, quantization norms and rate-distortion truncation planning for JPEG 2000 encoding"
requires-python = ">=3.10"
dependencies = []
keywords = ["jpeg2000", "jp2", "wavelet", "dwt", "rate-distortion", "pcrd", "image-compression"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
    "Topic :: Scientific/Engineering :: Image Processing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["jp2lam"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
