[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "volsurface"
version = "0.1.0"
description = "Live 3D implied-volatility surface of Deribit BTC options"
requires-python = ">=3.10"
keywords = ["options", "implied volatility", "volatility surface", "deribit", "websocket"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Financial and Insurance Industry",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Investment",
    "Topic :: Scientific/Engineering :: Visualization",
]
dependencies = [
    "numpy",
    "scipy",
    "matplotlib",
    "websockets",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
volsurface = "volsurface.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["volsurface"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
