[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bikeshed"
version = "0.1.0"
description = "A tiny toy web browser: HTML parsing, a CSS subset, block/inline layout and a window to draw it in"
requires-python = ">=3.10"
keywords = ["browser", "html", "css", "layout", "parser"]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Browsers",
    "Topic :: Text Processing :: Markup :: HTML",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
bikeshed = "bikeshed.app:main"

[tool.hatch.build.targets.wheel]
packages = ["bikeshed"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
