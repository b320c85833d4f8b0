[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "termwidgets"
version = "0.1.0"
description = "Widgets for terminal user interfaces: boxes, buttons, checkboxes, centring and flexbox layouts, an in-memory screen and an event-driven application loop."
requires-python = ">=3.10"
dependencies = [
    "wcwidth",
]
keywords = ["terminal", "tui", "widgets", "console", "layout", "ansi"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Widget Sets",
    "Topic :: Terminals",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["termwidgets"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
