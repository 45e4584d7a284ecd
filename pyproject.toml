[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cronwatch"
version = "0.1.0"
description = "Watch cron jobs for missed or failed runs and raise alerts through pluggable backends."
requires-python = ">=3.11"
dependencies = [
    "pyyaml",
    "werkzeug",
]
keywords = ["cron", "monitoring", "alerting", "scheduler", "healthcheck", "watchdog"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["cronwatch"]

[tool.hatch.build.targets.sdist]
include = [
    "cronwatch",
    "tests",
    "README.md",
]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
warn_redundant_casts = true
