[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "uaparser"
version = "0.1.0"
description = "User-agent string parser driven by a YAML table of regular expressions"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["user-agent", "parser", "browser", "device", "os", "log analysis"]
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
    "Topic :: Internet :: Log Analysis",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
uaparser-bench = "uaparser.bench:main"

[tool.hatch.build.targets.wheel]
packages = ["uaparser"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
