[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "scopealloc"
version = "1.5.2"
description = "Scoped allocation tracking: register buffers with a context and release them together or one by one"
requires-python = ">=3.10"
dependencies = []
keywords = ["allocation", "memory", "arena", "scope", "resource-management"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["scopealloc"]

[tool.hatch.build.targets.sdist]
include = ["scopealloc", "tests", "README.md"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
