[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "semester_planner"
version = "0.1.0"
description = "HTTP service for planning student semesters, subjects and subject attempts"
requires-python = ">=3.10"
keywords = ["education", "semester", "planning", "subjects", "students"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "sqlalchemy>=2.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7",
]

[project.scripts]
semester-planner = "semester_planner.server:main"

[tool.hatch.build.targets.wheel]
packages = ["semester_planner"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
