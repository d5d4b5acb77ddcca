[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jiraclient"
version = "0.1.0"
description = "A client library for the Jira REST and Agile APIs"
requires-python = ">=3.10"
keywords = ["jira", "atlassian", "rest", "api", "client", "agile", "jwt"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Internet :: WWW/HTTP",
]
dependencies = [
    "requests>=2.25",
    "pyjwt>=2.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "responses>=0.22",
]

[tool.hatch.build.targets.wheel]
packages = ["jiraclient"]

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
ignore_missing_imports = true
