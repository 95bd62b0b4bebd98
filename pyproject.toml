[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "codeagent"
version = "1.0.0"
description = "An interactive terminal assistant that sends questions and code-formatting requests to a chat-completion API."
requires-python = ">=3.10"
keywords = ["llm", "terminal", "assistant", "code formatting", "chat"]
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
    "Topic :: Software Development",
]
dependencies = [
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
codeagent = "codeagent.app:main"

[tool.hatch.build.targets.wheel]
packages = ["codeagent"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
