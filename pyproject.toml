[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "corolab"
version = "0.1.0"
description = "Small coroutine experiments: generators, hand-driven tasks, thread hand-off, sleep sort, cancellation and asyncio echo servers"
requires-python = ">=3.11"
dependencies = []
keywords = ["coroutines", "asyncio", "generators", "cancellation", "echo server"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Operating System :: OS Independent",
    "Topic :: Software Development",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
corolab-generator = "corolab.generator:main"
corolab-task = "corolab.task:main"
corolab-thread-switching = "corolab.thread_switching:main"
corolab-sleep-sort = "corolab.sleep_sort:main"
corolab-cancellation = "corolab.cancellation:main"
corolab-echo-server = "corolab.echo_server:main"
corolab-line-echo = "corolab.line_echo:main"

[tool.hatch.build.targets.wheel]
packages = ["corolab"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
strict = true
