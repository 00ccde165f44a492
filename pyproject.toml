[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ecas"
version = "0.1.0"
description = "Asynchronous computation graphs with threaded node groups, blocking tensor queues, CPU operators and small streaming utilities."
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["computation graph", "scheduler", "tensor", "gemm", "ring buffer", "threading", "bmp"]
classifiers = [
    "Development Status :: 3 - Alpha",
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
test = [
    "pytest",
]

[project.scripts]
ecas-demo = "ecas.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["ecas"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
