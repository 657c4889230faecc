[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "carrental"
version = "0.1.0"
description = "A small car rental HTTP service: cars, orders and booking validation over a JSON API."
requires-python = ">=3.10"
keywords = ["car rental", "booking", "rest", "flask", "sqlite"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
]
dependencies = [
    "flask>=2.2",
]

[project.optional-dependencies]
test = [
    "pytest>=7",
]

[project.scripts]
carrental = "carrental.app:main"

[tool.hatch.build.targets.wheel]
packages = ["carrental"]

[tool.pytest.ini_options]
addopts = "-ra"
