[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jadwaldokter"
version = "0.1.0"
description = "Monthly doctor shift scheduling from a CSV roster: roster management with undo, greedy schedule generation, text schedule views and performance reports."
requires-python = ">=3.10"
dependencies = []
keywords = ["scheduling", "roster", "hospital", "doctors", "shifts", "csv"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Healthcare Industry",
    "Natural Language :: Indonesian",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Scheduling",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
jadwaldokter = "jadwaldokter.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["jadwaldokter"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
