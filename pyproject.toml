[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wayboomer"
version = "0.1.0"
description = "Zoom, pan, draw on and spotlight a screenshot or image read from standard input"
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["zoom", "screenshot", "magnifier", "wayland", "viewer", "presentation", "annotate"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Viewers",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
wayboomer = "wayboomer.app:main"

[tool.hatch.build.targets.wheel]
packages = ["wayboomer"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
