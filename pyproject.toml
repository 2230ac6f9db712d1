[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "raycaster"
version = "0.1.0"
description = "A small grid-based ray casting first-person maze walker with an XPM reader and X11 colour names"
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["raycasting", "game", "3d", "maze", "xpm", "renderer"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: First Person Shooters",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
raycaster = "raycaster.app:main"

[tool.hatch.build.targets.wheel]
packages = ["raycaster"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
