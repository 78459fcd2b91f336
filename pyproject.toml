[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "djvukit"
version = "0.0.1"
description = "Read, edit, assemble and render DjVu documents at the chunk level"
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = ["djvu", "iff", "document", "image", "pnm", "jpeg"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
    "Topic :: File Formats",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pillow",
]

[project.scripts]
djvukit-tree = "djvukit.tree:main"
djvukit-insert = "djvukit.insert:main"
djvukit-decode = "djvukit.decode:main"
djvukit-extract = "djvukit.extract:main"
djvukit-fix = "djvukit.fix:main"
djvukit-make = "djvukit.make:main"

[tool.hatch.build.targets.wheel]
packages = ["djvukit"]

[tool.pytest.ini_options]
addopts = "-ra"
