[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "qqcore"
version = "0.1.0"
description = "Protocol building blocks for a QQ chat client: app versions, device profiles, proof of work, TLV decoding, highway framing, notifications and helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["qq", "chat", "protocol", "tlv", "im"]
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
    "Topic :: Communications :: Chat",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["qqcore"]

[tool.pytest.ini_options]
addopts = "-ra"
