[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sniblock"
version = "0.1.0"
description = "Block TLS connections by the server name in their Client Hello, using forged TCP resets"
requires-python = ">=3.10"
dependencies = []
keywords = ["tls", "sni", "tcp", "rst", "firewall", "packet", "network"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking :: Firewalls",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sniblock = "sniblock.blocker:main"

[tool.hatch.build.targets.wheel]
packages = ["sniblock"]

[tool.pytest.ini_options]
addopts = "-ra"
