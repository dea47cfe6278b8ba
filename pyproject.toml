[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kumaclient"
version = "0.1.0"
description = "Data models and JSON serialisation for Uptime Kuma monitors, notifications and proxies"
requires-python = ">=3.10"
dependencies = []
keywords = ["uptime-kuma", "monitoring", "notifications", "proxy", "json"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["kumaclient"]

[tool.pytest.ini_options]
addopts = "-ra"
