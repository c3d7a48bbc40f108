"""
Setup for the Pijul development environment tool

Runtime Requirements:
- Nix (nix-shell on PATH) for the nix provisioner

The tool resolves Pijul's native build dependencies for the current host:
- xxHash, zstd, libsodium, openssl, pkgconfig on every host
- CoreServices, Security, SystemConfiguration frameworks on macOS

Usage:
- pijul-devenv resolve
- pijul-devenv shell --run "cargo build"
"""

from pathlib import Path
from setuptools import setup, find_packages

# Read README for long description
readme_path = Path("README.md")
long_description = ""
if readme_path.exists():
    with open(readme_path, "r", encoding="utf-8") as f:
        long_description = f.read()

setup(
    name="pijul-devenv",
    version="1.0.0",
    description="Resolves and provisions the native build environment of Pijul",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["build_env", "build_env.*"]),
    package_data={
        "build_env": [
            "config/*.yaml",
        ]
    },
    include_package_data=True,
    entry_points={
        "console_scripts": [
            "pijul-devenv=build_env.main:main",
        ],
    },
    zip_safe=False,
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest",
            "pytest-cov",
            "black",
            "flake8",
            "mypy",
        ]
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Operating System :: MacOS",
        "Operating System :: POSIX :: Linux",
        "Topic :: Software Development :: Build Tools",
    ],
)
