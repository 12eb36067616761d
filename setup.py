"""
Setup script for the Conan bridge

Runtime Requirements:
- Conan 1.x client (found on PATH, or set CONAN to the executable)

Using conan dependencies in your own extension:
- Describe the install in conan.yaml (profile, build policy, settings, options)
- Use conan_bridge.extension.ConanBuildExt as build_ext in your setup.py
- Or print link directives for another build tool: conan-bridge install --config conan.yaml
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
    name="conan-bridge",
    version="0.4.0",
    description="Typed conan install/build/package command lines and build info reports",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["conan_bridge", "conan_bridge.*"]),
    entry_points={
        "console_scripts": [
            "conan-bridge=conan_bridge.main:main",
        ],
    },
    zip_safe=False,
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2.0",
        "PyYAML>=6.0",
        "setuptools>=61.0",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
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
        "Topic :: Software Development :: Build Tools",
    ],
)
