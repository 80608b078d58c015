"""
Setup script for devops-pathfinder.

Pathfinder is a terminal DevOps roadmap tracker. It serves three roles:

1. Progress Tracker - Check off skills and unlock roadmap stages in order
2. Project Guide - Milestone projects, hints, resources and cheat sheets
3. AI Mentor - On-demand task guides and troubleshooting scenarios (Gemini)

The 'pathfinder' command is the entry point.
"""

from setuptools import find_packages, setup

setup(
    name="devops-pathfinder",
    version="1.0.0",
    description="Skill-gated DevOps roadmap tracker with an AI mentor",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    author="DevOps Pathfinder",
    packages=find_packages(include=["pathfinder", "pathfinder.*"]),
    py_modules=["config"],
    package_data={"pathfinder.data": ["*.yaml"]},
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        # CLI
        "typer>=0.9.0",
        "rich>=13.0.0",
        # Config & Validation
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        # HTTP
        "httpx>=0.25.0",
        # Content
        "pyyaml>=6.0",
        # Logging
        "loguru>=0.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "pytest-cov>=4.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "pathfinder=pathfinder.cli.main:run",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
    ],
    keywords="devops roadmap learning cli gemini",
)
