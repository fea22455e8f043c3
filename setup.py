"""
Setup script for quizforge.

quizforge is the quiz formatting core of an AI quiz generator. It serves
three roles:

1. Formatter - Normalize raw or legacy quiz data into canonical quizzes
2. Validator - Collect validation errors and score quiz quality
3. Exporter - Render JSON, CSV, Moodle GIFT and plain text exports

The 'quizforge' command is the command line entry point.
"""

from setuptools import find_packages, setup

setup(
    name="quizforge",
    version="1.0.0",
    description="Quiz formatting, validation and export for AI generated quizzes",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    author="QuizForge",
    packages=find_packages(include=["quizforge", "quizforge.*"]),
    python_requires=">=3.10",
    install_requires=[
        # CLI
        "typer>=0.12.0",
        "rich>=13.0.0",
        # Config & Validation
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        # Logging
        "loguru>=0.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "quizforge=quizforge.cli.main:run",
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
        "Topic :: Education :: Testing",
    ],
    keywords="quiz gift moodle export validation education",
)
