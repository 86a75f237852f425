from setuptools import setup, find_packages

setup(
    name="contentgen",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "pydantic>=2",
        "requests",
        "openai",
        "python-dotenv",
    ],
    extras_require={
        "dev": [
            "pytest",
            "responses",
            "pytest-cov",
            "httpx",
        ],
    },
    entry_points={
        "console_scripts": [
            # one batch: fetch pending → generate → write → report
            "contentgen-run = contentgen.taskmanager.cli:main",
        ],
    },
)
