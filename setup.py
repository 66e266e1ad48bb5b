from setuptools import setup, find_packages

setup(
    name="qa-harness",
    version="0.1.0",
    description="Browser session, wait and API client infrastructure for test suites",
    author="QA Team",
    packages=find_packages(include=["config", "config.*", "qa_core", "qa_core.*", "qa_tools", "qa_tools.*"]),
    package_data={"config": ["templates/env.template"]},
    install_requires=[
        "pydantic>=2.0.0",
        "requests>=2.28.0",
        "selenium>=4.0.0",
        "webdriver-manager>=3.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "black>=22.0.0",
            "isort>=5.0.0",
        ],
    },
    python_requires=">=3.8",
)
