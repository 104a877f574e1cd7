from setuptools import setup, find_packages

setup(
    name="roadstop",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "python-dotenv",
        "pydantic>=2",
        "pydantic-settings",
        "httpx",
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.8",
)
