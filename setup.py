from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="braw2ilpd",
    version="0.1.0",
    author="braw2ilpd developers",
    author_email="developer@example.com",
    description="Extract ILPD lens projection data from Blackmagic RAW immersive clips",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["braw2ilpd", "braw2ilpd.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    install_requires=[
        "typer>=0.9.0",
        "rich>=13.4.0",
        "pydantic>=2.4.0",
        "structlog>=23.1.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "braw2ilpd=braw2ilpd.cli:run",
        ],
    },
)
