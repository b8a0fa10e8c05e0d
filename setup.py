from setuptools import setup, find_packages

setup(
    name="fstat",
    version="1.1.0",
    packages=find_packages(exclude=["*.tests", "*.tests.*", "tests"]),
    description="Get info for a list of files across multiple directories.",
    install_requires=[
        "rich",
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "fstat=fstat.cli:main",
        ]
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
