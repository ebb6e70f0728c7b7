from setuptools import setup, find_packages

setup(
    name="smarttable",
    version="0.1.0",
    description="SmartTable — tracked key/value store with an undo log",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "smarttable=smarttable.main:main",
        ],
    },
)
