from setuptools import setup, find_packages

setup(
    name="pfconvert",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "pandas>=1.5",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "pfconvert=pfconvert.convert:main",
        ],
    },
    description="Convert PostFinance statement exports into FreeAgent bank import CSVs",
    python_requires=">=3.8",
)
