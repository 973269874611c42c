from setuptools import setup, find_packages

setup(
    name="brdsim",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy",
        "torch",
        "matplotlib",
        "tabulate",
        "tqdm",
        "pandas",
    ],
    extras_require={
        "tests": [
            "pytest",
            "hypothesis",
        ],
    },
    entry_points={
        "console_scripts": [
            "brdsim-simulate=brdsim.cli:main",
        ],
    },
)
