# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="dartsweep",
    version="0.1.0",
    description="Find and optionally delete Dart files that no entry point can reach",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["dartsweep*"]),
    python_requires=">=3.9",
    install_requires=[
        "PyYAML",  # pubspec.yaml parsing
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        'console_scripts': [
            'dartsweep=dartsweep.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
