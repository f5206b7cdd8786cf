# setup.py
from setuptools import setup, find_packages

setup(
    name="vmdep",
    version="0.1.0",
    description="Dependency graph discovery for Velocity template trees",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'vmdep=vmdep.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
