# setup.py
from setuptools import setup, find_packages

setup(
    name="logrelay",
    version="0.1.0",
    description="Leveled, structured logging with pluggable handlers and formatters",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_packages(where="src"),  # Encuentra automáticamente el paquete 'logrelay'
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
