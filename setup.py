# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="bumpguard",
    version="1.0.0",
    description="Attributes repository changes to the modules of a multi-module build and checks their versions",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["bumpguard*"]),
    python_requires=">=3.9",
    install_requires=[
        "requests",  # Remote repository metadata queries
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'bumpguard=bumpguard.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
