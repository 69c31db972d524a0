# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="termscout",
    version="1.0.0",
    description="Locate every occurrence of a spreadsheet word list across directory trees",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["termscout", "termscout.*"]),
    python_requires=">=3.9",
    install_requires=[
        "openpyxl>=3.1",  # Excel word lists and .xlsx reports
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        'console_scripts': [
            'termscout=termscout.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
