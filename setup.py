"""Setup file for the contact-sheet project."""

from setuptools import find_packages, setup

setup(
    name="contact-sheet",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "numpy",
        "opencv-python",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["contact-sheet=contact_sheet.cli:main"],
    },
    python_requires=">=3.10",
)
