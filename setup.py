"""Packaging for IntervalFit.

Install for development:
    pip install -e ".[test]"

Build a macOS .app bundle:
    pip install py2app
    python setup.py py2app
"""

import sys

from setuptools import setup, find_packages

APP = ["main.py"]
DATA_FILES = []
OPTIONS = {
    "argv_emulation": False,
    "iconfile": None,
    "plist": {
        "CFBundleName": "IntervalFit",
        "CFBundleDisplayName": "IntervalFit",
        "CFBundleIdentifier": "com.intervalfit.app",
        "CFBundleVersion": "0.1.0",
        "CFBundleShortVersionString": "0.1.0",
        "NSHighResolutionCapable": True,
        "LSMinimumSystemVersion": "13.0",
    },
}

# py2app is only needed for the bundle build
py2app_kwargs = {}
if "py2app" in sys.argv:
    py2app_kwargs = {
        "app": APP,
        "data_files": DATA_FILES,
        "options": {"py2app": OPTIONS},
        "setup_requires": ["py2app"],
    }

setup(
    name="IntervalFit",
    version="0.1.0",
    description="Interval timer and workout log",
    packages=find_packages(include=["intervalfit", "intervalfit.*"]),
    python_requires=">=3.10",
    install_requires=[
        "PyQt6>=6.5",
        "SQLAlchemy>=2.0",
        "numpy>=1.24",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "gui_scripts": ["intervalfit = intervalfit.__main__:main"],
    },
    **py2app_kwargs,
)
