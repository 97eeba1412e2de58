from __future__ import annotations

from pathlib import Path

from setuptools import find_packages, setup

ROOT = Path(__file__).parent.resolve()

setup(
    name="release-upgrade-path",
    version="0.1.0",
    description=(
        "Works out which releases an installation has to pass through to reach "
        "a supported version, and where to migrate between editions."
    ),
    long_description=(ROOT / "README.md").read_text(encoding="utf-8"),
    long_description_content_type="text/markdown",
    license="GPL-2.0-only",
    python_requires=">=3.10",
    packages=find_packages(where=".", exclude=("tests", "tests.*")),
    include_package_data=True,
    zip_safe=False,
    extras_require={
        "test": ["pytest"],
    },
)
