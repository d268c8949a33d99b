from pathlib import Path

from setuptools import find_namespace_packages, setup

setup(
    name="beamz",
    version="0.1.0",
    description="Driver keeping a persistent escript compiler process alive.",
    long_description=(Path(__file__).parent / "README.md").read_text(encoding="utf-8"),
    long_description_content_type="text/markdown",
    python_requires=">=3.11",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["beamz", "beamz.*"]),
    package_data={"beamz": ["templates/*.erl"]},
    entry_points={"console_scripts": ["beamz=beamz.cli:main"]},
    install_requires=["appdirs", "cyclopts", "pydantic>=2.10", "PyYAML", "rich"],
    extras_require={"test": ["pytest"]},
    classifiers=[
        "Development Status :: 3 - Alpha",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
)
