from setuptools import find_packages, setup

setup(
    name="sylburst",
    version="0.1.0",
    description="Syllable and vocal burst segmentation of audio amplitude envelopes.",
    packages=find_packages(include=["sylburst", "sylburst.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy",
        "scipy",
        "pandas",
        "librosa",
        "soundfile",
        "matplotlib",
        "click>=8.2",
        "rich",
        "pydantic>=2",
        "toml",
        "tabulate",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-mock",
        ],
    },
    entry_points={
        "console_scripts": [
            "sylburst=sylburst.cli.main:cli",
        ],
    },
)
