from setuptools import setup, find_packages


setup(
    name="crsfcrc",
    version="0.1",
    packages=find_packages(),
    description="Configurable CRC-8/DVB-S2 engine for validating serial receiver frames.",
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": [
            "crcmod>=1.7",
        ],
    },
    entry_points={
        "console_scripts": [
            "crsfcrc=crsfcrc.cli:main",
        ]
    },
)
