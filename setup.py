from setuptools import setup, find_packages

setup(
    name="ctrue-tools",
    version="0.1.0",
    description="CTRUE trigger-class analysis: B/E/A/C event classification, run weighting and efficiency fits",
    packages=find_packages(),
    python_requires=">=3.11",
    install_requires=[
        "numpy>=1.24",
        "pandas>=2.0,<3.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "ctrue-efficiency=ctrue_tools.estimate_efficiency:main",
        ],
    },
)
