from setuptools import find_packages, setup

setup(
    name="rotor-inflow",
    version="0.1.0",
    description="Harmonic (Glauert-type) induced inflow model for helicopter rotor flight dynamics",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "PyYAML",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "rotor-inflow=rotor_inflow.cli.run_inflow:main",
        ],
    },
)
