from setuptools import find_packages, setup

setup(
    name="StrainScan",
    version="0.1.0",
    description="Estimate the percent elongation of a geological transect from measured fault offsets, \
    with a fractal frequency-size correction for faults too small to observe.",
    packages=find_packages(where="src"),  # Look for packages in the 'src' directory
    package_dir={"": "src"},  # Root package directory is 'src'
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "scipy",
        "pandas",
        "matplotlib",
    ],
    extras_require={
        "test": ["pytest"],
    },
    package_data={
        "strainscan.config": ["*.json"],
    },
    include_package_data=True,
)
